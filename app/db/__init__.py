"""
Database Package for the shop data layer.

This package handles all database-related operations including:
- The shared pooled connection (session.py)
- The model registry and association wiring (registry.py, associations.py)
- Connection lifecycle: connect, verify, report (lifecycle.py)
- Composition of the whole layer for the host application (database.py)
"""
