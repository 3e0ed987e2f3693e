"""
Schemas Package for the shop data layer.

This package contains Pydantic models used for:
- Response serialization of the health and stats endpoints
- Data transfer objects returned by the data layer
"""

from app.schemas.stats import DatabaseStats

__all__ = ["DatabaseStats"]
