"""
Services Package for the shop data layer.

This package holds read-only operational services built on top of the model
registry, currently the database stats reporter.
"""
