"""
@file: errors.py
@description:
Exception hierarchy for the shop data-access layer.

Errors map to the bootstrap phase in which they arise:
- ConfigurationError: bad or missing settings, duplicate model registration
- AssociationError: faults while wiring the relationship graph
- DatabaseConnectionError: authentication/network failure talking to the store
- VerificationError: the non-destructive schema check failed
- StatsError: a count query failed while building the summary
- StartupError: initialization cannot proceed

@notes:
- Only ConfigurationError, AssociationError and StartupError ever reach the host
  application. The others are caught where the operation is issued and turned
  into a boolean or None result.
"""


class DataLayerError(Exception):
    """Base class for all data-layer errors."""
    pass


class ConfigurationError(DataLayerError):
    """Invalid configuration or registry usage; fatal at startup."""
    pass


class AssociationError(ConfigurationError):
    """The association graph could not be built."""
    pass


class DatabaseConnectionError(DataLayerError):
    """The store could not be reached or rejected the credentials."""
    pass


class VerificationError(DataLayerError):
    """Structural verification of the schema failed."""
    pass


class StatsError(DataLayerError):
    """A row-count query failed."""
    pass


class StartupError(DataLayerError):
    """The data layer could not be initialized."""
    pass


__all__ = [
    "DataLayerError",
    "ConfigurationError",
    "AssociationError",
    "DatabaseConnectionError",
    "VerificationError",
    "StatsError",
    "StartupError",
]
