"""
SQLAlchemy Metadata and Mapper Registry Module.

Every DatabaseConnection owns its own MetaData and mapper registry, so tests and
processes can build isolated model graphs. This module provides the factory for
both, with the naming convention shared by all shop tables.

Models are mapped imperatively: each entity factory defines a Table on the
connection's metadata and maps a freshly created class through the registry.
"""

from typing import Tuple

from sqlalchemy import MetaData
from sqlalchemy.orm import registry

# Deterministic constraint names across dialects
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Table options carried over from the MySQL deployment; other dialects ignore them
TABLE_OPTIONS = {
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


def create_mapper_registry() -> Tuple[MetaData, registry]:
    """
    Create a MetaData object and a mapper registry bound to it.

    Returns:
        Tuple[MetaData, registry]: The shared metadata and its mapper registry.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
    mapper_registry = registry(metadata=metadata)
    return metadata, mapper_registry
