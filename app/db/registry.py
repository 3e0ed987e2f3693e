"""
Model Registry Module.

The registry is the explicit, caller-constructed home of every model definition
in the process. It holds the shared DatabaseConnection and an ordered mapping of
entity name to ModelDefinition, plus the association edges declared while wiring.

Typical bootstrap:

    connection = DatabaseConnection.from_settings(settings)
    registry = ModelRegistry(connection)
    registry.register("Product", define_product)
    ...
    wire_all(registry)
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from sqlalchemy import Table
from sqlalchemy import types as sa_types

from app.core.errors import AssociationError, ConfigurationError
from app.core.events import DiagnosticEmitter, DiagnosticEvent, LoggingDiagnostics
from app.db.session import DatabaseConnection

BELONGS_TO = "belongs_to"
HAS_MANY = "has_many"


@dataclass(frozen=True)
class Association:
    """One declared edge of the association graph."""
    source: str
    target: str
    kind: str
    attribute: str
    foreign_key: str
    inverse: Optional[str] = None


class ModelDefinition:
    """
    Schema handle for one entity: its name, mapped class and table.

    Definitions that also implement `associate` satisfy the Associable protocol
    and take part in wiring.
    """

    def __init__(self, name: str, model: type, table: Table):
        self.name = name
        self.model = model
        self.table = table

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} table={self.table.name}>"


@runtime_checkable
class Associable(Protocol):
    """Capability of declaring relationships to peer models."""

    def associate(self, registry: "ModelRegistry") -> None:
        ...


ModelFactory = Callable[[DatabaseConnection, Any], ModelDefinition]


class ModelRegistry:
    """
    Named collection of model definitions sharing one connection.

    Names are unique for the lifetime of the registry. Iteration follows
    registration order.
    """

    def __init__(self, connection: DatabaseConnection, diagnostics: Optional[DiagnosticEmitter] = None):
        self._connection = connection
        self._models: Dict[str, ModelDefinition] = {}
        self._associations: List[Association] = []
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.wired = False

    @property
    def connection(self) -> DatabaseConnection:
        return self._connection

    def register(self, name: str, factory: ModelFactory) -> ModelDefinition:
        """
        Instantiate a model definition and store it under `name`.

        Args:
            name: Unique entity name, e.g. "Product".
            factory: Callable receiving the shared connection and the type-mapping
                module (sqlalchemy.types) and returning a ModelDefinition.

        Returns:
            ModelDefinition: The stored definition.

        Raises:
            ConfigurationError: If the name is taken or wiring already happened.
        """
        if self.wired:
            raise ConfigurationError(f"Cannot register model '{name}' after associations were wired")
        if name in self._models:
            raise ConfigurationError(f"Model '{name}' is already registered")

        definition = factory(self._connection, sa_types)
        if not isinstance(definition, ModelDefinition):
            raise ConfigurationError(
                f"Factory for model '{name}' returned {type(definition).__name__}, expected a ModelDefinition"
            )

        self._models[name] = definition
        self.diagnostics.emit(DiagnosticEvent.MODEL_REGISTERED, model=name, table=definition.table.name)
        return definition

    def get(self, name: str) -> Optional[ModelDefinition]:
        return self._models.get(name)

    def __getitem__(self, name: str) -> ModelDefinition:
        try:
            return self._models[name]
        except KeyError:
            raise ConfigurationError(f"Model '{name}' is not registered") from None

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def names(self) -> List[str]:
        return list(self._models)

    def items(self) -> List[Tuple[str, ModelDefinition]]:
        return list(self._models.items())

    @property
    def associations(self) -> List[Association]:
        return list(self._associations)

    def associations_of(self, name: str) -> List[Association]:
        return [edge for edge in self._associations if edge.source == name]

    def add_association(self, edge: Association) -> None:
        """
        Record a declared edge.

        Raises:
            AssociationError: If the source already declared this attribute.
        """
        for existing in self._associations:
            if existing.source == edge.source and existing.attribute == edge.attribute:
                raise AssociationError(
                    f"Association '{edge.source}.{edge.attribute}' is already declared"
                )
        self._associations.append(edge)


__all__ = [
    "Association",
    "Associable",
    "ModelDefinition",
    "ModelFactory",
    "ModelRegistry",
    "BELONGS_TO",
    "HAS_MANY",
]
