"""
Association Wiring Module.

Builds the relationship graph between registered models. Each model declares its
own side of a relationship from its `associate` method with `belongs_to` or
`has_many`; `wire_all` calls every `associate` once all models are registered and
then configures the mapper registry so that missing peers or one-sided
relationships fail at startup instead of on the first query.

Declaration order across models does not matter: peers are looked up by name in
a registry that is already complete, and SQLAlchemy resolves `back_populates`
pairs only when the registry is configured.
"""

from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import relationship

from app.core.errors import AssociationError
from app.core.events import DiagnosticEmitter, DiagnosticEvent
from app.db.registry import BELONGS_TO, HAS_MANY, Associable, Association, ModelDefinition, ModelRegistry


def _column(definition: ModelDefinition, column_name: str):
    try:
        return definition.table.c[column_name]
    except KeyError:
        raise AssociationError(
            f"Table '{definition.table.name}' has no column '{column_name}'"
        ) from None


def _declare(
    registry: ModelRegistry,
    source: ModelDefinition,
    target_name: str,
    kind: str,
    attribute: str,
    foreign_key: str,
    inverse: Optional[str],
) -> Association:
    target = registry[target_name]
    fk_column = _column(source if kind == BELONGS_TO else target, foreign_key)

    edge = Association(
        source=source.name,
        target=target.name,
        kind=kind,
        attribute=attribute,
        foreign_key=foreign_key,
        inverse=inverse,
    )
    registry.add_association(edge)

    inspect(source.model).add_property(
        attribute,
        relationship(target.model, back_populates=inverse, foreign_keys=[fk_column]),
    )
    return edge


def belongs_to(
    registry: ModelRegistry,
    source: ModelDefinition,
    target: str,
    attribute: str,
    foreign_key: str,
    inverse: Optional[str] = None,
) -> Association:
    """
    Declare that `source` references one `target` row through `foreign_key`.

    Args:
        registry: The registry holding both models.
        source: The declaring model; owns the foreign key column.
        target: Name of the referenced model.
        attribute: Attribute added to the source class, e.g. "category".
        foreign_key: Column of the source table, e.g. "category_id".
        inverse: Attribute the target declares for the other side.

    Returns:
        Association: The recorded edge.
    """
    return _declare(registry, source, target, BELONGS_TO, attribute, foreign_key, inverse)


def has_many(
    registry: ModelRegistry,
    source: ModelDefinition,
    target: str,
    attribute: str,
    foreign_key: str,
    inverse: Optional[str] = None,
) -> Association:
    """
    Declare that `source` owns many `target` rows referencing it via `foreign_key`.

    The foreign key column lives on the target table.
    """
    return _declare(registry, source, target, HAS_MANY, attribute, foreign_key, inverse)


def _check_bidirectional(registry: ModelRegistry) -> None:
    edges = registry.associations
    for edge in edges:
        if edge.inverse is None:
            continue
        expected_kind = HAS_MANY if edge.kind == BELONGS_TO else BELONGS_TO
        matched = any(
            other.source == edge.target
            and other.target == edge.source
            and other.attribute == edge.inverse
            and other.inverse == edge.attribute
            and other.kind == expected_kind
            for other in edges
        )
        if not matched:
            raise AssociationError(
                f"'{edge.source}.{edge.attribute}' expects '{edge.target}.{edge.inverse}' "
                f"but {edge.target} does not declare it"
            )


def wire_all(registry: ModelRegistry, diagnostics: Optional[DiagnosticEmitter] = None) -> None:
    """
    Invoke `associate` on every registered model, then validate the graph.

    Must run exactly once per registry, after every model is registered.

    Raises:
        AssociationError: If the registry was already wired, a peer is missing,
            a relationship is declared twice or a pair is one-sided.
    """
    diagnostics = diagnostics or registry.diagnostics
    if registry.wired:
        raise AssociationError("Associations have already been wired for this registry")
    registry.wired = True

    diagnostics.emit(DiagnosticEvent.WIRING_STARTED, models=len(registry))
    for name, definition in registry.items():
        if isinstance(definition, Associable):
            definition.associate(registry)
            diagnostics.emit(
                DiagnosticEvent.MODEL_ASSOCIATED,
                model=name,
                edges=len(registry.associations_of(name)),
            )
        else:
            diagnostics.emit(DiagnosticEvent.MODEL_WITHOUT_ASSOCIATIONS, model=name)

    _check_bidirectional(registry)

    try:
        registry.connection.mapper_registry.configure()
    except SQLAlchemyError as e:
        raise AssociationError(f"Failed to configure model relationships: {e}") from e

    diagnostics.emit(DiagnosticEvent.WIRING_COMPLETED, edges=len(registry.associations))


__all__ = ["belongs_to", "has_many", "wire_all"]
