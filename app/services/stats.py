"""
@file: stats.py
@description:
Stats reporter for the shop data layer. Counts the rows of every shop entity
concurrently and aggregates them into a DatabaseStats summary.

Key features:
- One `SELECT count(*)` per entity, issued concurrently with asyncio.gather
- Each count checks out its own pooled connection
- All-or-nothing: if any count fails the whole summary is discarded

@dependencies:
- asyncio: For concurrent count queries
- app.db.registry: For looking up the entity tables
- app.schemas.stats: For the summary schema
- app.core.events: For diagnostic output

@notes:
- Safe to call repeatedly and concurrently; no state is shared between calls.
- Errors never propagate to the caller; a failed summary is reported as None.
"""

import asyncio
from typing import Dict, Optional

from app.core.errors import StatsError
from app.core.events import DiagnosticEmitter, DiagnosticEvent
from app.db.registry import ModelRegistry
from app.schemas.stats import DatabaseStats

# Summary field -> registered model name, in reporting order
STATS_FIELDS = (
    ("users", "User"),
    ("products", "Product"),
    ("categories", "Category"),
    ("orders", "Order"),
    ("order_lines", "OrderLine"),
)


async def _count_model(registry: ModelRegistry, model_name: str) -> int:
    definition = registry[model_name]
    try:
        return await registry.connection.count(definition.table)
    except Exception as e:
        raise StatsError(f"Counting {model_name} rows failed: {e}") from e


async def get_database_stats(
    registry: ModelRegistry,
    diagnostics: Optional[DiagnosticEmitter] = None,
) -> Optional[DatabaseStats]:
    """
    Collect row counts for every shop entity.

    Args:
        registry: A wired registry containing User, Product, Category, Order and OrderLine.
        diagnostics: Emitter for the summary or the failure; defaults to the registry's.

    Returns:
        Optional[DatabaseStats]: The summary, or None if any count failed.
    """
    diagnostics = diagnostics or registry.diagnostics

    results = await asyncio.gather(
        *(_count_model(registry, model_name) for _, model_name in STATS_FIELDS),
        return_exceptions=True,
    )

    counts: Dict[str, int] = {}
    for (field, model_name), result in zip(STATS_FIELDS, results):
        if isinstance(result, BaseException):
            error = result if isinstance(result, StatsError) else StatsError(str(result))
            diagnostics.emit(DiagnosticEvent.STATS_FAILED, error=error, model=model_name)
            return None
        counts[field] = result

    stats = DatabaseStats(**counts)
    diagnostics.emit(DiagnosticEvent.STATS_REPORTED, **stats.model_dump(by_alias=True))
    return stats
