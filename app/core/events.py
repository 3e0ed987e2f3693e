"""
@file: events.py
@description:
Diagnostic event emission for the data layer.

The registry, wiring engine, lifecycle manager and stats reporter never log
directly. They emit named DiagnosticEvents to a DiagnosticEmitter, so the
logging strategy can change without touching control flow.

@dependencies:
- app.core.logger: For the default logging emitter

@notes:
- LoggingDiagnostics is the default emitter and maps each event to a log level.
- Any object with a matching `emit` method satisfies the DiagnosticEmitter protocol.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from app.core.logger import setup_logger


class DiagnosticEvent(str, Enum):
    """Named events emitted while bootstrapping the data layer."""
    MODEL_REGISTERED = "registry.model_registered"
    WIRING_STARTED = "wiring.started"
    MODEL_ASSOCIATED = "wiring.model_associated"
    MODEL_WITHOUT_ASSOCIATIONS = "wiring.model_without_associations"
    WIRING_COMPLETED = "wiring.completed"
    INITIALIZE_STARTED = "lifecycle.initialize_started"
    CONNECTION_ESTABLISHED = "lifecycle.connection_established"
    CONNECTION_FAILED = "lifecycle.connection_failed"
    SCHEMA_VERIFICATION_STARTED = "lifecycle.schema_verification_started"
    SCHEMA_VERIFIED = "lifecycle.schema_verified"
    SCHEMA_VERIFICATION_FAILED = "lifecycle.schema_verification_failed"
    INITIALIZED = "lifecycle.initialized"
    STATS_REPORTED = "stats.reported"
    STATS_FAILED = "stats.failed"


EVENT_LEVELS: Dict[DiagnosticEvent, int] = {
    DiagnosticEvent.MODEL_REGISTERED: logging.DEBUG,
    DiagnosticEvent.WIRING_STARTED: logging.INFO,
    DiagnosticEvent.MODEL_ASSOCIATED: logging.INFO,
    DiagnosticEvent.MODEL_WITHOUT_ASSOCIATIONS: logging.WARNING,
    DiagnosticEvent.WIRING_COMPLETED: logging.DEBUG,
    DiagnosticEvent.INITIALIZE_STARTED: logging.INFO,
    DiagnosticEvent.CONNECTION_ESTABLISHED: logging.INFO,
    DiagnosticEvent.CONNECTION_FAILED: logging.ERROR,
    DiagnosticEvent.SCHEMA_VERIFICATION_STARTED: logging.INFO,
    DiagnosticEvent.SCHEMA_VERIFIED: logging.INFO,
    DiagnosticEvent.SCHEMA_VERIFICATION_FAILED: logging.WARNING,
    DiagnosticEvent.INITIALIZED: logging.INFO,
    DiagnosticEvent.STATS_REPORTED: logging.INFO,
    DiagnosticEvent.STATS_FAILED: logging.ERROR,
}

EVENT_MESSAGES: Dict[DiagnosticEvent, str] = {
    DiagnosticEvent.MODEL_REGISTERED: "Registered model",
    DiagnosticEvent.WIRING_STARTED: "Establishing associations between models",
    DiagnosticEvent.MODEL_ASSOCIATED: "Established associations",
    DiagnosticEvent.MODEL_WITHOUT_ASSOCIATIONS: "Model defines no associations",
    DiagnosticEvent.WIRING_COMPLETED: "Association graph configured",
    DiagnosticEvent.INITIALIZE_STARTED: "Initializing database",
    DiagnosticEvent.CONNECTION_ESTABLISHED: "Database connection established",
    DiagnosticEvent.CONNECTION_FAILED: "Could not connect to the database",
    DiagnosticEvent.SCHEMA_VERIFICATION_STARTED: "Development mode: verifying models",
    DiagnosticEvent.SCHEMA_VERIFIED: "Models synchronized with the database",
    DiagnosticEvent.SCHEMA_VERIFICATION_FAILED: "Schema verification failed",
    DiagnosticEvent.INITIALIZED: "Database initialized",
    DiagnosticEvent.STATS_REPORTED: "Database statistics",
    DiagnosticEvent.STATS_FAILED: "Could not collect database statistics",
}


class DiagnosticEmitter(Protocol):
    """Receiver for diagnostic events."""

    def emit(self, event: DiagnosticEvent, error: Optional[BaseException] = None, **fields: Any) -> None:
        ...


class LoggingDiagnostics:
    """
    Emitter that writes each event to a logger.

    Fields are rendered as sorted key=value pairs after the event message.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or setup_logger("app.diagnostics")

    def emit(self, event: DiagnosticEvent, error: Optional[BaseException] = None, **fields: Any) -> None:
        level = EVENT_LEVELS.get(event, logging.INFO)
        message = EVENT_MESSAGES.get(event, event.value)
        if fields:
            details = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
            message = f"{message} [{event.value}] {details}"
        else:
            message = f"{message} [{event.value}]"
        if error is not None:
            message = f"{message} error={error!r}"
        self.logger.log(level, message)


__all__ = [
    "DiagnosticEvent",
    "DiagnosticEmitter",
    "LoggingDiagnostics",
    "EVENT_LEVELS",
    "EVENT_MESSAGES",
]
