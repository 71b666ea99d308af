"""
Observability Module

Provides:
- Structured logging with correlation IDs (database, model, operation, uid)
"""

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    with_correlation,
    StructuredFormatter,
    HumanReadableFormatter,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "with_correlation",
    "StructuredFormatter",
    "HumanReadableFormatter",
]
