"""Application DTOs (no ORM dependency)."""

from itam.application.dtos.decision import (
    AuditRecord,
    Decision,
    Denied,
    Granted,
    OperationContext,
)
from itam.application.dtos.seed import SeedReport

__all__ = [
    "AuditRecord",
    "Decision",
    "Denied",
    "Granted",
    "OperationContext",
    "SeedReport",
]
