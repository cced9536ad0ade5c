"""Merchant-scoped diagnostics emitted when packing cannot proceed."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class DiagnosticCategory(str, Enum):
    BOX_CONFIGURATION = "box-configuration"
    EMPTY_SHIPMENT = "empty-shipment"
    UNIT_TOO_LARGE = "unit-too-large"
    DEGENERATE_UNIT = "degenerate-unit"
    CAPACITY_EXHAUSTED = "capacity-exhausted"


class DiagnosticsSink:
    """Receives (store, category, message) entries."""

    def log(self, store: str, category: DiagnosticCategory, message: str) -> None:
        raise NotImplementedError


class LoggingDiagnosticsSink(DiagnosticsSink):
    """Forwards entries to the standard logger. Capacity exhaustion is a warning."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.logger = log or logger

    def log(self, store: str, category: DiagnosticCategory, message: str) -> None:
        level = logging.WARNING if category == DiagnosticCategory.CAPACITY_EXHAUSTED else logging.ERROR
        self.logger.log(level, "[%s] %s: %s", store, DiagnosticCategory(category).value, message)


class MerchantLogEntry(BaseModel):
    store: str
    category: DiagnosticCategory
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MerchantLogSink(DiagnosticsSink):
    """
    In-memory merchant log.

    Keeps every entry for later inspection and optionally forwards it to
    another sink (typically the logging sink).
    """

    def __init__(self, forward_to: Optional[DiagnosticsSink] = None):
        self.entries: list[MerchantLogEntry] = []
        self.forward_to = forward_to

    def log(self, store: str, category: DiagnosticCategory, message: str) -> None:
        self.entries.append(MerchantLogEntry(store=store, category=category, message=message))
        if self.forward_to is not None:
            self.forward_to.log(store, category, message)

    def entries_for(self, store: str) -> list[MerchantLogEntry]:
        return [e for e in self.entries if e.store == store]

    def categories(self) -> list[DiagnosticCategory]:
        return [e.category for e in self.entries]
