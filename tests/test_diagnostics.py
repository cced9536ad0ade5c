from __future__ import annotations

import logging

from shipment_packer.diagnostics import (
    DiagnosticCategory,
    LoggingDiagnosticsSink,
    MerchantLogSink,
)


def test_logging_sink_levels(caplog) -> None:
    sink = LoggingDiagnosticsSink()

    with caplog.at_level(logging.WARNING, logger="shipment_packer.diagnostics"):
        sink.log("SHOP1", DiagnosticCategory.CAPACITY_EXHAUSTED, "too many boxes")
        sink.log("SHOP1", DiagnosticCategory.UNIT_TOO_LARGE, "sofa does not fit")

    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.WARNING, logging.ERROR]
    assert "[SHOP1] unit-too-large: sofa does not fit" in caplog.text


def test_merchant_log_filters_by_store() -> None:
    sink = MerchantLogSink()
    sink.log("A", DiagnosticCategory.BOX_CONFIGURATION, "no volume")
    sink.log("B", DiagnosticCategory.DEGENERATE_UNIT, "flat item")
    sink.log("A", DiagnosticCategory.UNIT_TOO_LARGE, "too heavy")

    entries = sink.entries_for("A")

    assert [e.message for e in entries] == ["no volume", "too heavy"]
    assert all(e.created_at is not None for e in entries)


def test_merchant_log_forwards() -> None:
    downstream = MerchantLogSink()
    sink = MerchantLogSink(forward_to=downstream)

    sink.log("A", DiagnosticCategory.EMPTY_SHIPMENT, "nothing to ship")

    assert downstream.categories() == [DiagnosticCategory.EMPTY_SHIPMENT]
    assert sink.categories() == [DiagnosticCategory.EMPTY_SHIPMENT]
