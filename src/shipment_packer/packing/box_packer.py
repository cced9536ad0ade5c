# src/shipment_packer/packing/box_packer.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from shipment_packer.diagnostics import DiagnosticCategory, DiagnosticsSink, LoggingDiagnosticsSink
from shipment_packer.errors import (
    ConfigurationError,
    DegenerateUnitError,
    EmptyShipmentError,
    UnitTooLargeError,
)
from shipment_packer.metrics import compute_metrics
from shipment_packer.models import BoxPackingResult, BoxTemplate, PackageDescriptor, ShippingUnit

logger = logging.getLogger(__name__)

# Only this share of a bin's remaining volume counts as usable when accepting a unit.
# Frozen: changing it changes box counts for every merchant.
PACKING_SLACK_FACTOR = 0.75

DEFAULT_MAX_BINS = 100
DEFAULT_STORE = "DEFAULT"


@dataclass
class PackingBin:
    """Capacity left in one opened box."""

    remaining_volume: float
    remaining_weight: float
    accumulated_weight: float = 0.0
    unit_count: int = 0

    @classmethod
    def open(cls, template: BoxTemplate) -> "PackingBin":
        return cls(remaining_volume=template.volume, remaining_weight=float(template.max_weight))

    def accepts(self, unit: ShippingUnit) -> bool:
        return (
            self.remaining_volume * PACKING_SLACK_FACTOR >= unit.volume
            and self.remaining_weight >= unit.weight
        )

    def place(self, unit: ShippingUnit) -> None:
        self.remaining_volume -= unit.volume
        self.remaining_weight -= unit.weight
        self.accumulated_weight += unit.weight
        self.unit_count += 1


def _fail(sink: DiagnosticsSink, store: str, category: DiagnosticCategory, exc: Exception) -> Exception:
    sink.log(store, category, str(exc))
    return exc


def validate_template(template: BoxTemplate, store: str, sink: DiagnosticsSink) -> None:
    # Each dimension must be positive, not only their product
    if min(template.width, template.length, template.height) <= 0 or template.max_weight <= 0:
        raise _fail(sink, store, DiagnosticCategory.BOX_CONFIGURATION, ConfigurationError(
            f"Box configuration has no usable capacity "
            f"(volume={template.volume}, max_weight={template.max_weight})"
        ))


def validate_unit(unit: ShippingUnit, template: BoxTemplate, store: str, sink: DiagnosticsSink) -> None:
    label = unit.source_description or "unnamed product"

    # Each value must be positive; two negative dimensions still give a positive volume
    if unit.weight <= 0 or min(unit.width, unit.height, unit.length) <= 0:
        raise _fail(sink, store, DiagnosticCategory.DEGENERATE_UNIT, DegenerateUnitError(
            f"Product {label} has a non-positive weight or dimension "
            f"({unit.width}x{unit.length}x{unit.height}, weight {unit.weight})"
        ))

    if (
        unit.width > template.width
        or unit.height > template.height
        or unit.length > template.length
        or unit.weight > template.max_weight
    ):
        raise _fail(sink, store, DiagnosticCategory.UNIT_TOO_LARGE, UnitTooLargeError(
            f"Product {label} ({unit.width}x{unit.length}x{unit.height}, weight {unit.weight}) "
            f"exceeds box configuration ({template.width}x{template.length}x{template.height}, "
            f"max weight {template.max_weight})"
        ))

    volume = unit.volume
    if volume > template.volume:
        raise _fail(sink, store, DiagnosticCategory.UNIT_TOO_LARGE, UnitTooLargeError(
            f"Product {label} volume {volume} exceeds box volume {template.volume}"
        ))


def pack_units(
    units: Sequence[ShippingUnit],
    template: BoxTemplate,
    store: str = DEFAULT_STORE,
    sink: Optional[DiagnosticsSink] = None,
    max_bins: int = DEFAULT_MAX_BINS,
) -> BoxPackingResult:
    """
    First-fit packer that puts each unit in the FIRST open bin that accepts it.
    - Units are taken in input order (no sorting)
    - A bin accepts a unit when remaining_volume * PACKING_SLACK_FACTOR covers its
      volume and remaining_weight covers its weight
    - Earliest-created bin wins ties
    - Opens at most max_bins bins; units that would need another are left unpacked
    - Everything is validated up front: any invalid unit fails the whole call
    - Deterministic (no randomness)
    """
    sink = sink or LoggingDiagnosticsSink()

    # Step 1: Reject unusable configuration before looking at any unit
    validate_template(template, store, sink)

    if not units:
        raise _fail(sink, store, DiagnosticCategory.EMPTY_SHIPMENT, EmptyShipmentError("No units to pack"))

    # Step 2: All-or-nothing unit validation
    for unit in units:
        validate_unit(unit, template, store, sink)

    # Step 3: First fit, seeded with one empty bin
    bins: list[PackingBin] = [PackingBin.open(template)]
    assignments: list[int] = []
    unpacked: list[ShippingUnit] = []
    capacity_exhausted = False

    for unit in units:
        target: Optional[int] = None
        for index, candidate in enumerate(bins):
            if candidate.accepts(unit):
                target = index
                break

        if target is None:
            if len(bins) >= max_bins:
                if not capacity_exhausted:
                    capacity_exhausted = True
                    sink.log(
                        store,
                        DiagnosticCategory.CAPACITY_EXHAUSTED,
                        f"Reached the maximum of {max_bins} boxes; remaining units only go into open boxes",
                    )
                unpacked.append(unit)
                continue

            # Validation guarantees a fresh bin can hold the unit
            bins.append(PackingBin.open(template))
            target = len(bins) - 1

        bins[target].place(unit)
        assignments.append(target)

    # Step 4: One package per bin that received something, in creation order
    packages: list[PackageDescriptor] = []
    for index, packed in enumerate(bins):
        if packed.unit_count == 0:
            continue
        logger.debug(
            "  Box %d: %d units, %.3f/%.3f weight, %.3f volume left",
            index + 1,
            packed.unit_count,
            packed.accumulated_weight,
            template.max_weight,
            packed.remaining_volume,
        )
        packages.append(
            PackageDescriptor(
                height=template.height,
                length=template.length,
                width=template.width,
                weight=template.tare_weight + packed.accumulated_weight,
                label=store,
                quantity=1,
            )
        )

    used_volume, box_volume, fill_rate = compute_metrics(template, bins)

    logger.info(
        "Packing complete for %s: %d units -> %d boxes (unpacked: %d)",
        store,
        len(units),
        len(packages),
        len(unpacked),
    )

    return BoxPackingResult(
        packages=packages,
        unpacked=unpacked,
        assignments=assignments,
        bins_opened=len(bins),
        capacity_exhausted=capacity_exhausted,
        used_volume=used_volume,
        box_volume=box_volume,
        fill_rate=fill_rate,
    )


def pack_into_boxes(
    units: Sequence[ShippingUnit],
    template: BoxTemplate,
    store: str = DEFAULT_STORE,
    sink: Optional[DiagnosticsSink] = None,
    max_bins: int = DEFAULT_MAX_BINS,
) -> list[PackageDescriptor]:
    """Pack units into copies of the box template and return one package per box used."""
    return pack_units(units, template, store=store, sink=sink, max_bins=max_bins).packages
