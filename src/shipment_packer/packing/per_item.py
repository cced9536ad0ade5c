"""One parcel per physical unit, no consolidation."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from shipment_packer.models import PackageDescriptor, ShippingUnit

PLACEHOLDER_LABEL = "N/A"

UnitEntry = Union[ShippingUnit, tuple[ShippingUnit, Optional[str]]]


def _unit_and_label(entry: UnitEntry) -> tuple[ShippingUnit, str]:
    if isinstance(entry, ShippingUnit):
        unit, label = entry, None
    else:
        unit, label = entry
    return unit, label or unit.source_description or PLACEHOLDER_LABEL


def pack_individually(units: Iterable[UnitEntry]) -> list[PackageDescriptor]:
    """
    Wrap every unit in its own package.

    Entries are units or (unit, label) pairs. Output order matches input order,
    quantity is always 1, and nothing is checked against a box: oversize and
    overweight units are left for the carrier quote.
    """
    packages: list[PackageDescriptor] = []
    for entry in units:
        unit, label = _unit_and_label(entry)
        packages.append(
            PackageDescriptor(
                height=unit.height,
                length=unit.length,
                width=unit.width,
                weight=unit.weight,
                label=label,
                quantity=1,
            )
        )
    return packages
