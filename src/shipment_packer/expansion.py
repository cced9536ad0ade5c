"""Flatten shipment line items into individual physical units."""

from __future__ import annotations

from typing import Iterable, Optional

from shipment_packer.config import PackingSettings
from shipment_packer.models import LineItem, Product, ShippingUnit


def resolve_weight(product: Product, settings: PackingSettings) -> float:
    """Declared weight (or the default) plus every attribute weight add-on."""
    weight = float(product.weight) if product.weight is not None else settings.default_weight
    for attribute in product.attributes:
        if attribute.weight is not None:
            weight += float(attribute.weight)
    return weight


def resolve_dimension(value: Optional[float], settings: PackingSettings) -> float:
    # Only absent values are defaulted; an explicit zero is left for the packer to reject.
    return float(value) if value is not None else settings.default_dimension


def build_unit(product: Product, settings: PackingSettings) -> ShippingUnit:
    return ShippingUnit(
        weight=resolve_weight(product, settings),
        height=resolve_dimension(product.height, settings),
        length=resolve_dimension(product.length, settings),
        width=resolve_dimension(product.width, settings),
        source_description=product.name or product.sku or None,
    )


def expand(
    line_items: Iterable[LineItem],
    settings: Optional[PackingSettings] = None,
) -> list[ShippingUnit]:
    """
    Expand line items into one ShippingUnit per physical unit.

    - Virtual products are skipped
    - Missing weight/dimensions get the configured defaults
    - Each line item yields exactly `quantity` identical units, in input order

    Args:
        line_items: (product, quantity) pairs from the cart or order
        settings: Defaults for missing data (PackingSettings() when omitted)

    Returns:
        Flat list of units ready for a packer
    """
    settings = settings or PackingSettings()

    units: list[ShippingUnit] = []
    for item in line_items:
        if item.product.virtual:
            continue

        unit = build_unit(item.product, settings)
        units.extend([unit] * item.quantity)

    return units
