"""Merchant-facing packaging service: line items in, parcels out."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from shipment_packer.config import PackingSettings
from shipment_packer.diagnostics import DiagnosticCategory, DiagnosticsSink, LoggingDiagnosticsSink
from shipment_packer.errors import CapacityExhaustedError, ConfigurationError, PackingError
from shipment_packer.expansion import expand
from shipment_packer.models import (
    BoxTemplate,
    LineItem,
    MerchantStore,
    PackageDescriptor,
    PackageType,
    ShippingConfiguration,
)
from shipment_packer.packing.box_packer import pack_units
from shipment_packer.packing.per_item import pack_individually

logger = logging.getLogger(__name__)


class ShippingQuote(BaseModel):
    """Packing outcome as seen by the shipping method selection."""

    available: bool
    packages: list[PackageDescriptor] = Field(default_factory=list)
    error: Optional[str] = None
    error_type: Optional[str] = None


class ShipmentPackager:
    """Expands line items and packs them the way the merchant ships."""

    def __init__(self, settings: Optional[PackingSettings] = None, sink: Optional[DiagnosticsSink] = None):
        self.settings = settings or PackingSettings()
        self.sink = sink or LoggingDiagnosticsSink()

    def get_box_packages(
        self,
        line_items: Iterable[LineItem],
        store: MerchantStore,
        template: BoxTemplate,
    ) -> list[PackageDescriptor]:
        """Consolidate into boxes; fails if the box cap leaves any unit unpacked."""
        units = expand(line_items, self.settings)
        result = pack_units(
            units,
            template,
            store=store.code,
            sink=self.sink,
            max_bins=self.settings.max_bins,
        )
        if result.unpacked:
            raise CapacityExhaustedError(
                f"{len(result.unpacked)} of {len(units)} units do not fit in "
                f"{self.settings.max_bins} boxes"
            )
        return result.packages

    def get_item_packages(self, line_items: Iterable[LineItem]) -> list[PackageDescriptor]:
        return pack_individually(expand(line_items, self.settings))

    def get_packages(
        self,
        line_items: Iterable[LineItem],
        store: MerchantStore,
        configuration: ShippingConfiguration,
    ) -> list[PackageDescriptor]:
        if configuration.package_type == PackageType.BOX:
            if configuration.box is None:
                message = "Box packaging selected but no box is configured"
                self.sink.log(store.code, DiagnosticCategory.BOX_CONFIGURATION, message)
                raise ConfigurationError(message)
            return self.get_box_packages(line_items, store, configuration.box)

        return self.get_item_packages(line_items)

    def quote_packages(
        self,
        line_items: Iterable[LineItem],
        store: MerchantStore,
        configuration: ShippingConfiguration,
    ) -> ShippingQuote:
        """
        Pack for a quote; a packing failure makes the shipping method unavailable
        instead of failing the whole request.
        """
        try:
            packages = self.get_packages(line_items, store, configuration)
        except PackingError as e:
            logger.info("Shipping unavailable for store %s: %s", store.code, e)
            return ShippingQuote(available=False, error=str(e), error_type=type(e).__name__)

        return ShippingQuote(available=True, packages=packages)
