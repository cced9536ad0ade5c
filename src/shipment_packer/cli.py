from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Optional

from shipment_packer.boxes import resolve_shipping_configuration
from shipment_packer.config import load_settings
from shipment_packer.diagnostics import LoggingDiagnosticsSink, MerchantLogSink
from shipment_packer.metrics import summarize_packages
from shipment_packer.models import LineItem, MerchantStore, Product, ShippingConfiguration
from shipment_packer.packaging import ShipmentPackager


def load_input(path: Path) -> tuple[MerchantStore, ShippingConfiguration, list[LineItem]]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))

    store = MerchantStore(**data.get("store", {}))
    configuration = resolve_shipping_configuration(data.get("shipping", {}))

    line_items = []
    for item in data.get("items", []):
        # Item dicts are flat: product fields plus quantity
        fields = dict(item)
        quantity = int(fields.pop("quantity", 1))
        line_items.append(LineItem(product=Product(**fields), quantity=quantity))

    return store, configuration, line_items


def write_plan(plan: dict, path: str = "packages.json") -> None:
    """
    Write a packing plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and
    sort_keys=True, and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def build_plan(
    store: MerchantStore,
    configuration: ShippingConfiguration,
    line_items: list[LineItem],
    packager: ShipmentPackager,
    diagnostics: MerchantLogSink,
) -> dict[str, Any]:
    quote = packager.quote_packages(line_items, store, configuration)

    plan: dict[str, Any] = {
        "store": store.code,
        "package_type": configuration.package_type.value,
        "available": quote.available,
        "packages": [p.model_dump() for p in quote.packages],
        "summary": summarize_packages(quote.packages),
        "diagnostics": [
            {"category": e.category.value, "message": e.message}
            for e in diagnostics.entries_for(store.code)
        ],
    }
    if configuration.box is not None:
        plan["box"] = configuration.box.model_dump()
    if not quote.available:
        plan["error"] = {"type": quote.error_type, "message": quote.error}
    return plan


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Shipment Packer CLI")
    parser.add_argument("--input", required=True, help="Input shipment JSON file")
    parser.add_argument("--output", default="packages.json", help="Output packages JSON file")
    args = parser.parse_args(argv)

    store, configuration, line_items = load_input(Path(args.input))

    diagnostics = MerchantLogSink(forward_to=LoggingDiagnosticsSink())
    packager = ShipmentPackager(settings=load_settings(), sink=diagnostics)

    plan = build_plan(store, configuration, line_items, packager, diagnostics)

    write_plan(plan, args.output)
    print(json.dumps(plan["summary"], indent=2, sort_keys=True))

    if not plan["available"]:
        print(f"Shipping unavailable: {plan['error']['message']}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
