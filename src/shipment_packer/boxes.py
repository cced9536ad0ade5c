# src/shipment_packer/boxes.py
from __future__ import annotations

from typing import Any

from shipment_packer.models import BoxTemplate, PackageType, ShippingConfiguration

# Inner dims (cm), weights (kg). Merchants usually override with their own box.
BOX_PRESETS: dict[str, dict[str, float]] = {
    "SMALL":  {"width": 20.0, "length": 30.0, "height": 15.0, "max_weight": 10.0, "tare_weight": 0.2},
    "MEDIUM": {"width": 30.0, "length": 40.0, "height": 30.0, "max_weight": 20.0, "tare_weight": 0.4},
    "LARGE":  {"width": 40.0, "length": 60.0, "height": 40.0, "max_weight": 30.0, "tare_weight": 0.7},
    "XL":     {"width": 60.0, "length": 80.0, "height": 60.0, "max_weight": 40.0, "tare_weight": 1.2},
}


def get_box_dims(preset: str) -> dict[str, float]:
    key = preset.strip().upper()
    if key not in BOX_PRESETS:
        raise ValueError(f"Unknown box_preset '{preset}'. Valid: {sorted(BOX_PRESETS.keys())}")
    return dict(BOX_PRESETS[key])


def resolve_box_template(config: dict[str, Any]) -> BoxTemplate:
    """
    Build a BoxTemplate from a merchant shipping config.

    Accepts a 'box_preset', an explicit 'box' dict, or both; explicit fields
    override the preset. Degenerate values are kept so the packer can report
    them.
    """
    box_kwargs: dict[str, Any] = {}

    # 1) Preset OR explicit box
    if "box_preset" in config:
        box_kwargs.update(get_box_dims(config["box_preset"]))
        box_kwargs["name"] = config["box_preset"].strip().upper()
    elif "box" not in config:
        raise ValueError("Shipping config must include either 'box_preset' or 'box'")

    # 2) Merge explicit overrides (tare weight, merchant dims, ...)
    if "box" in config:
        box_kwargs.update(config["box"])

    return BoxTemplate(**box_kwargs)


def resolve_shipping_configuration(config: dict[str, Any]) -> ShippingConfiguration:
    package_type = PackageType(str(config.get("package_type", PackageType.ITEM.value)).lower())

    box = None
    if "box_preset" in config or "box" in config:
        box = resolve_box_template(config)

    return ShippingConfiguration(package_type=package_type, box=box)
