from __future__ import annotations

from typing import Any, Iterable, TYPE_CHECKING

from shipment_packer.models import BoxTemplate, PackageDescriptor

if TYPE_CHECKING:
    from shipment_packer.packing.box_packer import PackingBin


def package_volume(p: PackageDescriptor) -> float:
    return float(p.length) * float(p.width) * float(p.height)


def compute_metrics(template: BoxTemplate, bins: Iterable["PackingBin"]) -> tuple[float, float, float]:
    """Used unit volume, total volume of used boxes, and fill rate across non-empty bins."""
    used = [b for b in bins if b.unit_count > 0]
    used_volume = sum(template.volume - b.remaining_volume for b in used)
    box_volume = template.volume * len(used)
    fill_rate = 0.0 if box_volume == 0 else used_volume / box_volume
    return used_volume, box_volume, fill_rate


def summarize_packages(packages: list[PackageDescriptor]) -> dict[str, Any]:
    total_weight = sum(float(p.weight) * p.quantity for p in packages)
    total_volume = sum(package_volume(p) * p.quantity for p in packages)
    return {
        "package_count": sum(p.quantity for p in packages),
        "total_weight": total_weight,
        "total_volume": total_volume,
        "heaviest_package": max((float(p.weight) for p in packages), default=0.0),
    }
