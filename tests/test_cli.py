"""Tests for the shipment-packer command line."""

from __future__ import annotations

import json

import pytest

from shipment_packer.cli import load_input, main
from shipment_packer.models import PackageType


def write_shipment(path, shipping: dict, items: list[dict]) -> None:
    path.write_text(
        json.dumps({"store": {"code": "SHOP1", "name": "Shop One"}, "shipping": shipping, "items": items}),
        encoding="utf-8",
    )


@pytest.fixture
def items() -> list[dict]:
    return [
        {"sku": "CUBE", "name": "Cube", "weight": 5, "height": 5, "length": 5, "width": 5, "quantity": 3},
        {"sku": "EBOOK", "virtual": True, "quantity": 1},
    ]


def test_load_input(tmp_path, items) -> None:
    source = tmp_path / "shipment.json"
    write_shipment(source, {"package_type": "box", "box_preset": "MEDIUM"}, items)

    store, configuration, line_items = load_input(source)

    assert store.code == "SHOP1"
    assert configuration.package_type == PackageType.BOX
    assert [li.quantity for li in line_items] == [3, 1]
    assert line_items[1].product.virtual is True


def test_box_mode_writes_packages(tmp_path, items, capsys) -> None:
    source = tmp_path / "shipment.json"
    output = tmp_path / "out" / "packages.json"
    write_shipment(
        source,
        {"package_type": "box", "box": {"width": 10, "length": 10, "height": 10, "max_weight": 20, "tare_weight": 1}},
        items,
    )

    code = main(["--input", str(source), "--output", str(output)])

    assert code == 0
    plan = json.loads(output.read_text(encoding="utf-8"))
    assert plan["available"] is True
    assert plan["package_type"] == "box"
    assert len(plan["packages"]) == 1
    assert plan["packages"][0]["weight"] == pytest.approx(16)
    assert plan["summary"]["package_count"] == 1
    assert '"package_count": 1' in capsys.readouterr().out


def test_item_mode(tmp_path, items) -> None:
    source = tmp_path / "shipment.json"
    output = tmp_path / "packages.json"
    write_shipment(source, {"package_type": "item"}, items)

    assert main(["--input", str(source), "--output", str(output)]) == 0

    plan = json.loads(output.read_text(encoding="utf-8"))
    assert [p["label"] for p in plan["packages"]] == ["Cube", "Cube", "Cube"]
    assert "box" not in plan


def test_packing_error_marks_shipping_unavailable(tmp_path, items) -> None:
    source = tmp_path / "shipment.json"
    output = tmp_path / "packages.json"
    write_shipment(
        source,
        {"package_type": "box", "box": {"width": 1, "length": 1, "height": 1, "max_weight": 1}},
        items,
    )

    code = main(["--input", str(source), "--output", str(output)])

    assert code == 1
    plan = json.loads(output.read_text(encoding="utf-8"))
    assert plan["available"] is False
    assert plan["packages"] == []
    assert plan["error"]["type"] == "UnitTooLargeError"
    assert plan["diagnostics"][0]["category"] == "unit-too-large"
