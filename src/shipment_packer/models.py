from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductAttribute(BaseModel):
    """Selected product option that may add weight to the shipped unit."""

    name: str = Field(default="", description="Attribute display name")
    weight: Optional[float] = Field(
        default=None,
        description="Weight added by this attribute")


class Product(BaseModel):
    """Catalog product as seen by the shipping module.

    Dimensions and weight are optional; missing values are defaulted by the
    unit expander.
    """

    sku: str = Field(default="", description="Product SKU")
    name: Optional[str] = Field(default=None, description="Localized product name")
    weight: Optional[float] = Field(default=None, ge=0, description="Declared unit weight")
    height: Optional[float] = Field(default=None, ge=0, description="Declared height")
    length: Optional[float] = Field(default=None, ge=0, description="Declared length")
    width: Optional[float] = Field(default=None, ge=0, description="Declared width")
    attributes: list[ProductAttribute] = Field(default_factory=list)
    virtual: bool = Field(default=False, description="Non-physical product, nothing to ship")


class LineItem(BaseModel):
    """How many of one product a shipment contains."""

    product: Product
    quantity: int = Field(ge=1, description="Number of physical units")


class ShippingUnit(BaseModel):
    """One physical unit to ship, with resolved weight and dimensions."""

    model_config = ConfigDict(frozen=True)

    weight: float = Field(description="Unit weight including attribute add-ons")
    height: float
    length: float
    width: float
    source_description: Optional[str] = Field(
        default=None,
        description="SKU or product name, used for labels and diagnostics")

    @property
    def volume(self) -> float:
        return float(self.width) * float(self.height) * float(self.length)


class BoxTemplate(BaseModel):
    """Merchant box used as the bin by the box packer.

    Capacity fields are not constrained here: a degenerate template is a
    configuration error the packer reports itself.
    """

    model_config = ConfigDict(frozen=True)

    width: float = Field(description="Inner width of the box")
    length: float = Field(description="Inner length of the box")
    height: float = Field(description="Inner height of the box")
    max_weight: float = Field(description="Maximum weight of the box contents")
    tare_weight: float = Field(default=0.0, ge=0, description="Weight of the empty box")
    name: Optional[str] = Field(default=None, description="Preset or merchant box name")

    @property
    def volume(self) -> float:
        return float(self.width) * float(self.length) * float(self.height)


class PackageDescriptor(BaseModel):
    """One parcel handed to the rate quote modules."""

    height: float
    length: float
    width: float
    weight: float
    label: str = Field(description="Store code (box mode) or product description (item mode)")
    quantity: int = Field(default=1, ge=1)


class BoxPackingResult(BaseModel):
    """Full outcome of a box packing run."""

    packages: list[PackageDescriptor] = Field(default_factory=list)
    unpacked: list[ShippingUnit] = Field(default_factory=list)
    # bin index of every placed unit, in input order
    assignments: list[int] = Field(default_factory=list)
    bins_opened: int = 0
    capacity_exhausted: bool = False
    used_volume: float = 0.0
    box_volume: float = 0.0
    fill_rate: float = 0.0


class PackageType(str, Enum):
    """How a merchant ships: one parcel per item, or consolidated boxes."""

    ITEM = "item"
    BOX = "box"


class MerchantStore(BaseModel):
    code: str = Field(default="DEFAULT", description="Merchant store code")
    name: Optional[str] = None


class ShippingConfiguration(BaseModel):
    """Merchant shipping configuration relevant to packing."""

    package_type: PackageType = PackageType.ITEM
    box: Optional[BoxTemplate] = None
