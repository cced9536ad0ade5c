"""Packer settings; reads a local .env via python-dotenv."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "SHIPMENT_PACKER_"


class PackingSettings(BaseModel):
    """Defaults applied when products lack shipping data, plus the bin cap."""

    model_config = ConfigDict(frozen=True)

    default_weight: float = Field(default=1.0, gt=0, description="Weight used when a product declares none")
    default_dimension: float = Field(
        default=4.0,
        gt=0,
        description="Height, length and width used when a product declares none")
    max_bins: int = Field(default=100, gt=0, description="Soft cap on boxes opened per packing run")


def load_settings(dotenv: bool = True) -> PackingSettings:
    """
    Build settings from SHIPMENT_PACKER_* variables.

    Values from a .env file (searched from the working directory upwards) are
    used only where the real environment does not set the variable. Unset or
    blank variables keep the model defaults. Invalid values raise
    pydantic.ValidationError.
    """
    env: dict[str, Optional[str]] = {}
    if dotenv:
        path = find_dotenv(usecwd=True)
        if path:
            env.update(dotenv_values(path))
    env.update(os.environ)

    values: dict[str, str] = {}
    for field_name in PackingSettings.model_fields:
        raw = env.get(ENV_PREFIX + field_name.upper())
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()

    return PackingSettings(**values)
