"""Schemas for the amount normalization endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

AmountEvent = Literal["input", "blur"]


class NormalizeAmountRequest(BaseModel):
    """One input event coming from a currency field."""

    event: AmountEvent
    value: str = Field(max_length=64)
    previous: str = Field(default="", max_length=64)


class NormalizeAmountResponse(BaseModel):
    display: str
    amount: str = Field(pattern=r"^-?[0-9]+\.[0-9]{2}$")
    valid: bool
