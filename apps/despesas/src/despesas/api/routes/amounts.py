"""Amount normalization route used by currency input handlers."""

from __future__ import annotations

from fastapi import APIRouter

from despesas.api.schemas.amounts import (
    NormalizeAmountRequest,
    NormalizeAmountResponse,
)
from despesas.domain.money import (
    ZERO,
    format_money,
    normalize_on_blur,
    normalize_on_input,
    try_parse_amount,
)

router = APIRouter(prefix="/amounts", tags=["Amounts"])


@router.post("/normalize", response_model=NormalizeAmountResponse)
def normalize_amount(payload: NormalizeAmountRequest) -> NormalizeAmountResponse:
    """Apply the on-input or on-blur normalization to a field value."""

    if payload.event == "input":
        display = normalize_on_input(payload.previous, payload.value)
    else:
        display = normalize_on_blur(payload.value)

    parsed = try_parse_amount(display)
    amount = parsed if parsed is not None else ZERO
    return NormalizeAmountResponse(
        display=display,
        amount=format_money(amount),
        valid=amount > ZERO,
    )
