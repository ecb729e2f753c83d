"""Display buffer for a currency input field."""

from __future__ import annotations

from decimal import Decimal

from despesas.domain.errors import InvalidAmountError, compose_error_message
from despesas.domain.money import (
    DEFAULT_FORMATTER,
    ZERO,
    LocaleFormatter,
    normalize_on_blur,
    normalize_on_input,
    parse_to_amount,
    quantize_money,
)


class AmountInput:
    """Keeps the displayed value of one amount field in sync with keystrokes.

    The caller feeds every change event to ``type``, calls ``blur`` when the
    field loses focus and ``submit`` right before persisting. Each call
    overwrites the buffer.
    """

    def __init__(
        self,
        initial: str = "",
        *,
        formatter: LocaleFormatter = DEFAULT_FORMATTER,
    ) -> None:
        self._formatter = formatter
        self._raw = initial
        self._display = initial

    @property
    def display(self) -> str:
        return self._display

    @property
    def amount(self) -> Decimal:
        return parse_to_amount(self._display, formatter=self._formatter)

    def type(self, raw_value: str) -> str:
        self._display = normalize_on_input(
            self._raw, raw_value, formatter=self._formatter
        )
        self._raw = raw_value
        return self._display

    def blur(self) -> str:
        self._display = normalize_on_blur(self._display, formatter=self._formatter)
        return self._display

    def submit(self) -> Decimal:
        """Return the amount to persist, rejecting zero or negative values."""

        amount = self.amount
        if amount <= ZERO:
            raise InvalidAmountError(
                message=compose_error_message(
                    cause="Digite um valor válido maior que zero.",
                    action="Type the amount in cents, for example 2550 for R$ 25,50.",
                ),
                details={"display": self._display},
            )
        return quantize_money(amount)
