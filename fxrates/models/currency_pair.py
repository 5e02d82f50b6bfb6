from dataclasses import dataclass

from fxrates.core.exceptions import InvalidArgument


@dataclass(frozen=True)
class CurrencyPair:
    """Directed exchange-rate key, e.g. USD -> PLN.

    Codes are upper-cased on construction, so ``CurrencyPair("usd", "pln")``
    and ``CurrencyPair("USD", "PLN")`` compare and hash equal.
    """

    from_currency: str
    to_currency: str

    def __post_init__(self):
        if self.from_currency is None or not self.from_currency.strip():
            raise InvalidArgument("from_currency must not be blank")
        if self.to_currency is None or not self.to_currency.strip():
            raise InvalidArgument("to_currency must not be blank")
        # frozen dataclass: bypass __setattr__ to store the normalized codes
        object.__setattr__(self, "from_currency", self.from_currency.upper())
        object.__setattr__(self, "to_currency", self.to_currency.upper())

    def __str__(self) -> str:
        return f"{self.from_currency}->{self.to_currency}"
