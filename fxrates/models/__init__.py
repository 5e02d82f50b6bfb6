from fxrates.models.currency_pair import CurrencyPair

__all__ = ["CurrencyPair"]
