import logging
import math

from fxrates.core.exceptions import InvalidArgument, RateFetchFailed
from fxrates.models.currency_pair import CurrencyPair
from fxrates.services.rate_loader import RateLoader
from fxrates.utils.ttl_cache import TtlCache

logger = logging.getLogger(__name__)


class ConversionService:
    def __init__(self, loader: RateLoader, cache: TtlCache[CurrencyPair, float]):
        self.loader = loader
        self.cache = cache

    def convert(self, from_currency: str, to_currency: str, amount: float) -> float:
        """Convert *amount* using the cached rate, fetching it on a miss.

        Amounts and rates are plain floats, the same doubles the rate API
        returns; callers that need cent-exact money should quantize the result.

        Raises InvalidArgument for a negative or non-finite amount or a blank
        code, and RateFetchFailed when the loader fails. Zero amounts still go
        through the cache so the rate is fetched on a miss.
        """
        if not math.isfinite(amount):
            raise InvalidArgument(f"amount must be a finite number, got {amount}")
        if amount < 0:
            raise InvalidArgument(f"amount must be >= 0, got {amount}")

        pair = CurrencyPair(from_currency, to_currency)

        def load() -> float:
            try:
                return self.loader.get_rate(pair.from_currency, pair.to_currency)
            except Exception as e:
                logger.warning(f"Failed to fetch exchange rate {pair}: {e}")
                raise RateFetchFailed(pair, e) from e

        rate = self.cache.get_or_load(pair, load)
        return amount * rate
