from functools import lru_cache

from fxrates.core.config import Settings, settings
from fxrates.models.currency_pair import CurrencyPair
from fxrates.services.conversion_service import ConversionService
from fxrates.services.rate_loader import HttpRateLoader, RateLoader
from fxrates.utils.ttl_cache import TtlCache


def build_conversion_service(cfg: Settings, loader: RateLoader | None = None) -> ConversionService:
    """Wire a loader, a rate cache and the service from configuration."""
    cache: TtlCache[CurrencyPair, float] = TtlCache(cfg.rate_cache_ttl_seconds)
    if loader is None:
        loader = HttpRateLoader(cfg.rate_api_url, timeout=cfg.rate_api_timeout)
    return ConversionService(loader, cache)


@lru_cache
def get_conversion_service() -> ConversionService:
    """Process-wide service, shared by every request so the cache is too."""
    return build_conversion_service(settings)
