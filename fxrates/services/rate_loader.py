import logging
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class RateLoader(Protocol):
    def get_rate(self, from_currency: str, to_currency: str) -> float:
        """Return how many units of *to_currency* one unit of *from_currency* buys.

        May raise anything; callers treat every failure the same way.
        """
        ...


class HttpRateLoader:
    """RateLoader backed by the open.er-api.com ``latest/{base}`` endpoint."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.Client | None = None):
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()

        if from_currency == to_currency:
            return 1.0

        resp = self._client.get(f"{self._base_url}/{from_currency}")
        resp.raise_for_status()
        rates = resp.json().get("rates", {})

        rate = rates.get(to_currency)
        if rate is None:
            raise ValueError(f"Unknown currency: {to_currency}")

        logger.info(f"Fetched exchange rate: 1 {from_currency} = {rate} {to_currency}")
        return float(rate)

    def close(self) -> None:
        self._client.close()
