"""Price Client — ETH/USD quotes and USD/INR rate with ordered provider fallback.

Invariants:
    - Providers tried in fixed order: CoinGecko, Binance, CryptoCompare
    - First successful provider wins; remaining providers are not called
    - Every provider failure (transport, status, malformed body) is logged and skipped
    - When all providers fail the static fallback quote is returned (is_estimate=True)
    - Never raises to the caller

Design Decisions:
    - httpx.AsyncClient injected: tests pass an httpx.MockTransport-backed client
    - PriceQuoteError used internally to unify the failure modes of one provider
    - USD/INR only queried when an API key is configured; otherwise the fixed rate
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import httpx

from skillbridge.config import get_settings
from skillbridge.core.currency import FALLBACK_ETH_USD, FALLBACK_USD_INR
from skillbridge.core.errors import PriceQuoteError

logger = logging.getLogger(__name__)

FALLBACK_SOURCE = "Fallback"
_USER_AGENT = "SkillBridge/1.0 Server"


@dataclass(frozen=True)
class PriceQuote:
    price: float
    change_24h: float
    source: str
    is_estimate: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "price": self.price,
            "change24h": self.change_24h,
            "timestamp": self.timestamp.isoformat(),
            "isEstimate": self.is_estimate,
            "source": self.source,
        }


@dataclass(frozen=True)
class PriceProvider:
    name: str
    url: str
    parse: Callable[[Any], tuple[float, float]]


def _parse_coingecko(data: Any) -> tuple[float, float]:
    return float(data["ethereum"]["usd"]), float(data["ethereum"].get("usd_24h_change") or 0)


def _parse_binance(data: Any) -> tuple[float, float]:
    return float(data["lastPrice"]), float(data["priceChangePercent"])


def _parse_cryptocompare(data: Any) -> tuple[float, float]:
    return float(data["USD"]), 0.0


ETH_PRICE_PROVIDERS = (
    PriceProvider(
        "CoinGecko",
        "https://api.coingecko.com/api/v3/simple/price"
        "?ids=ethereum&vs_currencies=usd&include_24hr_change=true",
        _parse_coingecko,
    ),
    PriceProvider(
        "Binance",
        "https://api.binance.com/api/v3/ticker/24hr?symbol=ETHUSDT",
        _parse_binance,
    ),
    PriceProvider(
        "CryptoCompare",
        "https://min-api.cryptocompare.com/data/price?fsym=ETH&tsyms=USD",
        _parse_cryptocompare,
    ),
)

CURRENCY_API_URL = "https://api.currencyapi.com/v3/latest"


class PriceClient:
    """Fetches ledger price quotes, masking provider outages with fixed fallbacks."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        coingecko_api_key: str | None = None,
        currency_api_key: str | None = None,
        timeout_seconds: float = 5.0,
        providers: tuple[PriceProvider, ...] = ETH_PRICE_PROVIDERS,
    ):
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": _USER_AGENT},
        )
        self.coingecko_api_key = coingecko_api_key
        self.currency_api_key = currency_api_key
        self.timeout_seconds = timeout_seconds
        self.providers = providers

    async def fetch_eth_price(self) -> PriceQuote:
        """Return the first successful provider quote, or the fallback estimate."""
        for provider in self.providers:
            try:
                quote = await self._quote(provider)
                logger.info(
                    f"Fetched ETH price from {provider.name}",
                    extra={"provider": provider.name},
                )
                return quote
            except PriceQuoteError as e:
                logger.warning(e.message, extra={"provider": provider.name})
        logger.warning("All price providers failed, using fallback price")
        return PriceQuote(
            price=FALLBACK_ETH_USD, change_24h=0.0,
            source=FALLBACK_SOURCE, is_estimate=True,
        )

    async def fetch_usd_inr_rate(self) -> float:
        """Return the live USD->INR rate, or the fixed rate without a key or on failure."""
        if not self.currency_api_key:
            return FALLBACK_USD_INR
        try:
            response = await self._client.get(
                CURRENCY_API_URL,
                params={
                    "apikey": self.currency_api_key,
                    "currencies": "INR",
                    "base_currency": "USD",
                },
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            return float(response.json()["data"]["INR"]["value"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                f"Currency API error: {e}", extra={"provider": "currencyapi"},
            )
            return FALLBACK_USD_INR

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _quote(self, provider: PriceProvider) -> PriceQuote:
        headers = {}
        if provider.name == "CoinGecko" and self.coingecko_api_key:
            headers["x-cg-api-key"] = self.coingecko_api_key
        try:
            response = await self._client.get(
                provider.url, headers=headers, timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            price, change = provider.parse(response.json())
        except httpx.HTTPStatusError as e:
            raise PriceQuoteError(
                provider.name, f"returned status {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            raise PriceQuoteError(provider.name, f"transport error: {e}")
        except (KeyError, TypeError, ValueError) as e:
            raise PriceQuoteError(provider.name, f"malformed response: {e}")
        return PriceQuote(price=price, change_24h=change, source=provider.name)


# Singleton (created on first use, closed on shutdown)
_price_client: PriceClient | None = None


def get_price_client() -> PriceClient:
    """FastAPI dependency for the shared price client."""
    global _price_client
    if _price_client is None:
        settings = get_settings()
        _price_client = PriceClient(
            coingecko_api_key=settings.coingecko_api_key,
            currency_api_key=settings.currency_converter_api_key,
            timeout_seconds=settings.price_request_timeout_seconds,
        )
    return _price_client


async def close_price_client() -> None:
    global _price_client
    if _price_client is not None:
        await _price_client.aclose()
        _price_client = None
