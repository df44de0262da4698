"""Conversion Service — live conversion rates with fixed-rate fallback.

Invariants:
    - get_conversion_rates never raises; any failure yields FALLBACK_RATES
    - ETH/USD comes from the price client (itself provider-ordered with fallback)
"""

import logging

from skillbridge.core.currency import ConversionRates, FALLBACK_RATES
from skillbridge.infrastructure.price_client import PriceClient

logger = logging.getLogger(__name__)


async def get_conversion_rates(client: PriceClient) -> ConversionRates:
    """Fetch ETH/USD and USD/INR, falling back to the fixed rates."""
    try:
        quote = await client.fetch_eth_price()
        usd_inr = await client.fetch_usd_inr_rate()
        return ConversionRates(eth_usd=quote.price, usd_inr=usd_inr)
    except Exception as e:
        logger.warning(f"Error getting conversion rates, using fallback: {e}")
        return FALLBACK_RATES
