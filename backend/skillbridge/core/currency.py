"""Currency Conversion — fixed-rate ETH/USD/INR arithmetic and display formatting.

Invariants:
    - USD is the pivot: every conversion goes source -> USD -> target
    - Same-currency conversion returns the amount unchanged (no rounding drift)
    - eth_to_wei is exact (Decimal), never float-multiplied
    - FALLBACK_RATES are the documented constants used whenever live rates are unavailable

Design Decisions:
    - ConversionRates as frozen dataclass: rates travel together, callers cannot
      mutate the shared fallback instance
"""

from dataclasses import dataclass
from decimal import Decimal

from skillbridge.core.domain_types import Currency

WEI_PER_ETH = 10 ** 18


@dataclass(frozen=True)
class ConversionRates:
    eth_usd: float
    usd_inr: float

    def to_dict(self) -> dict[str, float]:
        return {"ETH_USD": self.eth_usd, "USD_INR": self.usd_inr}


FALLBACK_ETH_USD = 3150.42
FALLBACK_USD_INR = 83.12
FALLBACK_RATES = ConversionRates(eth_usd=FALLBACK_ETH_USD, usd_inr=FALLBACK_USD_INR)


def eth_to_usd(eth_amount: float, rates: ConversionRates = FALLBACK_RATES) -> float:
    return eth_amount * rates.eth_usd


def usd_to_eth(usd_amount: float, rates: ConversionRates = FALLBACK_RATES) -> float:
    return usd_amount / rates.eth_usd


def eth_to_inr(eth_amount: float, rates: ConversionRates = FALLBACK_RATES) -> float:
    return eth_to_usd(eth_amount, rates) * rates.usd_inr


def inr_to_eth(inr_amount: float, rates: ConversionRates = FALLBACK_RATES) -> float:
    return usd_to_eth(inr_amount / rates.usd_inr, rates)


def convert_currency(
    amount: float,
    source: Currency,
    target: Currency,
    rates: ConversionRates = FALLBACK_RATES,
) -> float:
    """Convert between any two supported currencies."""
    if source == target:
        return amount

    amount_usd = amount
    if source == Currency.ETH:
        amount_usd = amount * rates.eth_usd
    elif source == Currency.INR:
        amount_usd = amount / rates.usd_inr

    if target == Currency.ETH:
        return amount_usd / rates.eth_usd
    if target == Currency.INR:
        return amount_usd * rates.usd_inr
    return amount_usd


def format_eth(eth_amount: float) -> str:
    return f"{eth_amount:.6f} ETH"


def format_usd(usd_amount: float) -> str:
    return f"${usd_amount:.2f}"


def format_inr(inr_amount: float) -> str:
    return f"₹{inr_amount:.2f}"


def eth_to_wei(eth_amount: float | str) -> str:
    """Convert ETH to wei, returned as a 0x-prefixed hex string for transaction payloads."""
    wei = Decimal(str(eth_amount)) * WEI_PER_ETH
    if wei != wei.to_integral_value():
        raise ValueError(f"{eth_amount} ETH has more than 18 decimal places")
    return hex(int(wei))
