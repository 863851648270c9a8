# src/eth_explorer/utils/units.py
"""Ethereum denomination helpers.

Amounts are kept as Python ints (arbitrary precision) and rendered as
fixed-point decimal strings, so balances far beyond 2**64 wei survive the
trip to JSON without rounding.
"""

ETHER_DECIMALS = 18
GWEI_DECIMALS = 9

WEI_PER_ETHER = 10 ** ETHER_DECIMALS
WEI_PER_GWEI = 10 ** GWEI_DECIMALS


def format_units(wei: int, decimals: int) -> str:
    """Render ``wei`` divided by ``10**decimals`` with exactly ``decimals`` fraction digits.

    Digits past ``decimals`` are truncated, never rounded.
    """
    wei = int(wei)
    if wei < 0:
        raise ValueError(f"Amount must be non-negative, got {wei}")
    if decimals == 0:
        return str(wei)

    whole, fraction = divmod(wei, 10 ** decimals)
    return f"{whole}.{fraction:0{decimals}d}"


def wei_to_ether(wei: int) -> str:
    return format_units(wei, ETHER_DECIMALS)


def wei_to_gwei(wei: int) -> str:
    return format_units(wei, GWEI_DECIMALS)
