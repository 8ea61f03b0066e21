"""
Display helpers - "$12.345B", "$980.1M", "42.0%"
"""

UNITS = {
    "B": 1e9,
    "M": 1e6,
}


def format_usd(value: float, unit: str = "B", decimals: int = 2) -> str:
    return f"${value / UNITS[unit]:.{decimals}f}{unit}"


def format_share(share: float, decimals: int = 1) -> str:
    return f"{share:.{decimals}f}%"
