"""Small money and ratio helpers used by the dashboard renderers."""

from __future__ import annotations

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}


def calculate_roi(invested: float, revenue: float) -> float:
    """Return `(revenue - invested) / invested` in percent.

    Args:
        invested: Amount spent.
        revenue: Amount received (net of fees where relevant).

    Returns:
        ROI percentage, or 0.0 when nothing was invested.
    """
    if invested == 0:
        return 0.0
    return (revenue - invested) / invested * 100


def format_currency(amount: float, currency: str = "EUR") -> str:
    """Format an amount with two decimals and a currency marker.

    Known currencies get their symbol as prefix (`€1,234.50`, `-$3.00`);
    anything else gets the ISO code as suffix (`12.00 CHF`).
    """
    code = currency.upper()
    cents = round(amount, 2)
    sign = "-" if cents < 0 else ""
    body = f"{abs(cents):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{body} {code}"
    return f"{sign}{symbol}{body}"
