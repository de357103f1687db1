"""Currency display helpers for search results."""

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "CAD": "CA$", "GBP": "£", "EUR": "€",
    "JPY": "¥", "AUD": "A$", "SGD": "S$", "HKD": "HK$",
    "INR": "₹", "AED": "AED ", "QAR": "QAR ", "TRY": "TRY ",
    "KRW": "₩", "TWD": "NT$", "THB": "฿", "NPR": "Rs ",
}


def currency_symbol(currency: str) -> str:
    """Symbol for a currency code; unknown codes render as the code and a space."""
    code = currency.upper()
    return CURRENCY_SYMBOLS.get(code, code + " ")


def format_number(value: float) -> str:
    """Render whole numbers without a trailing '.0' (5000.0 -> '5000', 4.5 -> '4.5')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_price(amount: float, currency: str = "INR") -> str:
    return f"{currency_symbol(currency)}{format_number(amount)}"
