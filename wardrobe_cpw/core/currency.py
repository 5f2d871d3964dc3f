from typing import Optional, Protocol

from wardrobe_cpw.core.config import settings

# (code, name, symbol)
AVAILABLE_CURRENCIES: list[tuple[str, str, str]] = [
    ("USD", "US Dollar", "$"),
    ("EUR", "Euro", "€"),
    ("GBP", "British Pound", "£"),
    ("JPY", "Japanese Yen", "¥"),
    ("CAD", "Canadian Dollar", "CA$"),
    ("AUD", "Australian Dollar", "A$"),
    ("CHF", "Swiss Franc", "CHF"),
    ("CNY", "Chinese Yuan", "¥"),
    ("RUB", "Russian Ruble", "₽"),
    ("KRW", "Korean Won", "₩"),
    ("INR", "Indian Rupee", "₹"),
    ("BRL", "Brazilian Real", "R$"),
    ("TRY", "Turkish Lira", "₺"),
    ("SEK", "Swedish Krona", "kr"),
    ("PLN", "Polish Zloty", "zł"),
]

_SYMBOLS = {code: symbol for code, _, symbol in AVAILABLE_CURRENCIES}


class Formatter(Protocol):
    """Anything the analytics engine can hand amounts to for display."""

    @property
    def currency_symbol(self) -> str: ...

    def format(self, amount: float) -> str: ...

    def format_compact(self, amount: float) -> str: ...


class CurrencyFormatter:
    """Formats amounts in one currency with two (or zero) fraction digits.

    Unknown codes fall back to ``"<CODE> 12.50"`` instead of failing.
    """

    def __init__(self, currency_code: Optional[str] = None):
        self.currency_code = (currency_code or settings.CURRENCY_CODE).upper()

    @property
    def currency_symbol(self) -> str:
        return _SYMBOLS.get(self.currency_code, self.currency_code)

    def format(self, amount: float) -> str:
        return self._render(amount, 2)

    def format_compact(self, amount: float) -> str:
        return self._render(amount, 0)

    def _render(self, amount: float, digits: int) -> str:
        symbol = _SYMBOLS.get(self.currency_code)
        body = f"{abs(amount):,.{digits}f}"
        sign = "-" if amount < 0 and float(body.replace(",", "")) != 0 else ""
        if symbol is None:
            return f"{sign}{self.currency_code} {body}"
        # alphabetic symbols (CHF, kr) read better detached from the digits
        if symbol[-1].isalpha():
            return f"{sign}{symbol} {body}"
        return f"{sign}{symbol}{body}"


def is_supported_currency(code: str) -> bool:
    return (code or "").upper() in _SYMBOLS
