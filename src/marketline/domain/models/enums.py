"""Enumerations for domain models."""

from enum import Enum


class Indicator(Enum):
    """
    Market indicators shown above the ticker table.

    Member order is the request order: the provider preserves it, so
    position i of every indicator response belongs to the i-th member.
    """

    DOW = ("Dow", "^DJI")
    NASDAQ = ("Nasdaq", "^IXIC")
    SP500 = ("S&P500", "^GSPC")
    BITCOIN = ("Bitcoin", "BTC-USD")
    TOKYO = ("Tokyo", "^N225")
    HONG_KONG = ("Hong Kong", "^HSI")
    LONDON = ("London", "^FTSE")
    FRANKFURT = ("Frankfurt", "^GDAXI")
    YEN = ("Yen", "JPY=X")
    RUBLE = ("Ruble", "RUB=X")
    POUND = ("Pound", "GBP=X")
    EURO = ("Euro", "EUR=X")
    TEN_YEAR_YIELD = ("10-Year-Yield", "^TNX")
    SILVER = ("Silver", "SI=F")
    GOLD = ("Gold", "GC=F")

    def __init__(self, display_name: str, symbol: str):
        self.display_name = display_name
        self.symbol = symbol

    @property
    def position(self) -> int:
        """Index of this indicator in the request and response arrays."""
        return list(Indicator).index(self)

    @classmethod
    def symbols(cls) -> list[str]:
        """Provider symbols in request order."""
        return [indicator.symbol for indicator in cls]


class EditCommand(str, Enum):
    """Ticker edit commands, keyed by the character that starts them."""

    ADD = "+"
    REMOVE = "-"


class EditorMode(str, Enum):
    """Line editor modes."""

    IDLE = "IDLE"
    CAPTURING = "CAPTURING"


class Key(str, Enum):
    """Terminal-independent keys understood by the line editor."""

    CHAR = "CHAR"
    ENTER = "ENTER"
    ESCAPE = "ESCAPE"
    BACKSPACE = "BACKSPACE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    HOME = "HOME"  # Ctrl-A
    END = "END"  # Ctrl-E
    UNKNOWN = "UNKNOWN"
