"""
Decoding of quote response bodies into display records.

Indicator responses are decoded by position: the provider returns results
in request order, so row i belongs to the i-th Indicator. Row symbols are
not cross-checked; only the row count is.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from pydantic import ValidationError

from marketline.core.exceptions import DecodeError
from marketline.domain.models.enums import Indicator
from marketline.domain.views import YIELD_LABEL, IndicatorRecord, TickerQuote
from marketline.providers.yahoo_schemas import QuoteResponseEnvelope, QuoteRow

TWO_PLACES = Decimal("0.01")


def format_number(value: Union[int, float, Decimal]) -> str:
    """Round half-up to two decimal places; the sign is kept as given."""
    # str() first so 100.005 rounds as written rather than as its binary value
    number = Decimal(str(value))
    if not number.is_finite():
        raise DecodeError(f"Cannot format {value!r} as a price")
    try:
        return str(number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        # Too many digits for the decimal context
        raise DecodeError(f"Cannot format {value!r} as a price") from e


def format_percent(value: Union[int, float, Decimal]) -> str:
    return format_number(value) + "%"


def parse_quote_rows(body: Union[str, bytes]) -> list[QuoteRow]:
    """Validate a response body and return its result rows."""
    try:
        envelope = QuoteResponseEnvelope.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Malformed quote response: {e.error_count()} error(s): {e}") from e
    return envelope.quote_response.result


def decode_indicators(body: Union[str, bytes]) -> tuple[IndicatorRecord, ...]:
    """
    Decode an indicator response into one record per Indicator.

    Raises DecodeError unless the body holds exactly len(Indicator) rows,
    each with numeric price, change and change percent.
    """
    rows = parse_quote_rows(body)
    if len(rows) != len(Indicator):
        raise DecodeError(f"Expected {len(Indicator)} indicator results, got {len(rows)}")

    return tuple(_indicator_record(indicator, rows[indicator.position]) for indicator in Indicator)


def decode_tickers(body: Union[str, bytes]) -> dict[str, TickerQuote]:
    """
    Decode a ticker response keyed by symbol.

    Unknown symbols are simply missing from the provider's result, so
    tickers are matched by symbol rather than by position.
    """
    quotes: dict[str, TickerQuote] = {}
    for row in parse_quote_rows(body):
        if not row.symbol:
            continue
        symbol = row.symbol.upper()
        quotes[symbol] = TickerQuote(
            symbol=symbol,
            latest=format_number(row.price),
            change=format_number(row.change),
            percent=format_percent(row.change_percent),
        )
    return quotes


def _indicator_record(indicator: Indicator, row: QuoteRow) -> IndicatorRecord:
    return IndicatorRecord(
        indicator=indicator,
        latest=format_number(row.price),
        change=format_number(row.change),
        percent=format_percent(row.change_percent),
        label=YIELD_LABEL if indicator is Indicator.TEN_YEAR_YIELD else None,
    )
