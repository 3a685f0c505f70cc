"""Pydantic schemas for the Yahoo Finance quote response."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# Strict so that strings and booleans are rejected instead of coerced.
Number = Union[StrictInt, StrictFloat]


class QuoteRow(BaseModel):
    """One entry of quoteResponse.result; unknown fields are ignored."""

    # NaN, Infinity and overflowing literals such as 1e400 are not prices
    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    symbol: Optional[str] = None
    price: Number = Field(..., alias="regularMarketPrice")
    change: Number = Field(..., alias="regularMarketChange")
    change_percent: Number = Field(..., alias="regularMarketChangePercent")


class QuoteResponseBody(BaseModel):
    """The quoteResponse object."""

    result: list[QuoteRow]


class QuoteResponseEnvelope(BaseModel):
    """Top-level response document."""

    model_config = ConfigDict(populate_by_name=True)

    quote_response: QuoteResponseBody = Field(..., alias="quoteResponse")
