"""Response models for the Alpaca REST endpoints.

Documented fields are typed; anything else upstream sends is kept as an extra
field so the tool payload carries the record unchanged.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UpstreamModel(BaseModel):
    """Base model tolerating unknown fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Dump only the fields upstream actually sent."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Asset(UpstreamModel):
    """Entry of ``GET /v1/assets``."""

    id: str | None = None
    asset_class: str | None = Field(None, alias="class")
    exchange: str | None = None
    symbol: str | None = None
    name: str | None = None
    status: str | None = None
    tradable: bool | None = None
    marginable: bool | None = None
    shortable: bool | None = None
    easy_to_borrow: bool | None = None
    fractionable: bool | None = None


class BarsPage(UpstreamModel):
    """One page of ``GET /v2/stocks/bars``. Bars are keyed by symbol."""

    bars: dict[str, Any] = Field(default_factory=dict)
    next_page_token: str | None = None

    @field_validator("bars", mode="before")
    @classmethod
    def _null_bars(cls, value: Any) -> Any:
        return {} if value is None else value


class CalendarDay(UpstreamModel):
    """Entry of ``GET /v2/calendar``."""

    date: str | None = None
    open: str | None = None
    close: str | None = None
    session_open: str | None = None
    session_close: str | None = None
    settlement_date: str | None = None


class NewsArticle(UpstreamModel):
    """Entry of the ``news`` array of ``GET /v1beta1/news``."""

    id: int | str | None = None
    headline: str | None = None
    author: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    summary: str | None = None
    content: str | None = None
    url: str | None = None
    symbols: list[str] | None = None
    source: str | None = None
    images: list[dict[str, Any]] | None = None


class NewsPage(UpstreamModel):
    """One page of ``GET /v1beta1/news``."""

    news: list[NewsArticle] = Field(default_factory=list)
    next_page_token: str | None = None

    @field_validator("news", mode="before")
    @classmethod
    def _null_news(cls, value: Any) -> Any:
        return [] if value is None else value
