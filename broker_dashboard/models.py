"""Dashboard models using Pydantic v2."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from broker_dashboard.core.constants import PRICE_FLOOR


class Company(BaseModel):
    """Company owning one or more brokerage accounts."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Company identifier")
    name: str = Field(..., description="Display name")


class Account(BaseModel):
    """Brokerage account and the tickers it subscribes to.

    The ticker list travels under the ``stocks`` key on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Account identifier")
    name: str = Field(..., description="Display name")
    tickers: tuple[str, ...] = Field(
        default=(), alias="stocks", description="Subscribed tickers in display order"
    )

    @field_validator("tickers")
    @classmethod
    def validate_tickers(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure tickers are uppercase and non-empty."""
        cleaned = tuple(ticker.upper().strip() for ticker in v)
        if any(not ticker for ticker in cleaned):
            raise ValueError("Ticker cannot be empty")
        return cleaned


class Quote(BaseModel):
    """Simulated price of one ticker inside one account."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    ticker: str = Field(..., description="Ticker symbol")
    price: float = Field(..., ge=PRICE_FLOOR, description="Last simulated price")
    change: float = Field(default=0.0, description="Price change applied by the last update")
    updated_at: datetime = Field(..., alias="updatedAt", description="Time of the last update")

    @field_serializer("updated_at")
    def serialize_updated_at(self, value: datetime) -> int:
        """Epoch milliseconds, the resolution the browser client expects."""
        return int(value.timestamp() * 1000)


class AccountData(BaseModel):
    """Body returned by the account data endpoint."""

    stocks: list[Quote] = Field(default_factory=list)
