"""Pydantic data models: the system's type contracts."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# --- Type Aliases ---

CommodityId = str
HSCode = str
ProviderName = str

# --- Enumerations ---


class CommodityCategory(StrEnum):
    """Reference catalog commodity groups."""

    METALS = "metals"
    ENERGY = "energy"
    AGRICULTURE = "agriculture"
    PRECIOUS_METALS = "precious_metals"
    PLASTICS = "plastics"


class Trend(StrEnum):
    """Direction of the latest price move. Zero change counts as DOWN."""

    UP = "up"
    DOWN = "down"


class Provenance(StrEnum):
    """Where a resolved price came from."""

    API = "api"
    SIMULATED = "simulated"


class Country(StrEnum):
    """Jurisdictions the news feed is restricted to."""

    US = "US"
    CA = "CA"
    MX = "MX"


class NewsCategory(StrEnum):
    """Headline topic buckets."""

    TARIFF = "tariff"
    TRADE = "trade"
    POLICY = "policy"
    COMMODITY = "commodity"


class Impact(StrEnum):
    """Estimated market impact of a headline."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TariffStatus(StrEnum):
    """Lifecycle status of a jurisdiction's tariff rate."""

    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"


# --- Reference Models ---


class TrackedItem(BaseModel):
    """A commodity from the reference catalog."""

    model_config = ConfigDict(frozen=True)

    id: CommodityId
    name: str
    category: CommodityCategory
    base_price: float
    unit: str
    exchange: str
    description: str = ""
    base_change: float = 0.0

    @field_validator("base_price")
    @classmethod
    def base_price_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"base_price must be > 0, got {v}")
        return v

    @property
    def price_decimals(self) -> int:
        """Rounding precision for prices quoted in this item's unit."""
        return 4 if "USD/lb" in self.unit else 2


class TariffRate(BaseModel):
    """One jurisdiction's rate for an HS code."""

    model_config = ConfigDict(frozen=True)

    rate: float
    effective_date: date
    status: TariffStatus = TariffStatus.ACTIVE

    @field_validator("rate")
    @classmethod
    def rate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"rate must be >= 0, got {v}")
        return v


class TariffRecord(BaseModel):
    """Static tariff schedule entry keyed by HS code."""

    model_config = ConfigDict(frozen=True)

    hs_code: HSCode
    description: str
    category: str
    base_rate: float = 0.0
    unit: str = "ad valorem"
    notes: str = ""
    current_rates: dict[str, TariffRate]

    def rate_for(self, jurisdiction: str) -> TariffRate | None:
        """Return the rate entry for a jurisdiction code, or None."""
        return self.current_rates.get(jurisdiction)


# --- Price Models ---


class PriceSample(BaseModel):
    """A single observed price for a tracked item."""

    model_config = ConfigDict(frozen=True)

    item_id: CommodityId
    price: float
    observed_at: datetime


class PriceHistory(BaseModel):
    """The two most recent samples for an item plus the last computed change."""

    model_config = ConfigDict(frozen=True)

    previous: PriceSample
    current: PriceSample
    change_percent: float = 0.0


class ProviderQuote(BaseModel):
    """What a provider adapter returns on success."""

    model_config = ConfigDict(frozen=True)

    price: float
    change_percent: float | None = None
    as_of: str | None = None
    provider: ProviderName = "unknown"


class ResolvedQuote(BaseModel):
    """A tracked item's price after one resolution cycle."""

    model_config = ConfigDict(frozen=True)

    item_id: CommodityId
    name: str
    category: CommodityCategory
    unit: str
    exchange: str
    price: float
    change_percent: float
    trend: Trend
    provenance: Provenance
    observed_at: datetime
    provider: ProviderName | None = None

    @model_validator(mode="after")
    def trend_matches_change(self) -> ResolvedQuote:
        expected = Trend.UP if self.change_percent > 0 else Trend.DOWN
        if self.trend != expected:
            raise ValueError(
                f"trend {self.trend!r} inconsistent with change_percent "
                f"{self.change_percent}"
            )
        return self


# --- News Models ---


class RawArticle(BaseModel):
    """Unclassified article as returned by a news provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    summary: str
    source: str
    published_at: datetime
    url: str | None = None


class NewsArticle(BaseModel):
    """A classified trade-news headline."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    summary: str
    source: str
    published_at: datetime
    url: str | None = None
    country: Country
    category: NewsCategory
    impact: Impact


# --- Provider Status ---


class ProviderStatus(BaseModel):
    """Configuration state for one upstream provider."""

    model_config = ConfigDict(frozen=True)

    configured: bool
    key: str
