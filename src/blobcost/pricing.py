"""Tiered blob storage pricing model."""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from utils import coerce_number


class StorageTier(StrEnum):
    """Blob storage access tiers, in the order data ages through them."""

    HOT = "hot"
    COOL = "cool"
    ARCHIVE = "archive"


# Azure Blob Storage list prices (EUR), LRS, as used by the default scenario set
HOT_TIER_PRICE = 0.02  # per GB per month
COOL_TIER_PRICE = 0.012  # per GB per month
ARCHIVE_TIER_PRICE = 0.001  # per GB per month
READ_OPERATION_PRICE = 0.004 / 10000  # per operation, Hot tier rate
WRITE_OPERATION_PRICE = 0.05 / 10000  # per operation, Hot tier rate
FREE_OUTBOUND_GB = 100.0  # per month
OUTBOUND_PRICE_PER_GB = 0.087


class _LenientPrices(BaseModel):
    """Base for price tables that default or clamp bad numbers instead of failing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_price(cls, value: Any, info: ValidationInfo) -> float:
        """Fall back to the list price for unusable values, clamp negatives to zero."""
        default = cls.model_fields[info.field_name].default
        return coerce_number(value, default=default)


class StoragePricing(_LenientPrices):
    """Storage price per GB-month for each tier."""

    hot_tier: float = Field(
        default=HOT_TIER_PRICE,
        validation_alias=AliasChoices("hot_tier", "hotTier"),
    )
    cool_tier: float = Field(
        default=COOL_TIER_PRICE,
        validation_alias=AliasChoices("cool_tier", "coolTier"),
    )
    archive_tier: float = Field(
        default=ARCHIVE_TIER_PRICE,
        validation_alias=AliasChoices("archive_tier", "archiveTier"),
    )


class TransactionPricing(_LenientPrices):
    """Price per single read or write operation."""

    read: float = Field(default=READ_OPERATION_PRICE)
    write: float = Field(default=WRITE_OPERATION_PRICE)


class DataTransferPricing(_LenientPrices):
    """Outbound data transfer pricing with a monthly free allowance."""

    free_limit_gb: float = Field(
        default=FREE_OUTBOUND_GB,
        validation_alias=AliasChoices("free_limit_gb", "freeLimitGB", "freeLimit"),
    )
    cost_per_gb: float = Field(
        default=OUTBOUND_PRICE_PER_GB,
        validation_alias=AliasChoices("cost_per_gb", "costPerGB"),
    )

    def billable_gb(self, outbound_gb: float) -> float:
        """Volume above the free allowance; the allowance resets every month."""
        return max(0.0, outbound_gb - self.free_limit_gb)


class PricingModel(BaseModel):
    """Complete price table applied by the projection engine."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    storage: StoragePricing = Field(default_factory=StoragePricing)
    transactions: TransactionPricing = Field(default_factory=TransactionPricing)
    data_transfer: DataTransferPricing = Field(
        default_factory=DataTransferPricing,
        validation_alias=AliasChoices("data_transfer", "dataTransfer"),
    )

    @field_validator("storage", "transactions", "data_transfer", mode="before")
    @classmethod
    def default_missing_section(cls, value: Any) -> Any:
        """Treat a missing or malformed section as one made entirely of defaults."""
        if isinstance(value, BaseModel):
            return value
        if isinstance(value, Mapping):
            return dict(value)
        return {}


DEFAULT_PRICING = PricingModel()


def normalize_pricing(pricing: Any = None) -> PricingModel:
    """Build a fully populated price table.

    Args:
        pricing: PricingModel, mapping (snake_case or camelCase keys), or None
            for the default price table

    Returns:
        PricingModel with every price present, finite and non-negative
    """
    if pricing is None:
        return DEFAULT_PRICING
    if isinstance(pricing, PricingModel):
        return pricing
    if not isinstance(pricing, Mapping):
        return DEFAULT_PRICING
    return PricingModel.model_validate(dict(pricing))
