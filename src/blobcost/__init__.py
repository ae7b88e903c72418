"""Blob storage cost projection - cohort-aging cost model for tiered object storage."""

__version__ = "0.1.0"

from .engine import CostProjector, project
from .models import (
    DEFAULT_SCENARIO,
    MonthlyCost,
    MonthlySeries,
    ProjectionResult,
    Scenario,
    ScenarioParameters,
)
from .pricing import DEFAULT_PRICING, PricingModel, StorageTier

__all__ = [
    "CostProjector",
    "DEFAULT_PRICING",
    "DEFAULT_SCENARIO",
    "MonthlyCost",
    "MonthlySeries",
    "PricingModel",
    "ProjectionResult",
    "Scenario",
    "ScenarioParameters",
    "StorageTier",
    "project",
]
