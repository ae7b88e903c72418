"""Cohort-aging cost projection engine.

Every month a new cohort holds the projects created that month. Cohorts age
through the Hot, Cool and Archive tiers by whole months and expire once they
outlive all three. Read, write and outbound activity is charged only in a
cohort's creation month.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from itertools import accumulate
from typing import Any, Optional, Union

import structlog

from blobcost.models import (
    MB_PER_GB,
    MonthlyCost,
    MonthlySeries,
    ProjectionResult,
    Scenario,
    ScenarioParameters,
    normalize_parameters,
)
from blobcost.pricing import PricingModel, StorageTier, normalize_pricing
from utils.logging import get_logger


@dataclass(frozen=True)
class ProjectCohort:
    """All projects created in the same month, aged as one unit."""

    month_created: int
    project_count: float

    def age_at(self, month: int) -> int:
        """Age in months, counting the creation month as 1."""
        return month - self.month_created + 1


@dataclass(frozen=True)
class TierVolumes:
    """Stored GB per tier in a single month."""

    hot_gb: float = 0.0
    cool_gb: float = 0.0
    archive_gb: float = 0.0


@dataclass(frozen=True)
class ProjectionState:
    """Cohorts alive at the end of a month; never mutated in place."""

    cohorts: tuple[ProjectCohort, ...] = ()

    def with_cohort(self, cohort: ProjectCohort) -> "ProjectionState":
        return ProjectionState(cohorts=self.cohorts + (cohort,))


def classify_age(age: int, parameters: ScenarioParameters) -> Optional[StorageTier]:
    """Map a cohort age to the tier it is stored in.

    Tier ranges are consecutive and closed on the right: Hot covers ages
    1..hot, Cool hot+1..hot+cool, Archive the following archive months.

    Args:
        age: Cohort age in months (1 in the creation month)
        parameters: Normalized scenario parameters

    Returns:
        Storage tier, or None once the cohort has expired
    """
    hot_end = parameters.hot_tier_months
    cool_end = hot_end + parameters.cool_tier_months
    archive_end = cool_end + parameters.archive_tier_months

    if age <= hot_end:
        return StorageTier.HOT
    if age <= cool_end:
        return StorageTier.COOL
    if age <= archive_end:
        return StorageTier.ARCHIVE
    return None


def distribute_tiers(
    cohorts: Iterable[ProjectCohort], month: int, parameters: ScenarioParameters
) -> TierVolumes:
    """Sum the stored volume of every cohort into its tier for the given month."""
    volumes = {tier: 0.0 for tier in StorageTier}
    project_size_gb = parameters.project_size_gb

    for cohort in cohorts:
        tier = classify_age(cohort.age_at(month), parameters)
        if tier is None:
            # Expired cohorts cost nothing and incur no delete operations
            continue
        volumes[tier] += cohort.project_count * project_size_gb

    return TierVolumes(
        hot_gb=volumes[StorageTier.HOT],
        cool_gb=volumes[StorageTier.COOL],
        archive_gb=volumes[StorageTier.ARCHIVE],
    )


def step(
    state: ProjectionState,
    month: int,
    parameters: ScenarioParameters,
    pricing: PricingModel,
) -> tuple[ProjectionState, MonthlyCost]:
    """Advance the projection by one month.

    Args:
        state: Cohorts created before this month
        month: Month being simulated (1-based)
        parameters: Normalized scenario parameters
        pricing: Normalized price table

    Returns:
        Tuple of (state including this month's cohort, cost breakdown of the month)
    """
    new_projects = parameters.new_projects_per_month
    if new_projects > 0:
        state = state.with_cohort(ProjectCohort(month_created=month, project_count=new_projects))

    volumes = distribute_tiers(state.cohorts, month, parameters)
    storage_hot_cost = volumes.hot_gb * pricing.storage.hot_tier
    storage_cool_cost = volumes.cool_gb * pricing.storage.cool_tier
    storage_archive_cost = volumes.archive_gb * pricing.storage.archive_tier
    storage_cost = storage_hot_cost + storage_cool_cost + storage_archive_cost

    # Reads and writes happen only while the new cohort is being created
    read_operations = (
        new_projects * parameters.data_objects_per_project * parameters.gets_per_object_in_first_month
    )
    # One write per blob plus one project metadata write
    write_operations = new_projects * (parameters.data_objects_per_project + 1)
    transaction_read_cost = read_operations * pricing.transactions.read
    transaction_write_cost = write_operations * pricing.transactions.write
    transaction_cost = transaction_read_cost + transaction_write_cost

    # Every read transfers one average sized blob out
    outbound_gb = read_operations * parameters.avg_data_object_size_mb / MB_PER_GB
    billable_outbound_gb = pricing.data_transfer.billable_gb(outbound_gb)
    outbound_cost = billable_outbound_gb * pricing.data_transfer.cost_per_gb

    month_cost = MonthlyCost(
        month=month,
        new_projects=new_projects,
        hot_tier_gb=volumes.hot_gb,
        cool_tier_gb=volumes.cool_gb,
        archive_tier_gb=volumes.archive_gb,
        storage_hot_cost=storage_hot_cost,
        storage_cool_cost=storage_cool_cost,
        storage_archive_cost=storage_archive_cost,
        storage_cost=storage_cost,
        read_operations=read_operations,
        write_operations=write_operations,
        transaction_read_cost=transaction_read_cost,
        transaction_write_cost=transaction_write_cost,
        transaction_cost=transaction_cost,
        outbound_gb=outbound_gb,
        billable_outbound_gb=billable_outbound_gb,
        outbound_cost=outbound_cost,
        total_cost=storage_cost + transaction_cost + outbound_cost,
    )
    return state, month_cost


def cumulative_sum(values: Iterable[float]) -> list[float]:
    """Running total of a cost series."""
    return list(accumulate(values))


def project(
    parameters: Any,
    months_to_calculate: int = 24,
    pricing: Any = None,
    logger: Optional[structlog.BoundLogger] = None,
) -> ProjectionResult:
    """Project monthly and cumulative storage cost for one scenario.

    Malformed numeric input is defaulted or clamped rather than rejected, so
    the result never holds negative or NaN values.

    Args:
        parameters: ScenarioParameters or mapping of scenario parameters; None
            yields an empty result
        months_to_calculate: Projection horizon in months
        pricing: PricingModel or mapping of prices (None for the default table)
        logger: Optional logger instance

    Returns:
        ProjectionResult with one entry per month in every series
    """
    logger = logger or get_logger("projection_engine")

    normalized = normalize_parameters(parameters)
    if normalized is None:
        logger.warning("Projection requested without scenario parameters")
        return ProjectionResult()
    price_table = normalize_pricing(pricing)

    state = ProjectionState()
    monthly_costs: list[MonthlyCost] = []
    for month in range(1, int(months_to_calculate) + 1):
        state, month_cost = step(state, month, normalized, price_table)
        monthly_costs.append(month_cost)

    series = MonthlySeries.from_months(monthly_costs)
    result = ProjectionResult(
        monthly_costs=monthly_costs,
        monthly_series=series,
        cumulative_total_costs=cumulative_sum(series.total_costs),
    )

    logger.debug(
        "Projection calculated",
        months=result.months,
        cohorts=len(state.cohorts),
        total_cost=result.total_cost,
    )
    return result


ScenarioInput = Union[Iterable[Scenario], Mapping[str, Any]]


class CostProjector:
    """Projects storage costs for one or more scenarios against a price table."""

    def __init__(
        self,
        pricing: Any = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """Initialize cost projector.

        Args:
            pricing: PricingModel or mapping of prices (None for the default table)
            logger: Optional logger instance
        """
        self.pricing = normalize_pricing(pricing)
        self.logger = logger or get_logger("cost_projector")

    def project(self, parameters: Any, months_to_calculate: int = 24) -> ProjectionResult:
        """Project costs for a single set of parameters."""
        return project(parameters, months_to_calculate, self.pricing, logger=self.logger)

    def project_scenarios(
        self, scenarios: ScenarioInput, months_to_calculate: int = 24
    ) -> dict[str, ProjectionResult]:
        """Project every scenario independently.

        Args:
            scenarios: Scenario records, or a mapping of scenario name to parameters
            months_to_calculate: Projection horizon in months

        Returns:
            Dictionary mapping scenario names to results; scenarios without
            parameters are left out
        """
        if isinstance(scenarios, Mapping):
            named = list(scenarios.items())
        else:
            named = [(scenario.name, scenario.parameters) for scenario in scenarios]

        results = {}
        for name, parameters in named:
            if parameters is None:
                self.logger.debug("Skipping scenario without parameters", scenario=name)
                continue
            results[name] = self.project(parameters, months_to_calculate)

        self.logger.debug(
            "Scenarios projected",
            scenarios=len(results),
            months=months_to_calculate,
        )
        return results
