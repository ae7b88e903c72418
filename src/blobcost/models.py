"""Scenario inputs and projection result records."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from utils import coerce_number, coerce_whole_number

# Storage sizes are given in MB and billed in GB
MB_PER_GB = 1024


class ScenarioParameters(BaseModel):
    """Usage growth assumptions for one scenario.

    Every field is optional. Values that are missing, non-numeric or not
    finite take the field default, negative values are clamped, and the tier
    durations are floored to whole months. Validation therefore never fails on
    numeric input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    num_users: int = Field(
        default=0,
        validation_alias=AliasChoices("num_users", "numUsers"),
        description="Number of active users",
    )
    projects_per_user_per_month: float = Field(
        default=0.0,
        validation_alias=AliasChoices("projects_per_user_per_month", "projectsPerUserPerMonth"),
        description="Projects each user creates per month",
    )
    data_objects_per_project: float = Field(
        default=0.0,
        validation_alias=AliasChoices("data_objects_per_project", "dataObjectsPerProject"),
        description="Blobs stored per project",
    )
    avg_data_object_size_mb: float = Field(
        default=0.0,
        validation_alias=AliasChoices("avg_data_object_size_mb", "avgDataObjectSizeMB"),
        description="Average blob size in MB",
    )
    gets_per_object_in_first_month: float = Field(
        default=0.0,
        validation_alias=AliasChoices(
            "gets_per_object_in_first_month",
            "getsPerObjectInFirstMonth",
            "getsPerImageInFirstMonth",
        ),
        description="Reads issued against each blob in the month it is created",
    )
    hot_tier_months: int = Field(
        default=1,
        validation_alias=AliasChoices("hot_tier_months", "hotTierMonths"),
        description="Months spent in the Hot tier (at least one)",
    )
    cool_tier_months: int = Field(
        default=3,
        validation_alias=AliasChoices("cool_tier_months", "coolTierMonths"),
        description="Months spent in the Cool tier",
    )
    archive_tier_months: int = Field(
        default=9,
        validation_alias=AliasChoices("archive_tier_months", "archiveTierMonths"),
        description="Months spent in the Archive tier before expiry",
    )

    @field_validator(
        "projects_per_user_per_month",
        "data_objects_per_project",
        "avg_data_object_size_mb",
        "gets_per_object_in_first_month",
        mode="before",
    )
    @classmethod
    def coerce_amount(cls, value: Any) -> float:
        """Default unusable amounts to zero and clamp negatives."""
        return coerce_number(value, default=0.0)

    @field_validator("num_users", mode="before")
    @classmethod
    def coerce_users(cls, value: Any) -> int:
        """Users are counted in whole numbers."""
        return coerce_whole_number(value, default=0)

    @field_validator("hot_tier_months", mode="before")
    @classmethod
    def coerce_hot_months(cls, value: Any) -> int:
        """Data always spends at least one month in the Hot tier."""
        return coerce_whole_number(value, default=1, minimum=1)

    @field_validator("cool_tier_months", "archive_tier_months", mode="before")
    @classmethod
    def coerce_tier_months(cls, value: Any, info: ValidationInfo) -> int:
        """Floor cool and archive durations and clamp them to zero."""
        default = cls.model_fields[info.field_name].default
        return coerce_whole_number(value, default=default, minimum=0)

    @property
    def new_projects_per_month(self) -> float:
        """Projects created across all users in a single month."""
        return self.num_users * self.projects_per_user_per_month

    @property
    def project_size_gb(self) -> float:
        """Stored volume of one project in GB."""
        return self.data_objects_per_project * self.avg_data_object_size_mb / MB_PER_GB

    @property
    def retention_months(self) -> int:
        """Total months a cohort is kept before it expires."""
        return self.hot_tier_months + self.cool_tier_months + self.archive_tier_months


def normalize_parameters(parameters: Any) -> Optional[ScenarioParameters]:
    """Produce a fully populated parameter record.

    Args:
        parameters: ScenarioParameters, mapping (snake_case or camelCase keys)
            or None

    Returns:
        ScenarioParameters, or None when no parameters were supplied at all
    """
    if parameters is None:
        return None
    if isinstance(parameters, ScenarioParameters):
        return parameters
    if not isinstance(parameters, Mapping):
        return ScenarioParameters()
    return ScenarioParameters.model_validate(dict(parameters))


class Scenario(BaseModel):
    """A named set of parameters projected as one line of the comparison."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Scenario name")
    description: str = Field(default="", description="Free text description")
    parameters: Optional[ScenarioParameters] = Field(
        default=None,
        description="Usage assumptions; scenarios without parameters are not projected",
    )


DEFAULT_SCENARIO = Scenario(
    name="Default Scenario",
    description="Basic scenario with default parameters",
    parameters=ScenarioParameters(
        num_users=100,
        projects_per_user_per_month=4,
        data_objects_per_project=100,
        avg_data_object_size_mb=0.9,
        gets_per_object_in_first_month=15,
        hot_tier_months=1,
        cool_tier_months=3,
        archive_tier_months=9,
    ),
)


def _rounded(values: dict[str, Any], precision: Optional[int]) -> dict[str, Any]:
    if precision is None:
        return values
    return {
        key: round(value, precision) if isinstance(value, float) else value
        for key, value in values.items()
    }


@dataclass(frozen=True)
class MonthlyCost:
    """Full cost breakdown of one simulated month."""

    month: int
    new_projects: float
    hot_tier_gb: float
    cool_tier_gb: float
    archive_tier_gb: float
    storage_hot_cost: float
    storage_cool_cost: float
    storage_archive_cost: float
    storage_cost: float
    read_operations: float
    write_operations: float
    transaction_read_cost: float
    transaction_write_cost: float
    transaction_cost: float
    outbound_gb: float
    billable_outbound_gb: float
    outbound_cost: float
    total_cost: float

    @property
    def stored_gb(self) -> float:
        """Volume held across all tiers this month."""
        return self.hot_tier_gb + self.cool_tier_gb + self.archive_tier_gb

    def to_dict(self, precision: Optional[int] = None) -> dict[str, Any]:
        """Convert to dictionary, optionally rounding floats."""
        return _rounded(asdict(self), precision)


@dataclass
class MonthlySeries:
    """Parallel per-month cost sequences, one entry per simulated month."""

    storage_costs: list[float] = field(default_factory=list)
    transaction_costs: list[float] = field(default_factory=list)
    outbound_costs: list[float] = field(default_factory=list)
    total_costs: list[float] = field(default_factory=list)
    storage_hot_costs: list[float] = field(default_factory=list)
    storage_cool_costs: list[float] = field(default_factory=list)
    storage_archive_costs: list[float] = field(default_factory=list)
    transaction_read_costs: list[float] = field(default_factory=list)
    transaction_write_costs: list[float] = field(default_factory=list)

    @classmethod
    def from_months(cls, monthly_costs: list[MonthlyCost]) -> "MonthlySeries":
        """Split per-month records into parallel series."""
        return cls(
            storage_costs=[m.storage_cost for m in monthly_costs],
            transaction_costs=[m.transaction_cost for m in monthly_costs],
            outbound_costs=[m.outbound_cost for m in monthly_costs],
            total_costs=[m.total_cost for m in monthly_costs],
            storage_hot_costs=[m.storage_hot_cost for m in monthly_costs],
            storage_cool_costs=[m.storage_cool_cost for m in monthly_costs],
            storage_archive_costs=[m.storage_archive_cost for m in monthly_costs],
            transaction_read_costs=[m.transaction_read_cost for m in monthly_costs],
            transaction_write_costs=[m.transaction_write_cost for m in monthly_costs],
        )

    def __len__(self) -> int:
        return len(self.total_costs)

    def to_dict(self, precision: Optional[int] = None) -> dict[str, list[float]]:
        """Convert to dictionary of lists, optionally rounding values."""
        series = asdict(self)
        if precision is None:
            return series
        return {name: [round(v, precision) for v in values] for name, values in series.items()}


@dataclass
class ProjectionResult:
    """Output of one projection run."""

    monthly_costs: list[MonthlyCost] = field(default_factory=list)
    monthly_series: MonthlySeries = field(default_factory=MonthlySeries)
    cumulative_total_costs: list[float] = field(default_factory=list)

    @property
    def months(self) -> int:
        """Number of simulated months."""
        return len(self.monthly_costs)

    @property
    def is_empty(self) -> bool:
        """True when the projection holds no data (e.g. no parameters supplied)."""
        return not self.monthly_costs

    @property
    def total_cost(self) -> float:
        """Cost accumulated over the whole horizon."""
        return self.cumulative_total_costs[-1] if self.cumulative_total_costs else 0.0

    def to_dict(self, precision: Optional[int] = None) -> dict[str, Any]:
        """Convert to dictionary.

        Args:
            precision: Number of decimals to round floats to (None keeps full precision)

        Returns:
            Dictionary with the per-month records, the parallel series and the
            cumulative series
        """
        cumulative = self.cumulative_total_costs
        if precision is not None:
            cumulative = [round(v, precision) for v in cumulative]
        return {
            "months": self.months,
            "total_cost": round(self.total_cost, precision) if precision is not None else self.total_cost,
            "monthly_costs": [m.to_dict(precision) for m in self.monthly_costs],
            "monthly_series": self.monthly_series.to_dict(precision),
            "cumulative_total_costs": cumulative,
        }
