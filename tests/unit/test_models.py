"""Unit tests for scenario parameter and result models."""

from types import MappingProxyType

import pytest
from pydantic import ValidationError

from blobcost.models import (
    DEFAULT_SCENARIO,
    MonthlyCost,
    MonthlySeries,
    ProjectionResult,
    Scenario,
    ScenarioParameters,
    normalize_parameters,
)


def _month(month: int, total: float) -> MonthlyCost:
    return MonthlyCost(
        month=month,
        new_projects=10.0,
        hot_tier_gb=1.0,
        cool_tier_gb=2.0,
        archive_tier_gb=3.0,
        storage_hot_cost=0.02,
        storage_cool_cost=0.024,
        storage_archive_cost=0.003,
        storage_cost=0.047,
        read_operations=100.0,
        write_operations=20.0,
        transaction_read_cost=0.00004,
        transaction_write_cost=0.0001,
        transaction_cost=0.00014,
        outbound_gb=0.5,
        billable_outbound_gb=0.0,
        outbound_cost=0.0,
        total_cost=total,
    )


class TestScenarioParameters:
    """Tests for ScenarioParameters normalization."""

    def test_defaults(self) -> None:
        """Test defaults of a record without fields."""
        params = ScenarioParameters()

        assert params.num_users == 0
        assert params.projects_per_user_per_month == 0
        assert params.data_objects_per_project == 0
        assert params.avg_data_object_size_mb == 0
        assert params.gets_per_object_in_first_month == 0
        assert params.hot_tier_months == 1
        assert params.cool_tier_months == 3
        assert params.archive_tier_months == 9

    def test_camel_case_keys(self) -> None:
        """Test parameters keyed the way scenario stores save them."""
        params = ScenarioParameters.model_validate(
            {
                "numUsers": 100,
                "projectsPerUserPerMonth": 4,
                "dataObjectsPerProject": 100,
                "avgDataObjectSizeMB": 0.9,
                "getsPerObjectInFirstMonth": 15,
                "hotTierMonths": 2,
                "coolTierMonths": 4,
                "archiveTierMonths": 6,
            }
        )

        assert params.num_users == 100
        assert params.avg_data_object_size_mb == 0.9
        assert params.gets_per_object_in_first_month == 15
        assert params.retention_months == 12

    def test_legacy_gets_key(self) -> None:
        """Test the older per-image read count key is accepted."""
        params = ScenarioParameters.model_validate({"getsPerImageInFirstMonth": 7})

        assert params.gets_per_object_in_first_month == 7

    def test_tier_months_floored_and_clamped(self) -> None:
        """Test tier durations are whole months with Hot at least one."""
        params = ScenarioParameters.model_validate(
            {"hotTierMonths": 0, "coolTierMonths": 2.9, "archiveTierMonths": -4}
        )

        assert params.hot_tier_months == 1
        assert params.cool_tier_months == 2
        assert params.archive_tier_months == 0

    def test_hot_months_fraction_below_one(self) -> None:
        """Test a fractional Hot duration below one month is raised to one."""
        assert ScenarioParameters(hot_tier_months=0.5).hot_tier_months == 1

    @pytest.mark.parametrize("bad_value", [None, "many", float("nan"), float("inf"), [1]])
    def test_unusable_values_default(self, bad_value: object) -> None:
        """Test unusable values fall back to defaults instead of failing."""
        params = ScenarioParameters.model_validate(
            {
                "numUsers": bad_value,
                "avgDataObjectSizeMB": bad_value,
                "coolTierMonths": bad_value,
                "hotTierMonths": bad_value,
            }
        )

        assert params.num_users == 0
        assert params.avg_data_object_size_mb == 0
        assert params.cool_tier_months == 3
        assert params.hot_tier_months == 1

    def test_negative_amounts_clamped(self) -> None:
        """Test negative counts and sizes are clamped to zero."""
        params = ScenarioParameters.model_validate(
            {"numUsers": -5, "dataObjectsPerProject": -1, "getsPerObjectInFirstMonth": -3}
        )

        assert params.num_users == 0
        assert params.data_objects_per_project == 0
        assert params.gets_per_object_in_first_month == 0

    def test_numeric_strings(self) -> None:
        """Test numbers given as strings (e.g. from env substitution)."""
        params = ScenarioParameters.model_validate({"numUsers": "250", "avgDataObjectSizeMB": "2.5"})

        assert params.num_users == 250
        assert params.avg_data_object_size_mb == 2.5

    def test_derived_values(self) -> None:
        """Test monthly project count and project size."""
        params = ScenarioParameters(
            num_users=10,
            projects_per_user_per_month=3,
            data_objects_per_project=512,
            avg_data_object_size_mb=2.0,
        )

        assert params.new_projects_per_month == 30
        assert params.project_size_gb == 1.0

    def test_frozen(self) -> None:
        """Test parameters cannot be changed after creation."""
        params = ScenarioParameters(num_users=1)

        with pytest.raises(ValidationError):
            params.num_users = 2


class TestNormalizeParameters:
    """Tests for normalize_parameters."""

    def test_none(self) -> None:
        """Test absent parameters stay absent."""
        assert normalize_parameters(None) is None

    def test_model_passthrough(self) -> None:
        """Test an existing record is returned as is."""
        params = ScenarioParameters(num_users=3)

        assert normalize_parameters(params) is params

    def test_mapping(self) -> None:
        """Test a mapping is validated into a record."""
        assert normalize_parameters({"numUsers": 3}).num_users == 3

    def test_read_only_mapping(self) -> None:
        """Test any Mapping type is validated, not only dict."""
        params = normalize_parameters(MappingProxyType({"numUsers": 100, "projectsPerUserPerMonth": 2}))

        assert params.num_users == 100
        assert params.new_projects_per_month == 200

    def test_unusable_object(self) -> None:
        """Test a non-mapping value gives an all-default record."""
        assert normalize_parameters("not parameters") == ScenarioParameters()


def test_default_scenario() -> None:
    """Test the built-in default scenario."""
    assert DEFAULT_SCENARIO.name == "Default Scenario"
    assert DEFAULT_SCENARIO.parameters is not None
    assert DEFAULT_SCENARIO.parameters.new_projects_per_month == 400
    assert DEFAULT_SCENARIO.parameters.retention_months == 13


def test_scenario_requires_name() -> None:
    """Test scenarios must be named."""
    with pytest.raises(ValidationError):
        Scenario(name="")


class TestMonthlyCost:
    """Tests for MonthlyCost record."""

    def test_stored_gb(self) -> None:
        """Test volume across all tiers."""
        assert _month(1, 0.1).stored_gb == 6.0

    def test_to_dict(self) -> None:
        """Test dictionary conversion with and without rounding."""
        month = _month(3, 0.04714)

        assert month.to_dict()["total_cost"] == 0.04714
        rounded = month.to_dict(precision=2)
        assert rounded["month"] == 3
        assert rounded["total_cost"] == 0.05
        assert rounded["transaction_read_cost"] == 0.0


class TestProjectionResult:
    """Tests for ProjectionResult record."""

    def test_empty(self) -> None:
        """Test an empty result."""
        result = ProjectionResult()

        assert result.is_empty
        assert result.months == 0
        assert result.total_cost == 0.0
        assert result.to_dict()["monthly_costs"] == []

    def test_series_from_months(self) -> None:
        """Test parallel series are built from per-month records."""
        months = [_month(1, 1.0), _month(2, 2.0)]
        series = MonthlySeries.from_months(months)

        assert len(series) == 2
        assert series.total_costs == [1.0, 2.0]
        assert series.storage_hot_costs == [0.02, 0.02]
        assert series.transaction_write_costs == [0.0001, 0.0001]

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        months = [_month(1, 1.0), _month(2, 2.0)]
        result = ProjectionResult(
            monthly_costs=months,
            monthly_series=MonthlySeries.from_months(months),
            cumulative_total_costs=[1.0, 3.0],
        )

        data = result.to_dict(precision=3)

        assert data["months"] == 2
        assert data["total_cost"] == 3.0
        assert data["cumulative_total_costs"] == [1.0, 3.0]
        assert data["monthly_series"]["storage_costs"] == [0.047, 0.047]
        assert data["monthly_costs"][1]["month"] == 2
