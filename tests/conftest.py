"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import pytest

from blobcost.pricing import DEFAULT_PRICING, PricingModel


@pytest.fixture
def scenario_a() -> dict[str, Any]:
    """Steady growth scenario: 100 new projects a month, tiers 1/3/8."""
    return {
        "numUsers": 100,
        "projectsPerUserPerMonth": 1,
        "dataObjectsPerProject": 50,
        "avgDataObjectSizeMB": 1.0,
        "getsPerObjectInFirstMonth": 10,
        "hotTierMonths": 1,
        "coolTierMonths": 3,
        "archiveTierMonths": 8,
    }


@pytest.fixture
def default_pricing() -> PricingModel:
    """Default Azure Blob price table."""
    return DEFAULT_PRICING


@pytest.fixture
def scenario_file(tmp_path: Path) -> Path:
    """Scenario file with two scenarios and a partial price table."""
    config_file = tmp_path / "scenarios.yaml"
    config_file.write_text(
        """
version: "1.0"
months: 12
currency: eur
pricing:
  storage:
    hotTier: 0.02
    coolTier: 0.012
  dataTransfer:
    freeLimitGB: 100
scenarios:
  - name: "Small team"
    description: "Ten users, light usage"
    parameters:
      numUsers: 10
      projectsPerUserPerMonth: 3
      dataObjectsPerProject: 50
      avgDataObjectSizeMB: 1.0
      getsPerImageInFirstMonth: 10
      hotTierMonths: 1
      coolTierMonths: 3
      archiveTierMonths: 8
  - name: "Growth"
    parameters:
      num_users: 100
      projects_per_user_per_month: 4
      data_objects_per_project: 100
      avg_data_object_size_mb: 0.9
      gets_per_object_in_first_month: 15
"""
    )
    return config_file
