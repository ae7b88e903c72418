"""Text and JSON rendering of projection results for the CLI."""

from typing import Any

import click

from blobcost.models import ProjectionResult, Scenario
from utils.output import (
    format_currency,
    print_header,
    print_key_value,
    print_section,
    print_table,
)


def projection_to_dict(
    scenario: Scenario, result: ProjectionResult, precision: int = 6
) -> dict[str, Any]:
    """Combine a scenario and its result into a JSON-ready dictionary."""
    data: dict[str, Any] = {
        "description": scenario.description,
        "parameters": scenario.parameters.model_dump() if scenario.parameters else None,
    }
    data.update(result.to_dict(precision=precision))
    return data


def print_projection(
    scenario: Scenario,
    result: ProjectionResult,
    currency: str = "EUR",
    breakdown: bool = False,
) -> None:
    """Print one scenario's projection.

    Args:
        scenario: Projected scenario
        result: Projection result
        currency: Currency code used for amounts
        breakdown: Also print the month by month table
    """
    params = scenario.parameters
    print_header(f"Cost Projection: {scenario.name}")
    if scenario.description:
        click.echo(f"  {scenario.description}")

    if params is not None:
        print_section("Parameters")
        print_key_value("Users", f"{params.num_users:,}")
        print_key_value("Projects / User / Month", f"{params.projects_per_user_per_month:g}")
        print_key_value("Objects / Project", f"{params.data_objects_per_project:g}")
        print_key_value("Avg Object Size", f"{params.avg_data_object_size_mb:g} MB")
        print_key_value("Gets / Object (First Month)", f"{params.gets_per_object_in_first_month:g}")
        print_key_value(
            "Tiering (Hot/Cool/Archive)",
            f"{params.hot_tier_months}/{params.cool_tier_months}/{params.archive_tier_months} months",
        )
        print_key_value("Retention", f"{params.retention_months} months")

    if result.is_empty:
        print_section("Costs")
        click.echo("  No data")
        return

    def money(value: float) -> str:
        return format_currency(value, currency)

    last = result.monthly_costs[-1]
    series = result.monthly_series

    print_section(f"Month {last.month}")
    print_key_value("Stored", f"{last.stored_gb:,.2f} GB")
    print_key_value("Storage", money(last.storage_cost))
    print_key_value("Transactions", money(last.transaction_cost))
    print_key_value("Outbound", money(last.outbound_cost))
    print_key_value("Total", money(last.total_cost), value_color="green")

    print_section(f"{result.months}-Month Totals")
    print_key_value("Storage", money(sum(series.storage_costs)))
    print_key_value("Transactions", money(sum(series.transaction_costs)))
    print_key_value("Outbound", money(sum(series.outbound_costs)))
    print_key_value("Cumulative Total", money(result.total_cost), value_color="green")

    if breakdown:
        print_section("Monthly Breakdown")
        headers = ["Month", "Hot GB", "Cool GB", "Archive GB", "Storage", "Transactions",
                   "Outbound", "Total", "Cumulative"]
        rows = [
            [
                month.month,
                f"{month.hot_tier_gb:,.2f}",
                f"{month.cool_tier_gb:,.2f}",
                f"{month.archive_tier_gb:,.2f}",
                money(month.storage_cost),
                money(month.transaction_cost),
                money(month.outbound_cost),
                money(month.total_cost),
                money(cumulative),
            ]
            for month, cumulative in zip(result.monthly_costs, result.cumulative_total_costs)
        ]
        print_table(headers, rows, align_right=True)
    click.echo()


def print_comparison(results: dict[str, ProjectionResult], currency: str = "EUR") -> None:
    """Print scenarios side by side, cheapest horizon total first."""
    print_header("Scenario Comparison")
    headers = ["Scenario", "First Month", "Last Month", "Cumulative Total"]
    rows = []
    for name, result in sorted(results.items(), key=lambda item: item[1].total_cost):
        if result.is_empty:
            continue
        rows.append(
            [
                name,
                format_currency(result.monthly_series.total_costs[0], currency),
                format_currency(result.monthly_series.total_costs[-1], currency),
                format_currency(result.total_cost, currency),
            ]
        )
    print_table(headers, rows, align_right=True)
    click.echo()
