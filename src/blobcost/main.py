"""Main entry point for the blob storage cost projection CLI."""

import json
import sys
import uuid
from pathlib import Path
from typing import Any, Optional

import click

from blobcost.config import load_config
from blobcost.engine import CostProjector
from blobcost.exceptions import ConfigurationError
from blobcost.models import DEFAULT_SCENARIO, Scenario, ScenarioParameters
from blobcost.pricing import DEFAULT_PRICING
from blobcost.report import print_comparison, print_projection, projection_to_dict
from utils.logging import configure_logging
from utils.output import print_warning

# CLI option name -> ScenarioParameters field
PARAMETER_OPTIONS = {
    "users": "num_users",
    "projects_per_user": "projects_per_user_per_month",
    "objects_per_project": "data_objects_per_project",
    "object_size_mb": "avg_data_object_size_mb",
    "gets_per_object": "gets_per_object_in_first_month",
    "hot_months": "hot_tier_months",
    "cool_months": "cool_tier_months",
    "archive_months": "archive_tier_months",
}


def _ad_hoc_scenario(overrides: dict[str, Any]) -> Scenario:
    """Build a scenario from the default one with command line overrides applied."""
    given = {
        PARAMETER_OPTIONS[option]: value
        for option, value in overrides.items()
        if value is not None
    }
    if not given:
        return DEFAULT_SCENARIO

    base = DEFAULT_SCENARIO.parameters.model_dump() if DEFAULT_SCENARIO.parameters else {}
    base.update(given)
    return Scenario(
        name="Ad hoc Scenario",
        description="Default scenario with command line overrides",
        parameters=ScenarioParameters.model_validate(base),
    )


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to scenario file (YAML). Without it the default scenario is projected.",
)
@click.option(
    "--scenario",
    "-s",
    "scenario_names",
    multiple=True,
    help="Project only the named scenario (repeatable, requires --config)",
)
@click.option(
    "--months",
    "-m",
    type=click.IntRange(min=1),
    help="Projection horizon in months (default: from config, or 24)",
)
@click.option("--users", type=int, help="Number of users")
@click.option("--projects-per-user", type=float, help="Projects created per user per month")
@click.option("--objects-per-project", type=float, help="Data objects (blobs) per project")
@click.option("--object-size-mb", type=float, help="Average data object size in MB")
@click.option("--gets-per-object", type=float, help="Reads per object in its first month")
@click.option("--hot-months", type=int, help="Months in the Hot tier (minimum 1)")
@click.option("--cool-months", type=int, help="Months in the Cool tier")
@click.option("--archive-months", type=int, help="Months in the Archive tier")
@click.option(
    "--breakdown",
    is_flag=True,
    default=False,
    help="Print the month by month cost table",
)
@click.option(
    "--output-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARN", "ERROR", "CRITICAL"]),
    help="Log level",
)
@click.option(
    "--log-format",
    default="console",
    type=click.Choice(["console", "json"], case_sensitive=False),
    help="Log format: 'console' for human-readable output, 'json' for structured logs (default: console)",
)
def main(
    config: Optional[Path],
    scenario_names: tuple[str, ...],
    months: Optional[int],
    users: Optional[int],
    projects_per_user: Optional[float],
    objects_per_project: Optional[float],
    object_size_mb: Optional[float],
    gets_per_object: Optional[float],
    hot_months: Optional[int],
    cool_months: Optional[int],
    archive_months: Optional[int],
    breakdown: bool,
    output_format: str,
    verbose: bool,
    log_level: str,
    log_format: str,
) -> None:
    """Project monthly and cumulative blob storage costs.

    New projects are created every month and their data ages from the Hot
    tier through Cool and Archive until it expires. Each month is charged for
    stored volume per tier, for reads and writes of newly created data and
    for outbound transfer above the monthly free allowance.

    Examples:

    \b
    # Project the default scenario over 24 months
    blob-cost-projection

    \b
    # Ad hoc scenario with a monthly table
    blob-cost-projection --users 250 --object-size-mb 2.5 --months 36 --breakdown

    \b
    # Compare every scenario of a file
    blob-cost-projection --config scenarios.yaml
    """
    effective_log_level = "DEBUG" if verbose else log_level
    run_id = str(uuid.uuid4())
    logger = configure_logging(
        log_level=effective_log_level,
        log_format=log_format,
        correlation_id=run_id,
    ).bind(component="main")

    overrides = {
        "users": users,
        "projects_per_user": projects_per_user,
        "objects_per_project": objects_per_project,
        "object_size_mb": object_size_mb,
        "gets_per_object": gets_per_object,
        "hot_months": hot_months,
        "cool_months": cool_months,
        "archive_months": archive_months,
    }

    try:
        if config:
            if verbose:
                logger.info("Loading scenario file", config_path=str(config))
            projection_config = load_config(config)
            if any(value is not None for value in overrides.values()):
                print_warning("Parameter options are ignored when --config is given")
            scenarios = projection_config.select(list(scenario_names))
            pricing = projection_config.pricing
            horizon = months or projection_config.months
            currency = projection_config.currency
        else:
            if scenario_names:
                raise ConfigurationError("--scenario requires --config", correlation_id=run_id)
            scenarios = [_ad_hoc_scenario(overrides)]
            pricing = DEFAULT_PRICING
            horizon = months or 24
            currency = "EUR"

        projector = CostProjector(pricing=pricing, logger=logger)
        results = projector.project_scenarios(scenarios, horizon)

        if output_format == "json":
            output = {
                "months": horizon,
                "currency": currency,
                "pricing": projector.pricing.model_dump(),
                "scenarios": {
                    scenario.name: projection_to_dict(scenario, results[scenario.name])
                    for scenario in scenarios
                    if scenario.name in results
                },
            }
            click.echo(json.dumps(output, indent=2))
        else:
            for scenario in scenarios:
                if scenario.name not in results:
                    print_warning(f"Scenario '{scenario.name}' has no parameters, skipped")
                    continue
                print_projection(scenario, results[scenario.name], currency, breakdown)
            if len(results) > 1:
                print_comparison(results, currency)

        if verbose:
            logger.info("Projection completed", scenarios=len(results), months=horizon)

    except KeyboardInterrupt:
        logger.warning("Cost projection interrupted by user")
        sys.exit(130)
    except ConfigurationError as e:
        if e.correlation_id:
            logger = logger.bind(correlation_id=e.correlation_id)
        logger.error("Configuration error", error=str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception("Cost projection failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
