"""Command-line interface for RouteMeter."""

import logging
import sys
from pathlib import Path

import click

from routemeter.orchestration import ScenarioOrchestrator
from routemeter.utils.config_validator import validate_scenario_file

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@click.group()
@click.version_option(version="0.1.0", prog_name="RouteMeter")
def cli():
    """RouteMeter: metrics instrumentation for message routes."""
    pass


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level"
)
def run(config_file: str, format: str, log_level: str):
    """Run an instrumented route scenario from a configuration file."""
    logging.getLogger().setLevel(getattr(logging, log_level))

    click.echo(f"Loading configuration from {config_file}...")

    try:
        if format == "yaml":
            orchestrator = ScenarioOrchestrator.from_yaml_file(config_file)
        else:
            orchestrator = ScenarioOrchestrator.from_json_file(config_file)

        click.echo("Starting scenario...")
        summary = orchestrator.run()

        click.echo("\nScenario completed!")
        click.echo(f"Exchanges: {summary['exchanges']['completed']} completed, "
                   f"{summary['exchanges']['failed']} failed")
        for label, stats in sorted(summary["meters"]["timer"].items()):
            if stats.get("count"):
                click.echo(f"  {label}: count={stats['count']} "
                           f"mean={stats['mean']:.2f}{stats['unit']}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output", "-o", default="example_scenario.yaml",
    help="Output file path"
)
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
def generate_config(output: str, format: str):
    """Generate an example scenario file."""
    example_config = {
        "simulation": {
            "max_simulation_time": 60,
            "generation_duration": 50,
            "random_seed": 42,
        },
        "route_policy": {
            "prefix": "camel",
            "name_pattern": "##prefix##.##name##.##routeId##.##type##",
            "duration_unit": "milliseconds",
            "pretty_print": True,
            "tags": {"service": "orders-service"},
        },
        "routes": [
            {
                "route_id": "orders",
                "inter_arrival_time_dist_config": {"type": "Exponential", "rate": 5.0},
                "failure_probability": 0.05,
                "steps": [
                    {"metric": {"type": "timer", "name": "orders.processing", "action": "start"}},
                    {"metric": {"type": "counter", "name": "orders.received", "increment": 1}},
                    {"delay": {"type": "LogNormal", "mean": -3.0, "sigma": 0.5}},
                    {
                        "metric": {"type": "summary", "name": "orders.size"},
                        "headers": {"RouteMeterHistogramValue": 3},
                    },
                    {"metric": {"type": "timer", "name": "orders.processing", "action": "stop"}},
                ],
            }
        ],
        "metrics_config": {
            "percentiles_to_calculate": [0.5, 0.9, 0.99],
            "output_summary_json_path": "results/summary.json",
            "output_meters_csv_path": "results/meters.csv",
        },
    }

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == "yaml":
        import yaml
        with open(output_path, "w") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
    else:
        import json
        with open(output_path, "w") as f:
            json.dump(example_config, f, indent=2)

    click.echo(f"Generated example scenario at {output_path}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a scenario file without running it."""
    click.echo(f"Validating configuration: {config_file}")

    try:
        is_valid, errors, _ = validate_scenario_file(config_file)

        if is_valid:
            click.echo(click.style("✓ Configuration is valid", fg="green"))
        else:
            click.echo(click.style(f"✗ Configuration has {len(errors)} errors:", fg="red"))
            for i, error in enumerate(errors[:20], 1):
                click.echo(f"  {i}. {error}")
            if len(errors) > 20:
                click.echo(f"  ... and {len(errors) - 20} more errors")

        sys.exit(0 if is_valid else 1)

    except Exception as e:
        click.echo(click.style(f"Error validating configuration: {e}", fg="red"))
        sys.exit(1)


if __name__ == "__main__":
    cli()
