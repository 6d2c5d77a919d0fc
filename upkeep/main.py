"""
Upkeep — entry point.

CLI commands, config/flag merging, scenario composition and runner dispatch.
"""

from typing import Optional

import click
from rich.console import Console

from upkeep import __version__
from upkeep.config import load_config
from upkeep.definitions import ALL_FEATURES, ALL_STEPS, SCENARIO_DEFINITIONS, build_scenario
from upkeep.features.base import FeatureRegistry
from upkeep.logging_config import configure_logging
from upkeep.scenario import Scenario


# ── CLI ───────────────────────────────────────────────────────────────────────

@click.group(name="upkeep", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="upkeep")
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug) to stderr.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Only log errors.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """Interactive maintenance runner.

    Detects what is installed on this host, composes the checks that
    apply and runs them, asking before anything is fixed.

    \b
    Environment variables:
      NO_COLOR=1   Disable colour in status labels.
    """
    configure_logging(verbosity=verbose, quiet=quiet)
    ctx.obj = {"config": load_config()}


@cli.command(name="run")
@click.argument("scenario", required=False)
@click.option("--tags", metavar="TAGS", default=None,
              help="Comma-separated tags; run every step carrying all of them.")
@click.option("--assumeyes", "-y", is_flag=True, default=False,
              help="Answer yes when a single step is offered.")
@click.option("--whitelist", "-w", metavar="LABELS", default=None,
              help="Comma-separated step labels to skip.")
@click.option("--menu", is_flag=True, default=False,
              help="Choose with arrow-key menus instead of typed answers.")
@click.pass_context
def run_scenario(
    ctx: click.Context,
    scenario: Optional[str],
    tags: Optional[str],
    assumeyes: bool,
    whitelist: Optional[str],
    menu: bool,
) -> None:
    """Run SCENARIO (or the steps matching --tags)."""
    from upkeep.runner.runner import Runner

    config = ctx.obj["config"]
    chosen = _resolve_scenario(scenario, tags)

    registry = FeatureRegistry(ALL_FEATURES)
    chosen.compose(ALL_STEPS, registry)

    if menu:
        from upkeep.ui.menu import MenuReporter as reporter_class
    else:
        from upkeep.ui.reporter import CLIReporter as reporter_class

    skipped_labels = set(config["whitelist"]) | _split(whitelist)

    try:
        with reporter_class(spinner_interval=config["spinner_interval"]) as reporter:
            runner = Runner(
                registry,
                reporter,
                assumeyes=assumeyes or config["assumeyes"],
                whitelist=skipped_labels,
            )
            exit_code = runner.run(chosen)
    except (KeyboardInterrupt, EOFError):
        click.echo("\nCancelled.", err=True)
        raise SystemExit(130)

    raise SystemExit(exit_code)


@cli.command(name="list-steps")
@click.option("--tags", metavar="TAGS", default=None,
              help="Comma-separated tags to filter by.")
def list_steps(tags: Optional[str]) -> None:
    """List the steps that apply to this host."""
    console = Console(highlight=False)
    registry = FeatureRegistry(ALL_FEATURES)
    scenario = Scenario("adhoc", "Ad hoc", tags=sorted(_split(tags)))

    steps = scenario.select(ALL_STEPS, registry)
    if not steps:
        console.print("[dim]No steps match the specified filters.[/dim]")
        return
    for cls in steps:
        console.print(f"[bold]{cls.label}[/bold]  {cls.description}  [dim]{', '.join(cls.tags)}[/dim]")


@cli.command(name="list-scenarios")
def list_scenarios() -> None:
    """List the named scenarios and how many steps each would run here."""
    console = Console(highlight=False)
    registry = FeatureRegistry(ALL_FEATURES)
    for label in SCENARIO_DEFINITIONS:
        scenario = build_scenario(label)
        count = len(scenario.select(ALL_STEPS, registry))
        console.print(f"[bold]{label}[/bold]  {scenario.description}  [dim]{count} steps[/dim]")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _split(value: Optional[str]) -> set[str]:
    if not value:
        return set()
    return {item.strip() for item in value.split(",") if item.strip()}


def _resolve_scenario(label: Optional[str], tags: Optional[str]) -> Scenario:
    """Named scenario, or an ad hoc one built from --tags."""
    if label and tags:
        raise click.UsageError("Give either a SCENARIO or --tags, not both.")
    if label:
        try:
            return build_scenario(label)
        except KeyError:
            known = ", ".join(SCENARIO_DEFINITIONS)
            raise click.UsageError(f"Unknown scenario '{label}'. Known: {known}") from None
    if tags:
        tag_list = sorted(_split(tags))
        return Scenario("adhoc", f"steps tagged {', '.join(tag_list)}", tags=tag_list)
    raise click.UsageError("Give a SCENARIO or --tags.")


# ── Entry ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    cli()
