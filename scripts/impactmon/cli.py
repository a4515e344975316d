"""
Command-line interface for the Impact Monitor.

Running ``impactmon`` with no arguments performs one full monitor cycle.
"""

import logging

import click
from dotenv import load_dotenv

# Load environment variables from .env file (if it exists)
load_dotenv()

from . import __version__
from .checkers.registry import get_all_checkers, get_checker, run_checker
from .config import config
from .monitor import build_monitor
from .scheduler import generate_cron_entry
from .state import StateStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger(__name__)


def setup_file_logging() -> None:
    """Set up file logging if enabled."""
    if config.get("logging.file_enabled", True):
        log_file = config.logs_dir / "impactmon.log"
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(config.get("logging.format")))
        logging.getLogger().addHandler(file_handler)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="impactmon")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Impact Monitor - poll filings, news and prices and email alerts."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    setup_file_logging()
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--dry-run", is_flag=True, help="Print alerts without sending email or saving state")
def run(dry_run: bool) -> None:
    """Run one full poll-diff-alert cycle."""
    rules = config.rules()
    click.echo(click.style(f"\n{rules.label} Monitor", fg="bright_white", bold=True))
    click.echo("=" * 50)

    summary = build_monitor(config).run(dry_run=dry_run)

    for error in summary.errors:
        click.echo(click.style(f"  ! {error}", fg="yellow"))

    if dry_run:
        for alert in summary.alerts:
            click.echo(f"\n{alert}")
        click.echo(click.style(f"\n[dry run] {len(summary.alerts)} alert(s), nothing sent", fg="cyan"))
        return

    if summary.digest_sent:
        click.echo(click.style(f"{len(summary.alerts)} alert(s) sent!", fg="green"))
    elif summary.alerts:
        click.echo(click.style(f"{len(summary.alerts)} alert(s) found but not delivered", fg="red"))
    else:
        click.echo("No significant events detected.")


@cli.command()
@click.argument("name", type=click.Choice(["insider", "filings", "news", "price"]))
def check(name: str) -> None:
    """Run a single checker against the stored last-check time (never sends)."""
    checker = get_checker(name, config)
    if not checker.enabled:
        click.echo(click.style(f"{checker.name} is disabled (missing credentials)", fg="yellow"))
        return

    state = StateStore(config.state_path).load()
    click.echo(f"{checker.name} since {state.last_check:%Y-%m-%d %H:%M}")
    result = run_checker(checker, state.last_check)

    for error in result.errors:
        click.echo(click.style(f"  ! {error}", fg="red"))
    for alert in result.alerts:
        click.echo(f"\n{alert}")
    click.echo(f"\n{result}")


@cli.command()
@click.option("--reset", is_flag=True, help="Delete the stored state")
def state(reset: bool) -> None:
    """Show or reset the stored last-check timestamp."""
    store = StateStore(config.state_path)
    if reset:
        if store.reset():
            click.echo(click.style(f"Removed {store.state_path}", fg="green"))
        else:
            click.echo("No state file to remove.")
        return

    if not store.state_path.exists():
        click.echo(f"No state file at {store.state_path} (next run looks back 24 hours)")
        return
    click.echo(f"Last check: {store.load().last_check.isoformat()}")


@cli.command()
def checkers() -> None:
    """List checkers and whether they can run."""
    for checker in get_all_checkers(config):
        status = click.style("enabled", fg="green") if checker.enabled else click.style("disabled", fg="yellow")
        click.echo(f"  {checker.checker_id:<8} {checker.name:<30} {status}")


@cli.command()
@click.option("--every-minutes", default=60, type=click.IntRange(1, 1380), help="Run interval")
def schedule(every_minutes: int) -> None:
    """Print a crontab entry that runs the monitor periodically."""
    try:
        click.echo(generate_cron_entry(every_minutes=every_minutes))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--every-minutes")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
