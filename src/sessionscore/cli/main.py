"""SessionScore CLI.

Usage:
    sessionscore score FILE       # Productivity + focus scores with factors
    sessionscore summary FILE     # Full session summary with insights
    sessionscore export           # Export stored summaries as JSON or CSV
    sessionscore demo             # Score a synthetic session end to end
    sessionscore health           # Show engine version and capabilities

FILE is a session bundle: {"session": {...}, "events": [...]}.
"""

from __future__ import annotations

import json

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


@click.group()
@click.version_option(package_name="sessionscore")
def cli() -> None:
    """SessionScore: deterministic productivity and focus scoring for work sessions."""
    from sessionscore.config import configure_logging, load_config

    configure_logging(load_config())


# ── SCORE ─────────────────────────────────────────────────────


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def score(path: str) -> None:
    """Compute productivity and focus scores for a session bundle."""
    from sessionscore.analysis.focus import compute_focus_score
    from sessionscore.analysis.productivity import compute_productivity_score

    session, events = _load(path)
    productivity = compute_productivity_score(session, events)
    focus = compute_focus_score(session, events)

    table = Table(title=f"Session {session.id or path}")
    table.add_column("Score", style="cyan")
    table.add_column("Value", style="white", justify="right")
    table.add_column("Factors", style="green")
    table.add_row("Productivity", f"{productivity.score:.0f}", ", ".join(productivity.factors))
    table.add_row("Focus", f"{focus.score:.0f}", ", ".join(focus.factors))
    console.print(table)

    if focus.deep_work_periods:
        periods = ", ".join(
            f"+{p.start_minute_offset}m ({p.duration_minutes} min)" for p in focus.deep_work_periods
        )
        console.print(f"  Deep work: {periods}")
    console.print(f"  Context switches: {focus.context_switches}")


# ── SUMMARY ───────────────────────────────────────────────────


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["rich", "text", "json"]), default="rich")
@click.option("--apps-csv", type=click.Path(dir_okay=False), default=None,
              help="Also write the app usage ranking to this CSV file")
@click.option("--save/--no-save", default=False, help="Save bundle and summary to the data dir")
def summary(path: str, fmt: str, apps_csv: str | None, save: bool) -> None:
    """Generate a session summary with insights."""
    from sessionscore.analysis.summary import generate_session_summary
    from sessionscore.config import load_config
    from sessionscore.export import app_usage_to_csv, format_summary_report, summary_to_json
    from sessionscore.storage import SessionStore

    session, events = _load(path)
    result = generate_session_summary(session, events)
    if result is None:
        raise click.ClickException("Summary unavailable for this session (see logs).")

    if fmt == "json":
        click.echo(summary_to_json(result))
    elif fmt == "text":
        click.echo(format_summary_report(result))
    else:
        _show_summary(result)

    if apps_csv:
        with open(apps_csv, "w") as f:
            f.write(app_usage_to_csv(result.app_usage))
        console.print(f"App usage written to {apps_csv}")

    if save:
        store = SessionStore(load_config().data_dir)
        try:
            store.save_bundle(session, events)
            saved = store.save_summary(result)
        except ValueError as e:
            raise click.ClickException(f"Cannot save session: {e}")
        console.print(f"Saved to {saved}")


# ── EXPORT ────────────────────────────────────────────────────


@cli.command()
@click.option("--format", "fmt", type=click.Choice(["json", "csv"]), default="json")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None)
def export(fmt: str, output: str | None) -> None:
    """Export every stored summary."""
    from sessionscore.config import load_config
    from sessionscore.export import summaries_to_csv
    from sessionscore.storage import SessionStore

    store = SessionStore(load_config().data_dir)
    summaries = store.load_summaries()
    if not summaries:
        console.print("[yellow]No stored summaries. Run 'sessionscore summary FILE --save' first.[/yellow]")
        return

    if fmt == "csv":
        text = summaries_to_csv(summaries)
    else:
        text = json.dumps([json.loads(s.model_dump_json()) for s in summaries], indent=2)

    if output:
        with open(output, "w") as f:
            f.write(text)
        console.print(f"Exported {len(summaries)} summaries to {output}")
    else:
        click.echo(text)


# ── DEMO ──────────────────────────────────────────────────────


@cli.command()
@click.option("--archetype", type=click.Choice(["deep_coding", "scattered_admin"]), default="deep_coding")
@click.option("--seed", default=42, help="Random seed for the synthetic session")
def demo(archetype: str, seed: int) -> None:
    """Score a synthetic session. No capture data needed."""
    from sessionscore.analysis.summary import generate_session_summary
    from sessionscore.demo import generate_synthetic_session

    session, events = generate_synthetic_session(archetype, seed=seed)
    console.print(f"Generated [bold]{len(events)} events[/bold] for {session.id}")
    result = generate_session_summary(session, events)
    if result is None:
        raise click.ClickException("Summary unavailable for the demo session.")
    _show_summary(result)


# ── HEALTH ────────────────────────────────────────────────────


@cli.command()
def health() -> None:
    """Show engine version and capabilities."""
    from sessionscore.analysis.summary import health_check

    info = health_check()
    console.print("\n[bold]SessionScore Engine[/bold]\n")
    console.print(f"  Available:    [green]{info['algorithmic_analysis_available']}[/green]")
    console.print(f"  Version:      {info['version']}")
    console.print(f"  Capabilities: {', '.join(info['capabilities'])}")
    console.print()


# ── HELPERS ───────────────────────────────────────────────────


def _load(path: str):
    from sessionscore.storage import load_bundle_file

    try:
        return load_bundle_file(path)
    except (ValidationError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Invalid session bundle {path}: {e}")


def _show_summary(summary) -> None:
    """Display a summary as Rich panels and a usage table."""
    m = summary.key_metrics
    console.print(Panel(
        f"Duration: {summary.duration_minutes} min\n"
        f"Productivity: [bold]{summary.productivity_score:.0f}[/bold]/100   "
        f"Focus: [bold]{summary.focus_score:.0f}[/bold]/100\n"
        f"Activity: {summary.total_activities} actions ({m.activity_rate:.1f}/min)\n"
        f"Deep work: {m.deep_work_period_count} periods, longest {m.longest_focus_period_minutes} min\n"
        f"Context switches: {m.context_switch_count}",
        title=f"Session {summary.session_id or '--'}",
    ))

    if summary.app_usage:
        table = Table(title="Top Applications")
        table.add_column("App", style="cyan", max_width=30)
        table.add_column("Activity", justify="right")
        table.add_column("Keys", justify="right")
        table.add_column("Clicks", justify="right")
        for a in summary.app_usage:
            table.add_row(a.application_name, str(a.total_activity), str(a.keystrokes), str(a.clicks))
        console.print(table)

    level_colors = {"positive": "green", "neutral": "white", "improvement": "yellow"}
    for insight in summary.insights:
        color = level_colors.get(insight.level.value, "white")
        console.print(f"  [{color}]{insight.message}[/{color}]")


if __name__ == "__main__":
    cli()
