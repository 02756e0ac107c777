"""CLI entry point, command definitions using Click.

Commands:
    init          Generate a template config file
    status        Summary and per-page review status
    page          Findings and overlays for one page
    next-problem  Next page that still has active findings
    export        Write the cleaned report (active findings only)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click

from finding_review import __version__


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _load_config(ctx: click.Context):
    """Load config, falling back to --report when no config file exists."""
    from finding_review.config import Config, ConfigError, load

    obj = ctx.obj
    if obj["report"] and not Path(obj["config_path"]).exists():
        config = Config(report_source=obj["report"])
    else:
        try:
            config = load(obj["config_path"], source_override=obj["report"])
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)

    if obj["pages"]:
        config.page_count = obj["pages"]
    return config


def _make_session(ctx: click.Context):
    """Load config and the report, and return a ready ReviewSession."""
    from finding_review.client import ReportClient, load_store
    from finding_review.session import ReviewSession

    config = _load_config(ctx)

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Loading report from {config.report_source}", err=True)

    store = load_store(config.report_source, ReportClient(timeout=config.timeout))
    return config, ReviewSession(store, page_count=config.page_count)


def _emit_text(text: str, ctx: click.Context) -> None:
    """Write text to stdout or to the file specified by --output."""
    output_path: str | None = ctx.obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _emit_json(data: Any, ctx: click.Context) -> None:
    indent = 2 if ctx.obj["pretty"] else None
    _emit_text(json.dumps(data, indent=indent, ensure_ascii=False), ctx)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="review-config.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--report", default=None,
              help="Report file path or URL (overrides config).")
@click.option("--output", "output_path", default=None,
              help="Write output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--pages", type=click.IntRange(min=1), default=None,
              help="Total page count of the document (overrides config).")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="finding-review")
@click.pass_context
def cli(ctx: click.Context, config_path: str, report: str | None, output_path: str | None,
        pretty: bool, pages: int | None, verbose: bool) -> None:
    """Review validation findings page by page and export a cleaned report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["report"] = report
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["pages"] = pages
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="review-config.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template review-config.yaml file."""
    from finding_review.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with the location of your findings report.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------

@cli.command("status")
@click.pass_context
def status_command(ctx: click.Context) -> None:
    """Summary of all findings and the review status of every page."""
    from finding_review.status import build_summary

    config, session = _make_session(ctx)
    report = {
        "report_source": config.report_source,
        "generated_at":  datetime.now(timezone.utc).isoformat(),
        "page_count":    session.page_count,
        "summary":       build_summary(session.store.all_issues()),
        "pages":         {str(p): s.value for p, s in session.page_statuses().items()},
    }
    _emit_json(report, ctx)


# ---------------------------------------------------------------------------
# page
# ---------------------------------------------------------------------------

@cli.command("page")
@click.argument("page", type=click.IntRange(min=1))
@click.option("--width", type=float, default=None,
              help="Page width in document units, enables overlays.")
@click.option("--height", type=float, default=None,
              help="Page height in document units, enables overlays.")
@click.pass_context
def page_command(ctx: click.Context, page: int, width: float | None,
                 height: float | None) -> None:
    """Findings, status and overlay rectangles for PAGE."""
    _, session = _make_session(ctx)
    if page > session.page_count:
        raise click.BadParameter(
            f"{page} is past the last page ({session.page_count}); set --pages if the "
            "document is longer than its highest reported page.",
            param_hint="PAGE",
        )
    session.go_to(page)
    if width and height:
        session.page_rendered(session.current_page, width, height)

    report = {
        "page":     session.current_page,
        "status":   session.current_status().value,
        "issues":   [i.to_dict() for i in session.current_issues()],
        "overlays": [o.to_dict() for o in session.current_overlays()],
    }
    _emit_json(report, ctx)


# ---------------------------------------------------------------------------
# next-problem
# ---------------------------------------------------------------------------

@cli.command("next-problem")
@click.option("--after", "after_page", type=click.IntRange(min=0), default=0, show_default=True,
              help="Search pages after this one (0 searches from the first page).")
@click.pass_context
def next_problem_command(ctx: click.Context, after_page: int) -> None:
    """Print the next page that still has active findings."""
    _, session = _make_session(ctx)
    session.current_page = after_page

    page = session.jump_to_next_problem()
    if page is None:
        click.echo(f"All clear: no unresolved findings after page {after_page}.")
    else:
        click.echo(str(page))


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

@cli.command("export")
@click.option("--resolve", "resolve_ids", type=int, multiple=True,
              help="Mark the finding with this id as resolved. Repeatable.")
@click.option("--approve-page", "approve_pages", type=click.IntRange(min=1), multiple=True,
              help="Mark every finding on this page as resolved. Repeatable.")
@click.option("--stdout", "to_stdout", is_flag=True, default=False,
              help="Print the report instead of writing the export file.")
@click.pass_context
def export_command(ctx: click.Context, resolve_ids: tuple[int, ...],
                   approve_pages: tuple[int, ...], to_stdout: bool) -> None:
    """Write the report with resolved findings removed."""
    config, session = _make_session(ctx)
    store = session.store

    for issue_id in resolve_ids:
        issue = store.get(issue_id)
        if issue is None:
            click.echo(f"Warning: no finding with id {issue_id}", err=True)
        elif issue.is_active:
            store.toggle(issue_id)

    for page in approve_pages:
        store.set_page_ignored(page, True)

    text = session.export()
    active = sum(1 for i in store if i.is_active)

    if to_stdout:
        click.echo(text)
        return

    output_path = ctx.obj["output_path"] or config.export_path
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)
    click.echo(f"Exported {active} active issue(s) to '{output_path}'", err=True)
