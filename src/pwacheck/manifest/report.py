# pwacheck:domain=manifest
"""Output formatters for :class:`ManifestValues` reports."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pwacheck.config import CheckConfig
from pwacheck.manifest.values import MANIFEST_CHECKS, VALIDITY_IDS, validity_id_for

if TYPE_CHECKING:
    from pwacheck.manifest.values import CheckResult, ManifestValues


def _visible_checks(report: ManifestValues, config: CheckConfig) -> list[CheckResult]:
    return [c for c in report.all_checks if c.id not in config.ignore]


def strict_failures(report: ManifestValues, config: CheckConfig | None = None) -> list[str]:
    """Return the ids that make a ``--strict`` run fail.

    A parse failure yields its validity id; otherwise every failing check
    that *config* marks as required.
    """
    config = config or CheckConfig()
    if report.is_parse_failure:
        validity_id = validity_id_for(report.parse_failure_reason)
        return [validity_id] if validity_id is not None else []
    return [c.id for c in report.failing_checks if config.is_required(c.id)]


def format_rich(
    report: ManifestValues,
    *,
    source: str | None = None,
    config: CheckConfig | None = None,
) -> str:
    """Render a report as Rich text for terminal display."""
    from io import StringIO

    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    config = config or CheckConfig()
    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=120, highlight=False)

    title = "Manifest Checks" if source is None else f"Manifest Checks: {escape(source)}"
    console.rule(f"[bold]{title}[/bold]", style="blue")

    if report.is_parse_failure:
        console.print(f"[red]✗[/red] {escape(report.parse_failure_reason or '')}")
        return buf.getvalue()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Status", width=2)
    table.add_column("Check", style="cyan")
    table.add_column("Detail")

    checks = _visible_checks(report, config)
    for check in checks:
        if check.passing:
            table.add_row("[green]✓[/green]", check.id, "")
        else:
            table.add_row("[red]✗[/red]", check.id, escape(check.failure_text))
    console.print(table)

    failing = sum(1 for c in checks if not c.passing)
    if failing:
        console.print(f"{failing} of {len(checks)} checks failing")
    else:
        console.print(f"[green]All {len(checks)} checks passing[/green]")
    return buf.getvalue()


def format_json(report: ManifestValues, *, config: CheckConfig | None = None) -> str:
    """Format a report as JSON with camelCase keys."""
    config = config or CheckConfig()
    data = report.to_dict()
    data["allChecks"] = [c.to_dict() for c in _visible_checks(report, config)]
    data["validityId"] = validity_id_for(report.parse_failure_reason)
    return json.dumps(data, indent=2)


def format_porcelain(report: ManifestValues, *, config: CheckConfig | None = None) -> str:
    """Format a report as one ``id:pass|fail`` line per check.

    A parse failure is a single ``<validity id>:fail`` line.
    """
    config = config or CheckConfig()
    if report.is_parse_failure:
        return f"{validity_id_for(report.parse_failure_reason)}:fail"
    return "\n".join(
        f"{c.id}:{'pass' if c.passing else 'fail'}" for c in _visible_checks(report, config)
    )


def format_catalog_json() -> str:
    """Describe the check catalog and validity ids as JSON."""
    return json.dumps(
        {
            "checks": [{"id": c.id, "failureText": c.failure_text} for c in MANIFEST_CHECKS],
            "validityIds": list(VALIDITY_IDS),
        },
        indent=2,
    )


def format_catalog_rich() -> str:
    """Render the check catalog as a Rich table."""
    from io import StringIO

    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=120, highlight=False)

    table = Table(title="Manifest checks", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Id", style="cyan")
    table.add_column("Failure text")
    for idx, check in enumerate(MANIFEST_CHECKS, start=1):
        table.add_row(str(idx), check.id, escape(check.failure_text))
    console.print(table)
    console.print(f"Validity ids: {', '.join(VALIDITY_IDS)}")
    return buf.getvalue()
