# -----------------------------------------------------------------------------
# hunkscope - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of hunkscope.
#
# hunkscope is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


"""
Rich renderings of PR lists, hunks and intent groups.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hunkscope.core.classify.file_classifier import classify_file, risk_style
from hunkscope.core.data.analysis import AnalysisResult, IntentGroup
from hunkscope.core.data.hunk import Hunk
from hunkscope.core.data.pr import PrListItem


def _truncate_text(text: str, max_length: int = 50) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def pr_table(prs: Sequence[PrListItem], repo: str) -> Table:
    table = Table(title=f"Pull requests: {repo}", show_lines=False)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Author", style="magenta")
    table.add_column("Branch", style="dim")
    table.add_column("Review", style="yellow")
    table.add_column("Updated", style="dim")

    for pr in prs:
        table.add_row(
            str(pr.number),
            escape(_truncate_text(pr.title, 60)),
            pr.author.login if pr.author else "",
            f"{pr.head_ref_name or '?'} -> {pr.base_ref_name or '?'}",
            pr.review_decision or "",
            pr.updated_at[:10],
        )

    return table


def hunk_table(hunks: Sequence[Hunk]) -> Table:
    table = Table(title=f"{len(hunks)} hunk(s)")
    table.add_column("Id", style="cyan")
    table.add_column("File")
    table.add_column("Kind", style="dim")
    table.add_column("Header", style="dim")
    table.add_column("+", style="green", justify="right")
    table.add_column("-", style="red", justify="right")

    for hunk in hunks:
        table.add_row(
            hunk.id,
            escape(hunk.file_path),
            classify_file(hunk.file_path),
            escape(_truncate_text(hunk.header, 40)),
            str(hunk.additions),
            str(hunk.deletions),
        )

    return table


def group_panel(group: IntentGroup, hunks_by_id: dict[str, Hunk]) -> Panel:
    lines = []
    if group.rationale:
        lines.append(escape(group.rationale))
        lines.append("")

    for hid in group.hunk_ids:
        hunk = hunks_by_id.get(hid)
        location = escape(f"{hunk.file_path} {hunk.header}") if hunk else ""
        lines.append(f"[cyan]{hid}[/cyan] {location}")

    if group.reviewer_checklist:
        lines.append("")
        lines.append("[bold]Checklist[/bold]")
        lines.extend(f"  - {escape(item)}" for item in group.reviewer_checklist)

    if group.suggested_tests:
        lines.append("")
        lines.append("[bold]Suggested tests[/bold]")
        lines.extend(f"  - {escape(item)}" for item in group.suggested_tests)

    style = risk_style(group.risk)
    return Panel(
        "\n".join(lines),
        title=f"[bold]{escape(group.id)}[/bold] {escape(group.title)}",
        subtitle=f"[{style}]{group.risk}[/{style}] {group.category}",
        border_style=style,
    )


def print_groups(
    console: Console, groups: Sequence[IntentGroup], hunks: Sequence[Hunk]
) -> None:
    hunks_by_id = {hunk.id: hunk for hunk in hunks}
    for group in groups:
        console.print(group_panel(group, hunks_by_id))


def print_analysis(
    console: Console, result: AnalysisResult, hunks: Sequence[Hunk]
) -> None:
    if result.overall_summary:
        console.print(Panel(escape(result.overall_summary), title="[bold]Summary[/bold]"))

    print_groups(console, result.groups, hunks)

    if result.unassigned_hunk_ids:
        console.print(
            f"[yellow]Unassigned:[/yellow] {', '.join(result.unassigned_hunk_ids)}"
        )
    if result.non_substantive_hunk_ids:
        console.print(
            f"[dim]Non-substantive: {', '.join(result.non_substantive_hunk_ids)}[/dim]"
        )
    for question in result.questions:
        console.print(f"[bold]?[/bold] {escape(question)}")
