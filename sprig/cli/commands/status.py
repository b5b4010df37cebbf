"""Status command - show working tree status."""

import click

from sprig.cli.output import header, reports_errors
from sprig.cli.workspace import open_workspace


def format_status(report) -> str:
    """Render a StatusReport as the five status sections."""
    lines = [header("Branches")]
    for name in report.branches:
        marker = '*' if name == report.current_branch else ''
        lines.append(f"{marker}{name}")
    lines.append("")

    lines.append(header("Staged Files"))
    lines.extend(report.staged)
    lines.append("")

    lines.append(header("Removed Files"))
    lines.extend(report.removed)
    lines.append("")

    lines.append(header("Modifications Not Staged For Commit"))
    lines.extend(f"{path} ({kind})" for path, kind in report.unstaged)
    lines.append("")

    lines.append(header("Untracked Files"))
    lines.extend(report.untracked)
    lines.append("")
    return '\n'.join(lines)


@click.command('status')
@reports_errors
def status_cmd():
    """
    Show branches, staged and removed files, unstaged modifications and
    untracked files.
    """
    click.echo(format_status(open_workspace().status()))
