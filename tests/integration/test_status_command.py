"""Integration tests for the status command."""

from sprig.cli.main import cli


def test_status_sections(runner, temp_dir):
    runner.invoke(cli, ['init'])
    for name in ('tracked.txt', 'gone.txt', 'doomed.txt'):
        (temp_dir / name).write_text(name)
        runner.invoke(cli, ['add', name])
    runner.invoke(cli, ['commit', 'three files'])
    runner.invoke(cli, ['branch', 'other'])

    (temp_dir / 'new.txt').write_text('new')
    runner.invoke(cli, ['add', 'new.txt'])
    runner.invoke(cli, ['rm', 'doomed.txt'])
    (temp_dir / 'tracked.txt').write_text('edited')
    (temp_dir / 'gone.txt').unlink()
    (temp_dir / 'loose.txt').write_text('loose')

    result = runner.invoke(cli, ['status'])
    assert result.exit_code == 0
    assert result.output == (
        "=== Branches ===\n"
        "*master\n"
        "other\n"
        "\n"
        "=== Staged Files ===\n"
        "new.txt\n"
        "\n"
        "=== Removed Files ===\n"
        "doomed.txt\n"
        "\n"
        "=== Modifications Not Staged For Commit ===\n"
        "gone.txt (deleted)\n"
        "tracked.txt (modified)\n"
        "\n"
        "=== Untracked Files ===\n"
        "loose.txt\n"
        "\n"
    )
