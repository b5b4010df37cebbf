"""Shared pytest fixtures for Sprig tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from click.testing import CliRunner
from sprig.core.config import Config
from sprig.core.repository import RepositoryContext
from sprig.core.objects import Blob, Commit
from sprig.operations.workspace import Workspace


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.sprigconfig and SPRIG_* variables out of tests."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.sprigconfig')
    for key in ('SPRIG_INIT_DEFAULTBRANCH', 'SPRIG_INIT_MESSAGE', 'SPRIG_LOG_UTC'):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def ctx(temp_dir):
    """Context for an uninitialized work tree."""
    return RepositoryContext(str(temp_dir))


@pytest.fixture
def workspace(ctx):
    """Workspace over an initialized repository."""
    ws = Workspace(ctx)
    ws.init()
    return ws


@pytest.fixture
def write(temp_dir):
    """Write a work tree file: write('a.txt', 'text')."""
    def _write(rel_path, content):
        path = temp_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def read(temp_dir):
    """Read a work tree file as text."""
    def _read(rel_path):
        return (temp_dir / rel_path).read_text()
    return _read


@pytest.fixture
def commit_file(workspace, write):
    """Write, stage and commit one file; returns the commit hash."""
    def _commit_file(rel_path, content, message=None):
        write(rel_path, content)
        workspace.add(rel_path)
        return workspace.commit(message or f"update {rel_path}")
    return _commit_file


@pytest.fixture
def runner(temp_dir, monkeypatch):
    """CliRunner whose commands run inside the temporary work tree."""
    monkeypatch.chdir(temp_dir)
    return CliRunner()


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_commit(sample_blob):
    """Commit tracking one file, with a fixed timestamp."""
    return Commit(
        "Test commit",
        1700000000,
        {'test.txt': sample_blob.hash},
        parent='a' * 40,
    )
