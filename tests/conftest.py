import pytest
import tempfile
from pathlib import Path
from git import Repo

from commitkit.config import ENV_MAPPING, Config
from commitkit.models import Identity

pytest_plugins = ('pytest_asyncio',)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user config, templates and identity out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for env_var in ENV_MAPPING:
        monkeypatch.delenv(env_var, raising=False)
    for env_var in ("GIT_AUTHOR_NAME", "GIT_AUTHOR_EMAIL", "GIT_CONFIG_GLOBAL"):
        monkeypatch.delenv(env_var, raising=False)
    return home


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def identity():
    return Identity("Jane Doe", "jane@example.com")


def _init_repo(path) -> Repo:
    repo = Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Jane Doe")
        writer.set_value("user", "email", "jane@example.com")
        writer.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = _init_repo(tmp_dir)

        # Create a test file
        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        # Initial commit
        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def empty_git_repo():
    """Create a temporary git repository without any commits."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        _init_repo(tmp_dir)
        yield tmp_dir


@pytest.fixture
def staged_git_repo(temp_git_repo):
    """Repository with a modified file staged for commit."""
    repo = Repo(temp_git_repo)
    test_file = Path(temp_git_repo) / "test.txt"
    test_file.write_text("Changed content")
    repo.index.add(["test.txt"])
    return temp_git_repo
