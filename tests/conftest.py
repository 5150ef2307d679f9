import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'cbtr' and tests/helpers importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from cbtr.core.logging_setup import reset_stdlib_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_user_config(tmp_path_factory, monkeypatch) -> None:
    """Never read the developer's real ~/.config/cbtr during tests."""
    user_dir = tmp_path_factory.mktemp("user-config")
    monkeypatch.setenv("CBTR_CONFIG_DIR", str(user_dir))
    monkeypatch.delenv("CBTR_LOG", raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def user_config_dir() -> Path:
    return Path(os.environ["CBTR_CONFIG_DIR"])


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository root (``.git`` directory) with a nested ``a/b/c`` tree."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    (root / "a" / "b" / "c").mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def isolated_project_env(repo: Path, monkeypatch) -> Path:
    """Run the test from inside ``repo``."""
    monkeypatch.chdir(repo)
    return repo
