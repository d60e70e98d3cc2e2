import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[1]
src_dir = repo_root / "src"
# "src/" layout: make top-level names importable (e.g. 'core', 'file_handler').
if src_dir.exists() and str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def data_home(tmp_path, monkeypatch):
    """Keep settings, history and chat files inside the test's tmp dir."""
    home = tmp_path / "cryptofinder-home"
    monkeypatch.setenv("CRYPTOFINDER_HOME", str(home))
    return home
