# tests/conftest.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, List, Tuple

import pytest
from fastapi.testclient import TestClient

# With src/ layout and `pip install -e .`, we can import the app package directly:
from streamavg.app.cli import main as cli_main  # noqa: E402
from streamavg.app.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # a developer's .env / shell must not leak defaults into the tests
    for var in ("AVG_CONFIG", "AVG_TRACE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def run_cli() -> Callable[..., Tuple[int, str, str]]:
    """
    Run `avg` in-process.
    Returns (exit_status, stdout, stderr); argparse exits surface as SystemExit.
    """
    def _run(argv: List[str], stdin_text: str = "") -> Tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        code = cli_main(argv, stdin=io.StringIO(stdin_text), stdout=out, stderr=err)
        return code, out.getvalue(), err.getvalue()
    return _run


@pytest.fixture
def data_file(tmp_path: Path) -> Callable[[str], Path]:
    def make(text: str, name: str = "samples.txt") -> Path:
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p
    return make
