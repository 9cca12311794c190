"""Integration test fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

_SRC = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Environment for running ``python -m classfinder`` in a subprocess.

    Runs from an empty directory so no stray classfinder.yaml is picked up.
    """
    env = {k: v for k, v in os.environ.items() if not k.startswith("CLASSFINDER__")}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(_SRC), env.get("PYTHONPATH")]))
    env["HOME"] = str(tmp_path)
    env["XDG_CONFIG_HOME"] = str(tmp_path / "config")
    return env
