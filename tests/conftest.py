"""Shared fixtures: index directories, archives and isolated registry tables."""

from __future__ import annotations

import zipfile
from typing import TYPE_CHECKING

import pytest

from classfinder.context import PathContext
from classfinder.index import write_index
from classfinder.names import index_path
from classfinder.registry import RegistryTable, get_table

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def index_dir(tmp_path: Path) -> Path:
    """Build output directory holding the "test1" index."""
    root = tmp_path / "classes"
    target = root / index_path("test1")
    target.parent.mkdir(parents=True)
    target.write_text("collections.OrderedDict\nrandom.Random\n\n", encoding="utf-8")
    return root


@pytest.fixture()
def index_zip(tmp_path: Path) -> Path:
    """Wheel-like archive contributing its own "test1" index."""
    archive = tmp_path / "extra-1.0-py3-none-any.whl"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(index_path("test1"), "random.Random\nfractions.Fraction\n")
        zf.writestr(index_path("only-in-zip"), "decimal.Decimal\n")
    return archive


@pytest.fixture()
def context(index_dir: Path) -> PathContext:
    return PathContext([index_dir])


@pytest.fixture()
def table(context: PathContext) -> RegistryTable:
    return RegistryTable(lambda: context)


@pytest.fixture()
def make_index(tmp_path: Path):
    """Write an index file under a fresh build directory and return the directory."""
    counter = 0

    def _make(name: str, *lines: str) -> Path:
        nonlocal counter
        counter += 1
        root = tmp_path / f"artifact{counter}"
        write_index(root, name, lines)
        return root

    return _make


@pytest.fixture(autouse=True)
def _clear_process_table():
    yield
    get_table().clear()
