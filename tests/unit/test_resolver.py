"""Unit tests for classfinder.resolver."""

from __future__ import annotations

import collections
import random
from fractions import Fraction
from typing import TYPE_CHECKING

import pytest
from structlog.testing import capture_logs

from classfinder.resolver import Resolved, Skipped, import_class, resolve_all, resolve_name

if TYPE_CHECKING:
    from pathlib import Path


class _DictContext:
    """Resolves names from a fixed mapping; never enumerates anything."""

    def __init__(self, classes: dict[str, type]) -> None:
        self._classes = classes

    def iter_resources(self, relative_path: str):
        return iter(())

    def resolve(self, qualified_name: str) -> type | None:
        return self._classes.get(qualified_name)


# ---------------------------------------------------------------------------
# import_class
# ---------------------------------------------------------------------------


class TestImportClass:
    def test_dotted_name(self) -> None:
        assert import_class("collections.OrderedDict") is collections.OrderedDict

    def test_dotted_name_in_submodule(self) -> None:
        import json.decoder

        assert import_class("json.decoder.JSONDecoder") is json.decoder.JSONDecoder

    def test_colon_form(self) -> None:
        assert import_class("random:Random") is random.Random

    def test_nested_class(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        pkg = tmp_path / "cf_nested_pkg"
        pkg.mkdir()
        (pkg / "__init__.py").write_text(
            "class Outer:\n    class Inner:\n        pass\n", encoding="utf-8"
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        inner = import_class("cf_nested_pkg.Outer.Inner")
        assert inner is not None
        assert inner.__qualname__ == "Outer.Inner"

    @pytest.mark.parametrize(
        "name",
        [
            "no_such_module_cf.Thing",
            "collections.NoSuchClass",
            "os.sep",  # not a class
            "os.path",  # a module, not a class
            "Random",  # no module part
            "",
            "collections..OrderedDict",
            "random:",
            "1bad.Name",
        ],
    )
    def test_unresolvable_returns_none(self, name: str) -> None:
        assert import_class(name) is None

    def test_module_with_missing_dependency_returns_none(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "cf_optional_dep.py").write_text(
            "import cf_not_installed_anywhere\n\nclass Plugin:\n    pass\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        assert import_class("cf_optional_dep.Plugin") is None

    def test_module_raising_other_errors_propagates(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "cf_broken_module.py").write_text(
            "raise RuntimeError('boom')\n", encoding="utf-8"
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(RuntimeError, match="boom"):
            import_class("cf_broken_module.Thing")


# ---------------------------------------------------------------------------
# resolve_name / resolve_all
# ---------------------------------------------------------------------------


class TestResolveName:
    def test_resolved(self) -> None:
        ctx = _DictContext({"r.Random": random.Random})
        assert resolve_name(ctx, "r.Random") == Resolved("r.Random", random.Random)

    def test_skipped(self) -> None:
        result = resolve_name(_DictContext({}), "missing.Thing")
        assert isinstance(result, Skipped)
        assert result.qualified_name == "missing.Thing"


class TestResolveAll:
    def test_deduplicates_in_first_seen_order(self) -> None:
        ctx = _DictContext({"a.R": random.Random, "b.F": Fraction, "alias.R": random.Random})
        result = resolve_all(ctx, ["b.F", "a.R", "b.F", "alias.R"])
        assert result == (Fraction, random.Random)

    def test_skips_unresolvable_with_warning(self) -> None:
        ctx = _DictContext({"a.R": random.Random})
        with capture_logs() as logs:
            result = resolve_all(ctx, ["a.R", "gone.Thing"], registry="plugins")
        assert result == (random.Random,)
        warnings = [e for e in logs if e["event"] == "class_unresolved"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["qualified_name"] == "gone.Thing"
        assert warnings[0]["registry"] == "plugins"

    def test_empty_input(self) -> None:
        assert resolve_all(_DictContext({}), []) == ()
