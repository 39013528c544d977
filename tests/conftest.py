# topmark:header:start
#
#   project      : LfsDiag
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the LfsDiag test suite.

This file sets up global fixtures and the logging configuration for test runs.

Notes:
    Tests never touch the user's real log directory: every
    [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics] built here writes
    crash logs under ``tmp_path`` and prints to in-memory streams, and the
    ``LFSDIAG_*`` environment variables are cleared for every test.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from lfsdiag.config import logging
from lfsdiag.config.settings import Settings
from lfsdiag.diagnostics.dispatch import Diagnostics

if TYPE_CHECKING:
    from collections.abc import Sequence

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

FIXED_NOW: datetime = datetime(2025, 1, 31, 12, 0, 0, 123400)
SCENARIO_ARGV: list[str] = ["git-lfs", "push", "origin"]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


class FakeEnvironment:
    """Deterministic version/environment provider for crash log tests.

    Args:
        version_desc (str): Version descriptor line.
        git_version (str | Exception): Git version, or the exception ``git_version()`` raises.
        environ (Sequence[str] | None): Environment lines.
    """

    def __init__(
        self,
        version_desc: str = "1.0.0",
        git_version: str | Exception = "git version 2.40",
        environ: Sequence[str] | None = None,
    ) -> None:
        self._version_desc = version_desc
        self._git_version = git_version
        self._environ = list(environ) if environ is not None else ["HOME=/home/test", "LANG=C"]

    @property
    def version_desc(self) -> str:
        return self._version_desc

    def git_version(self) -> str:
        if isinstance(self._git_version, Exception):
            raise self._git_version
        return self._git_version

    def environ(self) -> list[str]:
        return list(self._environ)


def make_settings(log_dir: Path, **overrides: Any) -> Settings:
    """Return test Settings logging to ``log_dir``."""
    values: dict[str, Any] = {
        "debugging": False,
        "log_dir": log_dir,
        "working_dir": None,
        "git_dir": None,
        "version_desc": "1.0.0",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def isolate_lfsdiag_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure developer shell settings do not leak into tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    for name in (
        "LFSDIAG_LOG_LEVEL",
        "LFSDIAG_DEBUG",
        "LFSDIAG_LOG_DIR",
        "LFSDIAGBOOMTOWNENABLED",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure logging for the test suite.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Return the (not yet existing) crash log directory for a test."""
    return tmp_path / "logs"


@pytest.fixture
def make_diagnostics(log_dir: Path) -> Callable[..., Diagnostics]:
    """Return a factory building Diagnostics bound to in-memory streams.

    Keyword arguments override the defaults (``debugging``, ``settings``,
    ``environment``, ``argv``, ``stdin``, ``exit``, ``clock``). The real streams are
    reachable as ``diag.out.real`` / ``diag.err.real`` (``io.StringIO``).
    """

    def _make(**kwargs: Any) -> Diagnostics:
        settings: Settings = kwargs.pop("settings", None) or make_settings(
            log_dir, debugging=kwargs.pop("debugging", False)
        )
        kwargs.setdefault("environment", FakeEnvironment())
        kwargs.setdefault("argv", SCENARIO_ARGV)
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        return Diagnostics(settings, stdout=io.StringIO(), stderr=io.StringIO(), **kwargs)

    return _make


def real_out(diag: Diagnostics) -> str:
    """Return what was printed to the real stdout."""
    return cast("io.StringIO", diag.out.real).getvalue()


def real_err(diag: Diagnostics) -> str:
    """Return what was printed to the real stderr."""
    return cast("io.StringIO", diag.err.real).getvalue()
