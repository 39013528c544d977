# topmark:header:start
#
#   project      : LfsDiag
#   file         : environment.py
#   file_relpath : src/lfsdiag/diagnostics/environment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version and environment information embedded in crash logs."""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lfsdiag.config.settings import Settings

GIT_VERSION_TIMEOUT: float = 10.0


class EnvironmentProvider(Protocol):
    """Source of the version and environment sections of a crash log."""

    @property
    def version_desc(self) -> str:
        """Program version descriptor."""
        ...

    def git_version(self) -> str:
        """Return the underlying git version; raise on failure."""
        ...

    def environ(self) -> list[str]:
        """Return the environment snapshot as ``KEY=VALUE`` lines."""
        ...


class ProcessEnvironment:
    """Environment provider for the running process.

    Implements [`EnvironmentProvider`][lfsdiag.diagnostics.environment.EnvironmentProvider].

    Args:
        settings (Settings): Resolved settings (version descriptor and local paths).
        environ (Mapping[str, str] | None): Environment to snapshot; defaults to ``os.environ``
            at the time of the snapshot.
        git (str): The git executable.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        environ: Mapping[str, str] | None = None,
        git: str = "git",
    ) -> None:
        self._settings = settings
        self._environ = environ
        self._git = git

    @property
    def version_desc(self) -> str:
        return self._settings.version_desc

    def git_version(self) -> str:
        """Run ``git version``.

        Raises:
            OSError: git could not be executed.
            subprocess.SubprocessError: git failed or timed out.
        """
        completed = subprocess.run(
            [self._git, "version"],
            capture_output=True,
            text=True,
            check=True,
            timeout=GIT_VERSION_TIMEOUT,
        )
        return completed.stdout.strip()

    def environ(self) -> list[str]:
        """Return resolved settings followed by every environment variable, sorted by name."""
        env = os.environ if self._environ is None else self._environ
        lines = self._settings.environ()
        lines.extend(f"{key}={value}" for key, value in sorted(env.items()))
        return lines
