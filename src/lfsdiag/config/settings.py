# topmark:header:start
#
#   project      : LfsDiag
#   file         : settings.py
#   file_relpath : src/lfsdiag/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Process-wide settings for the diagnostic subsystem.

Settings are resolved once at startup, in increasing order of precedence:

1. built-in defaults,
2. the ``[lfsdiag]`` (or ``[tool.lfsdiag]``) table of ``.lfsdiag.toml`` at the
   working tree root, parsed with `tomlkit`,
3. environment variables (``LFSDIAG_DEBUG``, ``LFSDIAG_LOG_DIR``),
4. explicit overrides passed by the CLI (``--debug``).

The resulting [`Settings`][lfsdiag.config.settings.Settings] is frozen; the
debug flag it carries is read-only once the program has started.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from lfsdiag.config.logging import get_logger
from lfsdiag.constants import (
    CONFIG_FILE_NAME,
    CONFIG_SECTION,
    ENV_DEBUG,
    ENV_LOG_DIR,
    LFSDIAG_VERSION,
    PROGRAM_NAME,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lfsdiag.config.logging import LfsDiagLogger

logger: LfsDiagLogger = get_logger(__name__)

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSY: frozenset[str] = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class Settings:
    """Resolved diagnostic settings.

    Attributes:
        debugging (bool): Global debug flag. When set, every error is escalated to a
            panic log and debug lines are emitted.
        log_dir (Path): Directory that receives panic logs (created on demand).
        working_dir (Path | None): Root of the enclosing git working tree, if any.
        git_dir (Path | None): The repository's git directory, if any.
        version_desc (str): Human-readable program version descriptor.
    """

    debugging: bool
    log_dir: Path
    working_dir: Path | None
    git_dir: Path | None
    version_desc: str

    def environ(self) -> list[str]:
        """Return the settings as ``Key=Value`` lines for crash logs."""
        return [
            f"LocalWorkingDir={self.working_dir or ''}",
            f"LocalGitDir={self.git_dir or ''}",
            f"LocalLogDir={self.log_dir}",
            f"Debugging={str(self.debugging).lower()}",
        ]


def version_descriptor() -> str:
    """Return the program version descriptor.

    Example: ``lfsdiag/0.3.0 (linux x86_64; python 3.12.1)``.
    """
    system = platform.system().lower() or "unknown"
    machine = platform.machine() or "unknown"
    python = platform.python_version()
    return f"{PROGRAM_NAME}/{LFSDIAG_VERSION} ({system} {machine}; python {python})"


def parse_bool(value: str | None, default: bool) -> bool:
    """Parse a git-style boolean string.

    Unknown values fall back to ``default``.
    """
    if value is None:
        return default
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


def get_env_bool(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Return the boolean value of environment variable ``name``."""
    env = os.environ if environ is None else environ
    return parse_bool(env.get(name), default)


def is_command_enabled(cmd: str, environ: Mapping[str, str] | None = None) -> bool:
    """Return whether ``LFSDIAG<CMD>ENABLED`` is truthy (False when unset).

    Only commands without a stable interface should be guarded with this.
    """
    return get_env_bool(f"LFSDIAG{cmd.upper()}ENABLED", False, environ)


def find_git_dir(start: Path) -> tuple[Path | None, Path | None]:
    """Walk up from ``start`` looking for a git repository.

    Returns:
        tuple[Path | None, Path | None]: ``(working_dir, git_dir)``, both None when
            ``start`` is not inside a repository. A ``.git`` *file* (worktrees,
            submodules) is followed through its ``gitdir:`` pointer.
    """
    for candidate in (start, *start.parents):
        dot_git = candidate / ".git"
        if dot_git.is_dir():
            return candidate, dot_git
        if dot_git.is_file():
            try:
                text = dot_git.read_text(encoding="utf-8").strip()
            except OSError as exc:
                logger.warning("Cannot read %s: %s", dot_git, exc)
                continue
            if text.startswith("gitdir:"):
                target = Path(text.removeprefix("gitdir:").strip())
                if not target.is_absolute():
                    target = candidate / target
                return candidate, target.resolve()
    return None, None


def default_log_dir(git_dir: Path | None) -> Path:
    """Return the default panic log directory.

    Inside a repository logs live next to the other repository-local state
    (``<git dir>/lfs/logs``); outside one they go to ``~/.lfsdiag/logs``.
    """
    if git_dir is not None:
        return git_dir / "lfs" / "logs"
    return Path.home() / f".{PROGRAM_NAME}" / "logs"


def load_file_config(root: Path) -> dict[str, Any]:
    """Load the ``[lfsdiag]`` table from ``root/.lfsdiag.toml``.

    A missing file yields an empty dict. An unreadable or malformed file is
    logged and ignored so that diagnostics keep working with defaults.
    """
    path = root / CONFIG_FILE_NAME
    if not path.is_file():
        return {}
    try:
        doc: dict[str, Any] = tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()
    except (OSError, TomlkitParseError) as exc:
        logger.warning("Ignoring configuration file %s: %s", path, exc)
        return {}

    table: Any = doc.get(CONFIG_SECTION)
    tool: Any = doc.get("tool")
    if table is None and isinstance(tool, dict):
        table = cast("dict[str, Any]", tool).get(CONFIG_SECTION)
    if not isinstance(table, dict):
        return {}
    logger.debug("Loaded configuration from %s", path)
    return cast("dict[str, Any]", table)


def load_settings(
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
    debug: bool | None = None,
    log_dir: Path | None = None,
) -> Settings:
    """Resolve [`Settings`][lfsdiag.config.settings.Settings] for this process.

    Args:
        cwd (Path | None): Directory to start repository discovery from (defaults to the cwd).
        environ (Mapping[str, str] | None): Environment mapping (defaults to ``os.environ``).
        debug (bool | None): Explicit debug override (``--debug``); None keeps the resolved value.
        log_dir (Path | None): Explicit log directory override.

    Returns:
        Settings: The resolved, immutable settings.
    """
    env = os.environ if environ is None else environ
    start = (cwd or Path.cwd()).resolve()
    working_dir, git_dir = find_git_dir(start)

    file_cfg = load_file_config(working_dir or start)

    raw_debug = file_cfg.get("debug", False)
    debugging = raw_debug if isinstance(raw_debug, bool) else parse_bool(str(raw_debug), False)
    resolved_log_dir = default_log_dir(git_dir)
    cfg_log_dir = file_cfg.get("log_dir")
    if isinstance(cfg_log_dir, str) and cfg_log_dir:
        p = Path(cfg_log_dir).expanduser()
        resolved_log_dir = p if p.is_absolute() else (working_dir or start) / p

    debugging = get_env_bool(ENV_DEBUG, debugging, env)
    env_log_dir = env.get(ENV_LOG_DIR)
    if env_log_dir:
        resolved_log_dir = Path(env_log_dir).expanduser()

    settings = Settings(
        debugging=debugging,
        log_dir=resolved_log_dir,
        working_dir=working_dir,
        git_dir=git_dir,
        version_desc=version_descriptor(),
    )
    if debug is not None:
        settings = replace(settings, debugging=debug)
    if log_dir is not None:
        settings = replace(settings, log_dir=log_dir)
    return settings
