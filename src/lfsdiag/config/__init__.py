# topmark:header:start
#
#   project      : LfsDiag
#   file         : __init__.py
#   file_relpath : src/lfsdiag/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for LfsDiag.

Public helpers:
    - [`load_settings`][lfsdiag.config.settings.load_settings] resolves the
      process-wide [`Settings`][lfsdiag.config.settings.Settings].
    - [`lfsdiag.config.logging`][] configures internal logging and the
      timestamped debug channel.
"""

from __future__ import annotations

from lfsdiag.config.settings import (
    Settings,
    get_env_bool,
    is_command_enabled,
    load_settings,
)

__all__ = [
    "Settings",
    "get_env_bool",
    "is_command_enabled",
    "load_settings",
]
