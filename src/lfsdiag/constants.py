# topmark:header:start
#
#   project      : LfsDiag
#   file         : constants.py
#   file_relpath : src/lfsdiag/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LfsDiag Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

LFSDIAG_VERSION: str = get_version("lfsdiag")

PROGRAM_NAME: str = "lfsdiag"

# Optional per-repository configuration file, looked up at the working tree root:
CONFIG_FILE_NAME: str = ".lfsdiag.toml"
CONFIG_SECTION: str = "lfsdiag"

# Environment variables
ENV_DEBUG: str = "LFSDIAG_DEBUG"
ENV_LOG_DIR: str = "LFSDIAG_LOG_DIR"
ENV_LOG_LEVEL: str = "LFSDIAG_LOG_LEVEL"

# Panic log file naming: <timestamp>[.<fraction>][-<n>].log
LOG_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%S"
LOG_FILE_SUFFIX: str = ".log"

# Marker line that separates the crash log body from the environment snapshot.
ENV_MARKER: str = "ENV:"
