"""Configuration constants and .env loading.

WHY: Centralizes the few values a deployment may want to change (which
dialect to assume, whether to break lines after each segment, where the
HTTP API listens) so they are easy to find and override.

HOW: python-dotenv loads the .env file on import. Values are read once
into module-level constants with plain defaults.

RULES:
- Dialect separator defaults are NOT configured here; they are fixed
  constants of each standard and live in core/separators.py
- All values here can be overridden via environment variables
- EDI_DEFAULT_DIALECT must name a registered dialect; it is checked when
  a SeparatorContext is built, not on import
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

DEFAULT_DIALECT = os.getenv("EDI_DEFAULT_DIALECT", "edifact").strip().lower()
"""Dialect used when neither the caller nor the override names one."""

SEGMENT_NEWLINE = os.getenv("EDI_SEGMENT_NEWLINE", "false").lower() == "true"
"""Write a line break after every segment terminator when rendering."""

API_HOST = os.getenv("EDI_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("EDI_API_PORT", "8000"))
