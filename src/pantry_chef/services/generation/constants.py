"""Constants for the recipe generation service."""

from __future__ import annotations

# Raw model text is truncated to this many characters in diagnostics
DIAGNOSTIC_RAW_LIMIT = 2000

OUTCOME_SUCCESS = "success"
OUTCOME_REPAIRED = "repaired"
OUTCOME_FAILED = "failed"
