"""Parser limits and file naming defaults."""

from __future__ import annotations

# Maximum nesting of { ... } sub-templates
MAX_NESTING_DEPTH = 100

# Python frames used per nesting level (template -> token list -> recursive)
FRAMES_PER_LEVEL = 4

# Length of the remaining-input excerpt quoted in diagnostics
EXCERPT_LENGTH = 16

CONFIG_FILENAME = "statusfmt.toml"

DEFAULT_FILENAME = "<template>"
