"""Constants used across the lexml package."""

from __future__ import annotations

from .config import LexConfig

DEFAULT_CONFIG = LexConfig()

# Markup characters
TAG_OPEN = "<"
TAG_CLOSE = ">"
STOP_MARKER = "/"
ATTRIBUTE_ASSIGN = "="
VALUE_QUOTE = '"'
COMMENT_OPEN = "<!--"

# A line containing any of these closes the tag it opened
SELF_CLOSING_MARKERS = ("/>", "?>")

# Limits
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

EOF_TEXT = "EOF"
