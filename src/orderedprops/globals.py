import os
from typing import Literal

COMMENT_MARKER = "#"
"""Marker used for writing comments."""
COMMENT_MARKERS = ("#", "!")
"""Markers that denote a comment line when reading."""
KEY_VALUE_SEPARATORS = ("=", ":")
WHITESPACE = (" ", "\t", "\f")
"""Characters skipped around keys and values (line ends excluded)."""
WRITE_SEPARATOR = "="

DEFAULT_ENCODING = "iso-8859-1"
DEFAULT_XML_ENCODING = "UTF-8"
DEFAULT_LINE_SEPARATOR = os.linesep
LINE_SEPARATORS = Literal["\n", "\r\n", "\r"]
"""Valid line separators for writing."""

TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Z %Y"
"""Format of the date comment written on every text store."""

XML_DOCTYPE = (
    '<!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">'
)
XML_ROOT_TAG = "properties"
XML_COMMENT_TAG = "comment"
XML_ENTRY_TAG = "entry"
XML_KEY_ATTRIBUTE = "key"
