from typing import get_args
import codecs
import copy
from .globals import (
    DEFAULT_ENCODING,
    DEFAULT_LINE_SEPARATOR,
    DEFAULT_XML_ENCODING,
    LINE_SEPARATORS,
)


class Parameters:
    """Parameters for reading and writing."""

    def __init__(
        self,
        encoding: str = DEFAULT_ENCODING,
        detect_encoding: bool = False,
        line_separator: LINE_SEPARATORS = DEFAULT_LINE_SEPARATOR,  # type: ignore[assignment]
        escape_unicode: bool | None = None,
        require_separator: bool = False,
        warn_duplicate_keys: bool = True,
        xml_encoding: str = DEFAULT_XML_ENCODING,
    ) -> None:
        """
        Args:
            encoding (str, optional): Encoding of byte streams in the text format,
                for reading and writing. Defaults to "iso-8859-1".
            detect_encoding (bool, optional): Whether to detect the encoding of byte
                input instead of using encoding. If detection fails, encoding is
                used and an EncodingDetectionWarning is issued. Defaults to False.
            line_separator ("\\n" | "\\r\\n" | "\\r", optional): Line separator
                written after every comment and entry. Defaults to os.linesep.
            escape_unicode (bool | None, optional): Whether characters outside of
                printable ASCII are written as \\uXXXX escapes. If None, will escape
                when writing to byte streams and won't when writing to character
                streams. Defaults to None.
            require_separator (bool, optional): Whether a line without key-value
                separator is an error. If False, such a line is read as a key with
                an empty value. Defaults to False.
            warn_duplicate_keys (bool, optional): Whether to warn when a key occurs
                more than once within one document. Defaults to True.
            xml_encoding (str, optional): Encoding used for storing XML if none is
                passed explicitly. Defaults to "UTF-8".
        """
        self.encoding = encoding
        self.detect_encoding = detect_encoding
        self.line_separator = line_separator
        self.escape_unicode = escape_unicode
        self.require_separator = require_separator
        self.warn_duplicate_keys = warn_duplicate_keys
        self.xml_encoding = xml_encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        self._encoding = self.verify_encoding(value, "encoding")

    @property
    def xml_encoding(self) -> str:
        return self._xml_encoding

    @xml_encoding.setter
    def xml_encoding(self, value: str) -> None:
        self._xml_encoding = self.verify_encoding(value, "xml_encoding")

    @property
    def line_separator(self) -> LINE_SEPARATORS:
        return self._line_separator

    @line_separator.setter
    def line_separator(self, value: LINE_SEPARATORS) -> None:
        if value not in get_args(LINE_SEPARATORS):
            raise ValueError(
                f"line_separator must be one of {get_args(LINE_SEPARATORS)!r}, not {value!r}."
            )
        self._line_separator = value

    def escape_unicode_for(self, binary: bool) -> bool:
        """Whether to escape non-ASCII characters for a byte (binary=True) or
        character (binary=False) stream."""
        return binary if self.escape_unicode is None else self.escape_unicode

    def verify_encoding(self, value: str, name: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown {name} '{value}'.") from e
        return value

    def update(self, **kwargs) -> None:
        """Update parameters with kwargs

        Args:
            **kwargs: Keyword-arguments to update the parameters with.
        """
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"Unknown parameter '{k}'.")
            setattr(self, k, v)

    def copy(self) -> "Parameters":
        return copy.copy(self)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(encoding={self.encoding!r},"
            f" detect_encoding={self.detect_encoding!r},"
            f" line_separator={self.line_separator!r},"
            f" escape_unicode={self.escape_unicode!r},"
            f" require_separator={self.require_separator!r},"
            f" warn_duplicate_keys={self.warn_duplicate_keys!r},"
            f" xml_encoding={self.xml_encoding!r})"
        )
