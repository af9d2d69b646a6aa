"""Reading and writing of the line-oriented .properties text format.

The format in short:

- lines end in "\\n", "\\r" or "\\r\\n"; leading whitespace is ignored
- lines starting with "#" or "!" are comments, blank lines are skipped
- a line ending in an odd number of backslashes continues on the next line
- the key ends at the first unescaped "=", ":" or whitespace
- backslash escapes "\\t", "\\n", "\\r", "\\f" and "\\uXXXX"; any other escaped
  character stands for itself

All entries are read from and written to a PropertiesStorage, the codec keeps
none of its own.
"""

from datetime import datetime
from typing import IO, Any, Iterator
import re
import warnings
from .args import Parameters
from .exceptions_warnings import (
    DuplicateKeyWarning,
    MalformedEscapeError,
    MissingSeparatorError,
)
from .globals import (
    COMMENT_MARKER,
    COMMENT_MARKERS,
    KEY_VALUE_SEPARATORS,
    TIMESTAMP_FORMAT,
    WHITESPACE,
    WRITE_SEPARATOR,
)
from .storage import DictStorage, PropertiesStorage
from .streams import TextWriter, flush, read_text, text_writer

_PHYSICAL_LINE = re.compile(r"\r\n|\r|\n")
_ESCAPE = re.compile(
    r"\\(?:u(?P<code>[0-9a-fA-F]{4})|(?P<malformed>u)|(?P<char>.))", re.DOTALL
)
_TRAILING_BACKSLASHES = re.compile(r"\\+$")
_SURROGATE = re.compile("[\ud800-\udfff]")
_UNESCAPED = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPED = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_ESCAPED_SPECIALS = frozenset("=:#!")
_LSTRIP = "".join(WHITESPACE)


def _now() -> datetime:
    return datetime.now().astimezone()


def timestamp_comment() -> str:
    """The date comment written on every store, without line separator."""
    return f"{COMMENT_MARKER}{_now().strftime(TIMESTAMP_FORMAT)}"


class PropertiesCodec:
    """Reads and writes the .properties text format through a storage seam."""

    def __init__(
        self,
        storage: PropertiesStorage | None = None,
        parameters: Parameters | None = None,
    ) -> None:
        """
        Args:
            storage (PropertiesStorage | None, optional): Storage that receives the
                entries read and provides the entries written. If None, the codec
                uses a DictStorage of its own. Defaults to None.
            parameters (Parameters | None, optional): Parameters for reading and
                writing. Defaults to Parameters().
        """
        self.storage: PropertiesStorage = DictStorage() if storage is None else storage
        self.parameters = Parameters() if parameters is None else parameters

    # ----------
    # reading
    # ----------

    def load(self, stream: IO[Any]) -> None:
        """Read all entries of a byte or character stream into the storage.

        Byte streams are decoded with parameters.encoding (or the detected
        encoding if parameters.detect_encoding is set). The stream is read to its
        end but not closed.

        Args:
            stream (IO[Any]): The stream to read from.

        Raises:
            PropertiesFormatError: If the content is malformed. Entries read
                before the malformed line stay in the storage.
        """
        self.loads(read_text(stream, self.parameters))

    def loads(self, content: str) -> None:
        """Read all entries of content into the storage.

        Args:
            content (str): Content in the .properties text format.
        """
        seen: set[str] = set()
        for line_number, line in self._logical_lines(content):
            key, value = self._split_entry(line, line_number)
            if key in seen and self.parameters.warn_duplicate_keys:
                warnings.warn(
                    f"Line {line_number} redefines key '{key}', the earlier value is overwritten.",
                    DuplicateKeyWarning,
                )
            seen.add(key)
            self.storage.put(key, value)

    @staticmethod
    def _logical_lines(content: str) -> Iterator[tuple[int, str]]:
        """Join continued lines and drop comments and blank lines.

        Yields:
            tuple[int, str]: Number of the first physical line (starting at 1)
                and the logical line without leading whitespace.
        """
        logical: list[str] = []
        start = 0
        for index, physical in enumerate(_PHYSICAL_LINE.split(content), start=1):
            stripped = physical.lstrip(_LSTRIP)
            if not logical:
                if not stripped or stripped[0] in COMMENT_MARKERS:
                    continue
                start = index
            elif not stripped:
                # an empty continuation line ends the logical line
                if text := "".join(logical):
                    yield start, text
                logical = []
                continue

            backslashes = _TRAILING_BACKSLASHES.search(stripped)
            if backslashes and len(backslashes[0]) % 2:
                logical.append(stripped[:-1])
            else:
                logical.append(stripped)
                yield start, "".join(logical)
                logical = []

        # a lone continuation backslash leaves nothing to yield
        if text := "".join(logical):
            yield start, text

    def _split_entry(self, line: str, line_number: int) -> tuple[str, str]:
        """Split a logical line into its unescaped key and value."""
        limit = len(line)
        key_end = 0
        value_start = limit
        has_separator = False
        preceding_backslash = False

        while key_end < limit:
            char = line[key_end]
            if not preceding_backslash:
                if char in KEY_VALUE_SEPARATORS:
                    value_start = key_end + 1
                    has_separator = True
                    break
                if char in WHITESPACE:
                    value_start = key_end + 1
                    break
            preceding_backslash = char == "\\" and not preceding_backslash
            key_end += 1

        if key_end == limit and self.parameters.require_separator:
            raise MissingSeparatorError(
                f"Line {line_number} has no key-value separator: '{line}'."
            )

        while value_start < limit:
            char = line[value_start]
            if char not in WHITESPACE:
                if has_separator or char not in KEY_VALUE_SEPARATORS:
                    break
                has_separator = True
            value_start += 1

        return (
            unescape(line[:key_end], line_number),
            unescape(line[value_start:], line_number),
        )

    # ----------
    # writing
    # ----------

    def store(self, stream: IO[Any], comments: str | None = None) -> None:
        """Write all entries of the storage to a byte or character stream.

        Byte streams receive parameters.encoding. Unless parameters.escape_unicode
        says otherwise, characters outside of printable ASCII are escaped for byte
        streams and written as they are for character streams. In comments,
        characters above U+00FF are always escaped. The stream is flushed but
        not closed.

        Args:
            stream (IO[Any]): The stream to write to.
            comments (str | None, optional): Comment to write before the date
                comment. Defaults to None.
        """
        writer, binary = text_writer(stream, self.parameters.encoding)
        self.write(
            writer, comments, escape_unicode=self.parameters.escape_unicode_for(binary)
        )

    def write(
        self,
        writer: TextWriter,
        comments: str | None = None,
        escape_unicode: bool = False,
    ) -> None:
        """Write all entries of the storage to writer.

        Every comment line and every entry is written as its text followed by a
        separate write of just the line separator. A comment line always starts
        with a comment marker, an entry never does.

        Args:
            writer (TextWriter): Writer that accepts text chunks.
            comments (str | None, optional): Comment to write before the date
                comment. Defaults to None.
            escape_unicode (bool, optional): Whether to write characters outside of
                printable ASCII as \\uXXXX escapes. Defaults to False.
        """
        separator = self.parameters.line_separator

        if comments is not None:
            self._write_comments(writer, comments)
        writer.write(timestamp_comment())
        writer.write(separator)

        for key in self.storage.keys():
            value = self.storage.get(key)
            if value is None:
                continue
            writer.write(
                escape(key, escape_space=True, escape_unicode=escape_unicode)
                + WRITE_SEPARATOR
                + escape(value, escape_space=False, escape_unicode=escape_unicode)
            )
            writer.write(separator)

        flush(writer)

    def _write_comments(self, writer: TextWriter, comments: str) -> None:
        """Write comments, each of its lines as a comment line. Characters above
        U+00FF are written as \\uXXXX escapes, whatever the stream."""
        separator = self.parameters.line_separator
        lines = _PHYSICAL_LINE.split(comments)
        for index, line in enumerate(lines):
            # continuation lines that are comments already keep their own marker
            if index == 0 or not line or line[0] not in COMMENT_MARKERS:
                writer.write(COMMENT_MARKER)
            if line:
                writer.write(_escape_comment(line))
            writer.write(separator)

    # ----------
    # storage access
    # ----------

    def get(self, key: str) -> str | None:
        return self.storage.get(key)

    def put(self, key: str, value: str) -> str | None:
        return self.storage.put(key, value)

    def keys(self) -> list[str]:
        return list(self.storage.keys())


def unescape(text: str, line_number: int | None = None) -> str:
    """Resolve the backslash escapes of a key or value.

    Args:
        text (str): Escaped key or value.
        line_number (int | None, optional): Line of text, used for error messages.
            Defaults to None.

    Returns:
        str: The unescaped text.

    Raises:
        MalformedEscapeError: If a \\u is not followed by four hex digits.
    """
    if "\\" not in text:
        return text

    def replace(match: re.Match[str]) -> str:
        if match["code"] is not None:
            return chr(int(match["code"], 16))
        if match["malformed"] is not None:
            where = f" in line {line_number}" if line_number is not None else ""
            raise MalformedEscapeError(f"Malformed \\uxxxx encoding{where}: '{text}'.")
        return _UNESCAPED.get(match["char"], match["char"])

    unescaped = _ESCAPE.sub(replace, text)
    if _SURROGATE.search(unescaped):
        # join escaped surrogate pairs into single characters
        unescaped = unescaped.encode("utf-16-le", "surrogatepass").decode(
            "utf-16-le", "surrogatepass"
        )
    return unescaped


def _unicode_escape(char: str) -> str:
    code = ord(char)
    if code > 0xFFFF:
        code -= 0x10000
        return f"\\u{0xD800 + (code >> 10):04X}\\u{0xDC00 + (code & 0x3FF):04X}"
    return f"\\u{code:04X}"


def escape(text: str, escape_space: bool, escape_unicode: bool) -> str:
    """Escape a key or value for writing.

    Args:
        text (str): The key or value.
        escape_space (bool): Whether to escape every space (keys) or only a
            leading one (values).
        escape_unicode (bool): Whether to write characters outside of printable
            ASCII as \\uXXXX escapes.

    Returns:
        str: The escaped text.
    """
    out: list[str] = []
    for index, char in enumerate(text):
        if char == "\\":
            out.append("\\\\")
        elif char == " ":
            out.append("\\ " if index == 0 or escape_space else " ")
        elif char in _ESCAPED:
            out.append(_ESCAPED[char])
        elif char in _ESCAPED_SPECIALS:
            out.append("\\" + char)
        elif escape_unicode and not " " < char < "\x7f":
            out.append(_unicode_escape(char))
        else:
            out.append(char)
    return "".join(out)


def _escape_comment(line: str) -> str:
    return "".join(_unicode_escape(c) if ord(c) > 0xFF else c for c in line)
