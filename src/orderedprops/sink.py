"""Writer that drops the date comment from text format output."""

from .globals import COMMENT_MARKERS, DEFAULT_LINE_SEPARATOR
from .streams import TextWriter, flush


class DateSuppressingWriter:
    """Writes all leading comment lines except the last one to a destination.

    The text format writer always puts the date comment last among the leading
    comment lines, so holding back each completed comment line until the next
    one is complete drops exactly the date line. The held line is never flushed
    once non-comment content starts, nor at the end of the output.

    This relies on the chunking of PropertiesCodec.write: a comment line arrives
    as chunks starting with the comment marker, completed by a chunk that ends
    with the line separator. A new instance is needed for every store.
    """

    def __init__(
        self,
        destination: TextWriter,
        line_separator: str = DEFAULT_LINE_SEPARATOR,
        comment_markers: tuple[str, ...] = COMMENT_MARKERS,
    ) -> None:
        """
        Args:
            destination (TextWriter): Writer that receives the filtered output.
            line_separator (str, optional): Line separator the comment lines end
                with. Must be the one the codec writes. Defaults to os.linesep.
            comment_markers (tuple[str, ...], optional): Markers a comment line
                starts with. Defaults to ("#", "!").
        """
        self.destination = destination
        self.line_separator = line_separator
        self.comment_markers = comment_markers
        self._pending: list[str] | None = None
        self._held: str | None = None

    def write(self, chunk: str) -> int:
        if self._pending is None:
            if not chunk.startswith(self.comment_markers):
                # content after the leading comments, the held line is dropped
                self._held = None
                self.destination.write(chunk)
                return len(chunk)
            self._pending = []

        self._pending.append(chunk)
        if chunk.endswith(self.line_separator):
            if self._held is not None:
                self.destination.write(self._held)
            self._held = "".join(self._pending)
            self._pending = None
        return len(chunk)

    def flush(self) -> None:
        """Flush the destination. A held comment line stays held."""
        flush(self.destination)

    @property
    def held(self) -> str | None:
        """The last completed comment line, not written (yet)."""
        return self._held
