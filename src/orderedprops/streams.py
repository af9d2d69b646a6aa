"""Helpers to treat byte and character streams alike."""

from typing import IO, Any, Protocol
import codecs
import io
import warnings
from charset_normalizer import from_bytes as read_from_bytes
from .args import Parameters
from .exceptions_warnings import EncodingDetectionWarning, PropertiesFormatError


class TextWriter(Protocol):
    """Anything text chunks can be written to."""

    def write(self, s: str, /) -> Any: ...


def is_binary(stream: IO[Any] | Any) -> bool:
    """Whether stream reads/writes bytes (True) or characters (False)."""
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in getattr(stream, "mode", "")


def decode(data: bytes | bytearray, parameters: Parameters) -> str:
    """Decode byte input of the text format.

    Args:
        data (bytes | bytearray): The raw input.
        parameters (Parameters): Parameters holding the encoding to use and whether
            to detect the encoding instead.

    Returns:
        str: The decoded content.
    """
    if parameters.detect_encoding and data:
        if (best := read_from_bytes(bytes(data)).best()) is not None:
            return str(best)
        warnings.warn(
            f"Encoding of the input could not be detected, using {parameters.encoding}.",
            EncodingDetectionWarning,
        )
    try:
        return bytes(data).decode(parameters.encoding)
    except UnicodeDecodeError as e:
        raise PropertiesFormatError(
            f"Input is not valid {parameters.encoding}: {e.reason} at byte {e.start}."
        ) from e


def read_text(stream: IO[Any], parameters: Parameters) -> str:
    """Read the whole of a byte or character stream as text (without closing it)."""
    data = stream.read()
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray)):
        return decode(data, parameters)
    raise TypeError(
        f"Can only read from byte or character streams, got {type(data).__name__}."
    )


class EncodingWriter:
    """Writes text chunks as encoded bytes to a byte stream.

    All chunks go through one incremental encoder, so encodings with a byte
    order mark or other state (utf-16, utf-8-sig, ...) write it only once.
    """

    def __init__(self, stream: IO[bytes], encoding: str) -> None:
        self.stream = stream
        self.encoding = encoding
        self._encoder = codecs.getincrementalencoder(encoding)()

    def write(self, s: str) -> int:
        self.stream.write(self._encoder.encode(s))
        return len(s)

    def flush(self) -> None:
        if tail := self._encoder.encode("", final=True):
            self.stream.write(tail)
        self.stream.flush()


def text_writer(stream: IO[Any], encoding: str) -> tuple[TextWriter, bool]:
    """Get a writer for text chunks on top of stream.

    Args:
        stream (IO[Any]): Byte or character stream to write to.
        encoding (str): Encoding to use if stream is a byte stream.

    Returns:
        tuple[TextWriter, bool]: The writer and whether stream is a byte stream.
    """
    if is_binary(stream):
        return EncodingWriter(stream, encoding), True
    return stream, False


def flush(writer: TextWriter) -> None:
    if callable(flush_method := getattr(writer, "flush", None)):
        flush_method()
