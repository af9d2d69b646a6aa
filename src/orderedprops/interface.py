"""Interface classes exist for coder interaction, to simplify the process
behind orderedprops."""

from typing import IO, Any, Iterator, Self
import threading
from .args import Parameters
from .exceptions_warnings import InvalidStateError
from .ordered_map import Comparator, OrderedMap, SortKey
from .properties_format import PropertiesCodec
from .sink import DateSuppressingWriter
from .storage import RedirectedStorage
from .streams import text_writer
from .utils import OrderedKeySet, copy_doc
from .xml_format import XmlPropertiesCodec

_REQUIRED_STATE = ("properties", "suppress_date")


class OrderedProperties:
    """String properties that keep their keys in a well-defined order.

    By default, keys are kept in the order they were added, either by
    set_property or by reading them top to bottom from a properties file.
    A custom ordering and the suppression of the date comment written on every
    store can be configured with OrderedPropertiesBuilder.

    Reading and writing is done by the .properties text and XML codecs, which
    are pointed at this instance's entries for the time of every call. All
    methods are thread-safe: they hold the instance's lock for their whole
    duration, including stream I/O.
    """

    def __init__(self, parameters: Parameters | None = None) -> None:
        """
        Args:
            parameters (Parameters | None, optional): Parameters for reading and
                writing. Defaults to Parameters().
        """
        self._lock = threading.RLock()
        self._properties = OrderedMap()
        self._suppress_date = False
        self._parameters = Parameters() if parameters is None else parameters.copy()

    @classmethod
    def _create(
        cls,
        properties: OrderedMap,
        suppress_date: bool,
        parameters: Parameters | None,
    ) -> Self:
        instance = cls(parameters)
        instance._properties = properties
        instance._suppress_date = suppress_date
        return instance

    @staticmethod
    def builder() -> "OrderedPropertiesBuilder":
        return OrderedPropertiesBuilder()

    @property
    def suppress_date(self) -> bool:
        """Whether the date comment is left out when storing the text format."""
        return self._suppress_date

    @property
    def parameters(self) -> Parameters:
        """Copy of the parameters used for reading and writing."""
        return self._parameters.copy()

    # ----------
    # entry access
    # ----------

    def get_property(self, key: str, default: str | None = None) -> str | None:
        """Get the value of a property.

        Args:
            key (str): The property key.
            default (str | None, optional): Returned if the property doesn't
                exist. Defaults to None.

        Returns:
            str | None: The value or default.
        """
        with self._lock:
            return self._properties.get(key, default)

    def set_property(self, key: str, value: str) -> str | None:
        """Set the value of a property. An existing property keeps its position.

        Args:
            key (str): The property key.
            value (str): The new value.

        Returns:
            str | None: The previous value or None if the property didn't exist.

        Raises:
            TypeError: If key or value is not a str.
        """
        with self._lock:
            return self._properties.set(key, value)

    def remove_property(self, key: str) -> str | None:
        """Remove a property and return its value (None if it didn't exist)."""
        with self._lock:
            return self._properties.remove(key)

    def contains_property(self, key: str) -> bool:
        """Whether a property with key exists."""
        with self._lock:
            return self._properties.contains(key)

    def is_empty(self) -> bool:
        with self._lock:
            return self._properties.is_empty()

    def size(self) -> int:
        """Number of properties."""
        with self._lock:
            return len(self._properties)

    def clear(self) -> None:
        with self._lock:
            self._properties.clear()

    def property_names(self) -> Iterator[str]:
        """Iterator over the property keys in order (taken at the time of the call)."""
        with self._lock:
            return iter(self._properties.keys())

    def string_property_names(self) -> OrderedKeySet[str]:
        """Ordered set of the property keys (taken at the time of the call)."""
        with self._lock:
            return self._properties.keys_as_set()

    def entry_set(self) -> list[tuple[str, str]]:
        """Ordered (key, value) pairs (taken at the time of the call)."""
        with self._lock:
            return self._properties.items()

    def to_plain_map(self) -> dict[str, str]:
        """All properties as a plain dict. Don't rely on the order of its keys."""
        with self._lock:
            return dict(self._properties.items())

    def copy(self) -> Self:
        """Independent instance with the same configuration and properties."""
        with self._lock:
            return self._create(
                self._properties.copy(), self._suppress_date, self._parameters.copy()
            )

    # ----------
    # reading
    # ----------

    def load(self, stream: IO[Any]) -> None:
        """Read properties in the .properties text format.

        Byte streams are decoded according to the parameters (ISO 8859-1 by
        default), character streams are read as they are. The stream is not
        closed. Read properties are added in the order they appear; existing
        properties keep their position and get the new value.

        Args:
            stream (IO[Any]): Byte or character stream to read from.

        Raises:
            PropertiesFormatError: If the content is malformed. Properties read
                before the malformed line are kept.
            OSError: If reading from the stream fails.
        """
        with self._lock:
            PropertiesCodec(RedirectedStorage(self._properties), self._parameters).load(
                stream
            )

    def load_from_xml(self, stream: IO[Any]) -> None:
        """Read properties from a properties XML document.

        Args:
            stream (IO[Any]): Stream holding the document. It is not closed.

        Raises:
            PropertiesFormatError: If the document is malformed or doesn't have
                the structure of a properties document.
            OSError: If reading from the stream fails.
        """
        with self._lock:
            XmlPropertiesCodec(
                RedirectedStorage(self._properties), self._parameters
            ).load(stream)

    # ----------
    # writing
    # ----------

    def store(self, stream: IO[Any], comments: str | None = None) -> None:
        """Write all properties in order in the .properties text format.

        The output starts with comments (if given) and a comment holding the
        current date, unless the date is suppressed. Byte streams receive
        ISO 8859-1 (by default) with \\uXXXX escapes for other characters,
        character streams receive all characters unescaped. The stream is
        flushed but not closed.

        Args:
            stream (IO[Any]): Byte or character stream to write to.
            comments (str | None, optional): Comment to write at the top.
                Defaults to None.

        Raises:
            OSError: If writing to the stream fails.
        """
        with self._lock:
            codec = PropertiesCodec(
                RedirectedStorage(self._properties), self._parameters
            )
            if not self._suppress_date:
                codec.store(stream, comments)
                return

            writer, binary = text_writer(stream, self._parameters.encoding)
            codec.write(
                DateSuppressingWriter(writer, self._parameters.line_separator),
                comments,
                escape_unicode=self._parameters.escape_unicode_for(binary),
            )

    def store_to_xml(
        self,
        stream: IO[Any],
        comment: str | None = None,
        encoding: str | None = None,
    ) -> None:
        """Write all properties in order as properties XML document.

        Date suppression doesn't apply, the XML format has no date comment.

        Args:
            stream (IO[Any]): Stream to write to. It is flushed but not closed.
            comment (str | None, optional): Content of the <comment> element.
                Defaults to None.
            encoding (str | None, optional): Encoding of the document. Defaults to
                the xml_encoding parameter ("UTF-8").

        Raises:
            LookupError: If encoding is unknown.
            OSError: If writing to the stream fails.
        """
        with self._lock:
            XmlPropertiesCodec(
                RedirectedStorage(self._properties), self._parameters
            ).store(stream, comment, encoding)

    # ----------
    # python protocols
    # ----------

    @copy_doc(size)
    def __len__(self) -> int:
        return self.size()

    @copy_doc(contains_property)
    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._properties

    def __iter__(self) -> Iterator[str]:
        return self.property_names()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedProperties):
            return NotImplemented
        # no nested locking to rule out deadlocks between two instances
        return self.to_plain_map() == other.to_plain_map()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        with self._lock:
            return repr(self._properties)

    def __copy__(self) -> Self:
        return self.copy()

    def __getstate__(self) -> dict[str, Any]:
        with self._lock:
            return {
                "properties": self._properties.items(),
                "suppress_date": self._suppress_date,
                "comparator": self._properties.comparator,
                "key": self._properties.sort_key,
                "parameters": self._parameters,
            }

    def __setstate__(self, state: dict[str, Any]) -> None:
        if not isinstance(state, dict):
            raise InvalidStateError(
                f"Can't restore {self.__class__.__name__} from {type(state).__name__}."
            )
        if missing := [k for k in _REQUIRED_STATE if k not in state]:
            raise InvalidStateError(
                f"Can't restore {self.__class__.__name__}, state misses {missing}."
            )

        properties = OrderedMap(state.get("comparator"), key=state.get("key"))
        try:
            for key, value in state["properties"]:
                properties.set(key, value)
        except (TypeError, ValueError) as e:
            raise InvalidStateError(
                f"Can't restore {self.__class__.__name__} from invalid properties."
            ) from e

        parameters = state.get("parameters")
        if parameters is not None and not isinstance(parameters, Parameters):
            raise InvalidStateError(
                f"Can't restore {self.__class__.__name__} with parameters of type"
                f" {type(parameters).__name__}."
            )
        self._lock = threading.RLock()
        self._properties = properties
        self._suppress_date = bool(state["suppress_date"])
        self._parameters = Parameters() if parameters is None else parameters


class OrderedPropertiesBuilder:
    """Builder for OrderedProperties instances."""

    def __init__(self) -> None:
        self._comparator: Comparator | None = None
        self._key: SortKey | None = None
        self._suppress_date = False
        self._parameters: Parameters | None = None

    def with_ordering(
        self,
        comparator: Comparator | None = None,
        *,
        key: SortKey | None = None,
    ) -> Self:
        """Use a custom ordering of the keys instead of insertion order.

        Args:
            comparator (Comparator | None, optional): Two-argument function
                returning a negative int, zero or a positive int if the first key
                sorts before, equal to or after the second. Defaults to None.
            key (SortKey | None, optional): One-argument sort key function, as
                for sorted(). Ignored if comparator is given. Defaults to None.

        Returns:
            Self: The builder.
        """
        self._comparator = comparator
        self._key = key
        return self

    def suppress_date_in_comment(self, suppress_date: bool) -> Self:
        """Leave out the comment holding the current date when storing.

        Args:
            suppress_date (bool): Whether to suppress the date comment.

        Returns:
            Self: The builder.
        """
        self._suppress_date = suppress_date
        return self

    def with_parameters(self, parameters: Parameters) -> Self:
        """Use parameters for reading and writing (a copy is taken on build)."""
        self._parameters = parameters
        return self

    def build(self) -> OrderedProperties:
        """Build a new, empty OrderedProperties instance."""
        return OrderedProperties._create(
            OrderedMap(self._comparator, key=self._key),
            self._suppress_date,
            None if self._parameters is None else self._parameters.copy(),
        )
