"""Reading and writing of the properties XML format.

Documents look like this::

    <?xml version="1.0" encoding="UTF-8" standalone="no"?>
    <!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">
    <properties>
    <comment>optional</comment>
    <entry key="some.key">some value</entry>
    </properties>
"""

from typing import IO, Any
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape, quoteattr
import codecs
import warnings
from .args import Parameters
from .exceptions_warnings import DuplicateKeyWarning, PropertiesFormatError
from .globals import (
    XML_COMMENT_TAG,
    XML_DOCTYPE,
    XML_ENTRY_TAG,
    XML_KEY_ATTRIBUTE,
    XML_ROOT_TAG,
)
from .storage import DictStorage, PropertiesStorage
from .streams import flush, is_binary

# parsers turn a literal carriage return into a newline
_TEXT_ENTITIES = {"\r": "&#13;"}


class XmlPropertiesCodec:
    """Reads and writes the properties XML format through a storage seam."""

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

    def load(self, stream: IO[Any]) -> None:
        """Read all entries of an XML document into the storage.

        The stream is read to its end but not closed.

        Args:
            stream (IO[Any]): Stream holding the document.

        Raises:
            PropertiesFormatError: If the document is no well-formed XML or
                doesn't have the structure of a properties document. Entries
                before the first misplaced element stay in the storage.
        """
        try:
            root = ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise PropertiesFormatError(f"Malformed XML: {e}") from e

        if root.tag != XML_ROOT_TAG:
            raise PropertiesFormatError(
                f"Root element must be <{XML_ROOT_TAG}>, not <{root.tag}>."
            )

        seen: set[str] = set()
        for index, element in enumerate(root):
            if element.tag == XML_COMMENT_TAG:
                if index != 0:
                    raise PropertiesFormatError(
                        f"<{XML_COMMENT_TAG}> is only allowed as first element of <{XML_ROOT_TAG}>."
                    )
                continue
            if element.tag != XML_ENTRY_TAG:
                raise PropertiesFormatError(
                    f"Element <{element.tag}> is not allowed in <{XML_ROOT_TAG}>."
                )
            if (key := element.get(XML_KEY_ATTRIBUTE)) is None:
                raise PropertiesFormatError(
                    f"<{XML_ENTRY_TAG}> number {index + 1} misses the '{XML_KEY_ATTRIBUTE}' attribute."
                )
            if len(element):
                raise PropertiesFormatError(
                    f"<{XML_ENTRY_TAG}> '{key}' must only contain text."
                )

            if key in seen and self.parameters.warn_duplicate_keys:
                warnings.warn(
                    f"Entry '{key}' occurs more than once, the earlier value is overwritten.",
                    DuplicateKeyWarning,
                )
            seen.add(key)
            self.storage.put(key, element.text or "")

    def store(
        self,
        stream: IO[Any],
        comment: str | None = None,
        encoding: str | None = None,
    ) -> None:
        """Write all entries of the storage as XML document.

        Args:
            stream (IO[Any]): Byte or character stream to write to. It is flushed
                but not closed.
            comment (str | None, optional): Content of the <comment> element. If
                None, no <comment> is written. Defaults to None.
            encoding (str | None, optional): Encoding of the document. Defaults to
                parameters.xml_encoding.

        Raises:
            LookupError: If encoding is unknown.
        """
        encoding = self.parameters.xml_encoding if encoding is None else encoding
        codecs.lookup(encoding)

        document = self.dumps(comment, encoding)
        if is_binary(stream):
            stream.write(document.encode(encoding, "xmlcharrefreplace"))
        else:
            stream.write(document)
        flush(stream)

    def dumps(self, comment: str | None = None, encoding: str | None = None) -> str:
        """The XML document of all entries in the storage.

        Args:
            comment (str | None, optional): Content of the <comment> element.
                Defaults to None.
            encoding (str | None, optional): Encoding named in the XML declaration.
                Defaults to parameters.xml_encoding.

        Returns:
            str: The document.
        """
        encoding = self.parameters.xml_encoding if encoding is None else encoding
        lines = [
            f'<?xml version="1.0" encoding={quoteattr(encoding)} standalone="no"?>',
            XML_DOCTYPE,
            f"<{XML_ROOT_TAG}>",
        ]
        if comment is not None:
            lines.append(
                f"<{XML_COMMENT_TAG}>{escape(comment, _TEXT_ENTITIES)}</{XML_COMMENT_TAG}>"
            )
        for key in self.storage.keys():
            if (value := self.storage.get(key)) is None:
                continue
            lines.append(
                f"<{XML_ENTRY_TAG} {XML_KEY_ATTRIBUTE}={quoteattr(key)}>"
                f"{escape(value, _TEXT_ENTITIES)}</{XML_ENTRY_TAG}>"
            )
        lines.append(f"</{XML_ROOT_TAG}>")
        return "\n".join(lines) + "\n"
