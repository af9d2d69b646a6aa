from .interface import OrderedProperties, OrderedPropertiesBuilder
from .args import Parameters
from .ordered_map import OrderedMap, Comparator, SortKey
from .properties_format import PropertiesCodec
from .xml_format import XmlPropertiesCodec
from .storage import PropertiesStorage, DictStorage, RedirectedStorage
from .sink import DateSuppressingWriter
from .utils import OrderedKeySet
from .exceptions_warnings import (
    PropertiesFormatError,
    MalformedEscapeError,
    MissingSeparatorError,
    InvalidStateError,
    PropertiesWarning,
    DuplicateKeyWarning,
    EncodingDetectionWarning,
)
