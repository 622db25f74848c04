"""Identity-preserving JSON serialization for Python object graphs.

Shared references and cycles survive a round trip, objects of registered
classes come back as instances of those classes, and values JSON cannot hold
(NaN, infinities, big integers, datetimes, regular expressions, XML elements,
``UNDEFINED``) are encoded as typed builder records.
"""

from resurrect.atoms import AtomKind, AtomRegistry
from resurrect.codec import Replacer, Resurrect, decode, encode
from resurrect.config import ResurrectOptions
from resurrect.errors import (
	ConstructorMismatchError,
	MalformedPayloadError,
	ResurrectError,
	UnknownEncodingError,
	UnknownTypeError,
	UnresolvableTypeError,
	UnserializableValueError,
)
from resurrect.markers import DEFAULT_PREFIX, Markers
from resurrect.nodes import ElementTreeNodeCodec, NodeCodec
from resurrect.resolver import (
	PLAIN,
	Named,
	NamespaceResolver,
	Plain,
	Resolver,
	TypeRegistry,
	TypeTag,
	default_registry,
	register,
	type_tag,
)
from resurrect.values import ABSENT, OMIT, UNDEFINED, OmitType, UndefinedType
from resurrect.version import __version__

__all__ = [
	"ABSENT",
	"DEFAULT_PREFIX",
	"OMIT",
	"PLAIN",
	"UNDEFINED",
	"AtomKind",
	"AtomRegistry",
	"ConstructorMismatchError",
	"ElementTreeNodeCodec",
	"MalformedPayloadError",
	"Markers",
	"Named",
	"NamespaceResolver",
	"NodeCodec",
	"OmitType",
	"Plain",
	"Replacer",
	"Resolver",
	"Resurrect",
	"ResurrectError",
	"ResurrectOptions",
	"TypeRegistry",
	"TypeTag",
	"UndefinedType",
	"UnknownEncodingError",
	"UnknownTypeError",
	"UnresolvableTypeError",
	"UnserializableValueError",
	"__version__",
	"decode",
	"default_registry",
	"encode",
	"register",
	"type_tag",
]
