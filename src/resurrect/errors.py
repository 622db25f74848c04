from __future__ import annotations


class ResurrectError(Exception):
	"""Base class for every encode/decode failure."""


class UnserializableValueError(ResurrectError, TypeError):
	"""Raised when the graph contains a value with no encoding (e.g. a function)."""


class UnresolvableTypeError(ResurrectError, TypeError):
	"""Raised when the resolver cannot produce a name for an object's type."""


class UnknownTypeError(ResurrectError, LookupError):
	"""Raised when a type name has no registered behavior."""


class ConstructorMismatchError(ResurrectError, TypeError):
	"""Raised when the resolver maps a name to a different class than the object's."""

	def __init__(self, name: str, expected: type, actual: type) -> None:
		super().__init__(
			f"Constructor mismatch for {name!r}: resolver returned "
			+ f"{expected.__qualname__}, object is {actual.__qualname__}"
		)
		self.name: str = name
		self.expected: type = expected
		self.actual: type = actual


class UnknownEncodingError(ResurrectError, ValueError):
	"""Raised when a payload record matches neither a reference nor a builder."""


class MalformedPayloadError(ResurrectError, ValueError):
	"""Raised when the payload text is not valid JSON."""


__all__ = [
	"ConstructorMismatchError",
	"MalformedPayloadError",
	"ResurrectError",
	"UnknownEncodingError",
	"UnknownTypeError",
	"UnresolvableTypeError",
	"UnserializableValueError",
]
