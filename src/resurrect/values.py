"""Value model shared by the encoder and decoder.

``UNDEFINED`` stands in for JavaScript's ``undefined``: a value that is
present but carries nothing, distinct from ``None``. ``OMIT`` is returned by a
replacer to drop a field from the output.
"""

from __future__ import annotations

from typing import Any, Final, final

Primitive = int | float | str | bool | None
PlainJSON = Primitive | list["PlainJSON"] | dict[str, "PlainJSON"]

# Identifier reserved for references that decode to UNDEFINED.
ABSENT: Final = -1

# Largest integer a JSON consumer using doubles can hold without drift.
MAX_SAFE_INTEGER: Final = 2**53 - 1


@final
class UndefinedType:
	__slots__: tuple[str, ...] = ()
	_instance: "UndefinedType | None" = None

	def __new__(cls) -> "UndefinedType":
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance

	def __bool__(self) -> bool:
		return False

	def __repr__(self) -> str:
		return "UNDEFINED"

	def __reduce__(self) -> str:
		return "UNDEFINED"


@final
class OmitType:
	__slots__: tuple[str, ...] = ()
	_instance: "OmitType | None" = None

	def __new__(cls) -> "OmitType":
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance

	def __repr__(self) -> str:
		return "OMIT"

	def __reduce__(self) -> str:
		return "OMIT"


UNDEFINED: Final = UndefinedType()
OMIT: Final = OmitType()


def is_plain_atom(value: Any) -> bool:
	"""True for values JSON carries natively and that need no record."""
	if value is None or isinstance(value, (bool, str)):
		return True
	if isinstance(value, int):
		return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER
	if isinstance(value, float):
		return value == value and value not in (float("inf"), float("-inf"))
	return False


__all__ = [
	"ABSENT",
	"MAX_SAFE_INTEGER",
	"OMIT",
	"UNDEFINED",
	"OmitType",
	"PlainJSON",
	"Primitive",
	"UndefinedType",
	"is_plain_atom",
]
