"""Mapping between an object's class and a stable type name.

The encoder asks a resolver for the name of every non-plain object it visits
and records that name in the object's table entry; the decoder asks for the
class behind each recorded name to give revived objects their behavior back.

Two resolvers ship with the package:

- ``TypeRegistry`` - an explicit registry that classes opt into, either by
  ``registry.register(cls)`` or with ``@registry.register`` as a decorator. The
  module-level ``default_registry`` (and the ``register`` shortcut) is what
  codecs use when no resolver is given.
- ``NamespaceResolver`` - looks classes up by qualified name inside a module or
  mapping, for code that would rather not register every class.
"""

from __future__ import annotations

import types
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, overload, override, runtime_checkable

from resurrect.errors import (
	ConstructorMismatchError,
	UnknownTypeError,
	UnresolvableTypeError,
)

T = TypeVar("T", bound=type)

PLAIN_TYPES: frozenset[type] = frozenset({dict, list, tuple})


@runtime_checkable
class Resolver(Protocol):
	def get_type_name(self, obj: Any) -> str | None:
		"""Name of ``obj``'s type, or None for plain dicts and lists."""
		...

	def get_behavior(self, name: str) -> type:
		"""Class registered under ``name``."""
		...


@dataclass(frozen=True, slots=True)
class Plain:
	pass


@dataclass(frozen=True, slots=True)
class Named:
	name: str
	descriptor: type


TypeTag = Plain | Named

PLAIN = Plain()


def type_tag(resolver: Resolver, obj: Any) -> TypeTag:
	"""Classify ``obj`` through ``resolver``, checking that the name round-trips."""
	actual = type(obj)
	if actual in PLAIN_TYPES:
		return PLAIN
	name = resolver.get_type_name(obj)
	if name is None:
		return PLAIN
	descriptor = resolver.get_behavior(name)
	if descriptor is not actual:
		raise ConstructorMismatchError(name, descriptor, actual)
	return Named(name, descriptor)


def _is_anonymous(cls: type) -> bool:
	return not cls.__name__ or "<" in cls.__qualname__


class TypeRegistry:
	"""Explicit name <-> class registry."""

	__slots__: tuple[str, ...] = ("_by_name", "_by_type")

	_by_name: dict[str, type]
	_by_type: dict[type, str]

	def __init__(
		self, classes: Iterable[type] | Mapping[str, type] | None = None
	) -> None:
		self._by_name = {}
		self._by_type = {}
		if classes is None:
			return
		if isinstance(classes, Mapping):
			for name, cls in classes.items():
				self.register(cls, name=name)
		else:
			for cls in classes:
				self.register(cls)

	@overload
	def register(self, cls: T, *, name: str | None = None) -> T: ...
	@overload
	def register(
		self, cls: None = None, *, name: str | None = None
	) -> Callable[[T], T]: ...
	def register(
		self, cls: T | None = None, *, name: str | None = None
	) -> T | Callable[[T], T]:
		"""Register ``cls`` under ``name`` (its qualified name by default).

		Usable directly or as a decorator, with or without arguments.
		"""
		if cls is None:

			def decorator(target: T) -> T:
				return self.register(target, name=name)

			return decorator

		if cls in PLAIN_TYPES:
			raise ValueError(f"{cls.__name__} is a plain type and needs no name")
		if name is None:
			if _is_anonymous(cls):
				raise UnresolvableTypeError(
					f"Cannot derive a name for {cls.__qualname__}; pass name="
				)
			name = cls.__qualname__
		existing = self._by_name.get(name)
		if existing is not None and existing is not cls:
			raise ValueError(
				f"Type name {name!r} is already registered to {existing.__qualname__}"
			)
		self._by_name[name] = cls
		self._by_type[cls] = name
		return cls

	def unregister(self, cls: type) -> None:
		name = self._by_type.pop(cls, None)
		if name is not None:
			del self._by_name[name]

	def __contains__(self, item: object) -> bool:
		return item in self._by_type or item in self._by_name

	def __len__(self) -> int:
		return len(self._by_name)

	def get_type_name(self, obj: Any) -> str | None:
		cls = type(obj)
		if cls in PLAIN_TYPES:
			return None
		name = self._by_type.get(cls)
		if name is None:
			raise UnresolvableTypeError(
				f"Can't serialize objects of unregistered type {cls.__qualname__}"
			)
		return name

	def get_behavior(self, name: str) -> type:
		try:
			return self._by_name[name]
		except KeyError:
			raise UnknownTypeError(f"Unknown constructor: {name}") from None

	@override
	def __repr__(self) -> str:
		return f"TypeRegistry({sorted(self._by_name)!r})"


class NamespaceResolver:
	"""Resolve names as dotted attribute paths inside ``scope``.

	``scope`` is a module or a mapping of top-level names. Nested classes are
	named by their ``__qualname__``; classes defined inside a function have no
	reachable name and cannot be encoded with this resolver.
	"""

	__slots__: tuple[str, ...] = ("scope",)

	scope: types.ModuleType | Mapping[str, Any]

	def __init__(self, scope: types.ModuleType | Mapping[str, Any]) -> None:
		self.scope = scope

	def get_type_name(self, obj: Any) -> str | None:
		cls = type(obj)
		if cls in PLAIN_TYPES:
			return None
		if _is_anonymous(cls):
			raise UnresolvableTypeError(
				"Can't serialize objects with anonymous constructors "
				+ f"({cls.__qualname__})"
			)
		return cls.__qualname__

	def get_behavior(self, name: str) -> type:
		head, *rest = name.split(".")
		if isinstance(self.scope, types.ModuleType):
			target = getattr(self.scope, head, None)
		else:
			target = self.scope.get(head)
		for part in rest:
			if target is None:
				break
			target = getattr(target, part, None)
		if not isinstance(target, type):
			raise UnknownTypeError(f"Unknown constructor: {name}")
		return target

	@override
	def __repr__(self) -> str:
		label = getattr(self.scope, "__name__", type(self.scope).__name__)
		return f"NamespaceResolver({label})"


default_registry = TypeRegistry()
register = default_registry.register


__all__ = [
	"PLAIN",
	"Named",
	"NamespaceResolver",
	"Plain",
	"Resolver",
	"TypeRegistry",
	"TypeTag",
	"default_registry",
	"register",
	"type_tag",
]
