"""Capture and replay of opaque host nodes.

A host node is an object whose state cannot be walked as fields but has a
markup form of its own. The default codec handles ``xml.etree`` elements; a
different host (an HTML DOM, a VDOM tree) plugs in its own ``NodeCodec``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Protocol, override, runtime_checkable


@runtime_checkable
class NodeCodec(Protocol):
	def is_node(self, value: Any) -> bool: ...

	def serialize(self, node: Any) -> str: ...

	def parse(self, markup: str) -> Any: ...


class ElementTreeNodeCodec:
	__slots__: tuple[str, ...] = ()

	def is_node(self, value: Any) -> bool:
		return isinstance(value, ET.Element)

	def serialize(self, node: ET.Element) -> str:
		return ET.tostring(node, encoding="unicode")

	def parse(self, markup: str) -> ET.Element:
		return ET.fromstring(markup)

	@override
	def __repr__(self) -> str:
		return "ElementTreeNodeCodec()"


__all__ = ["ElementTreeNodeCodec", "NodeCodec"]
