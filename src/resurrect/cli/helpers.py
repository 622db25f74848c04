from __future__ import annotations

import importlib
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from resurrect.errors import MalformedPayloadError, UnknownEncodingError
from resurrect.markers import Markers
from resurrect.resolver import NamespaceResolver


def read_payload(source: str) -> str:
	"""Read payload text from a path, or from stdin when ``source`` is ``-``."""
	if source == "-":
		return sys.stdin.read()
	return Path(source).read_text(encoding="utf-8")


def load_namespace(target: str) -> NamespaceResolver:
	"""Build a resolver over an importable module, e.g. ``myapp.models``."""
	try:
		module = importlib.import_module(target)
	except ImportError as exc:
		raise ValueError(f"Cannot import types module {target!r}: {exc}") from exc
	return NamespaceResolver(module)


@dataclass
class EntrySummary:
	ident: int
	kind: str
	type_name: str | None
	size: int
	refs: list[int] = field(default_factory=list)
	builders: list[str] = field(default_factory=list)


def summarize_table(text: str, markers: Markers) -> list[EntrySummary] | None:
	"""Describe each table entry; None when the payload is a single value."""
	try:
		data = json.loads(text)
	except json.JSONDecodeError as exc:
		raise MalformedPayloadError(f"Invalid payload: {exc}") from exc
	if not isinstance(data, list):
		return None

	summaries: list[EntrySummary] = []
	for ident, entry in enumerate(data):
		if isinstance(entry, dict):
			type_name = entry.get(markers.tag)
			children: list[Any] = [v for k, v in entry.items() if k != markers.tag]
			if not isinstance(type_name, str):
				type_name = None
			summary = EntrySummary(ident, "object", type_name, len(children))
		elif isinstance(entry, list):
			children = entry
			summary = EntrySummary(ident, "array", None, len(children))
		else:
			raise UnknownEncodingError(
				f"Malformed table entry at index {ident}: {entry!r}"
			)
		for child in children:
			if markers.is_reference(child):
				summary.refs.append(child[markers.tag])
			elif markers.is_builder(child):
				summary.builders.append(child[markers.build])
		summaries.append(summary)
	return summaries
