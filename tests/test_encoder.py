import logging
from typing import Any

import pytest
from resurrect import (
	OMIT,
	UNDEFINED,
	AtomRegistry,
	Markers,
	TypeRegistry,
	UnserializableValueError,
)
from resurrect.encoder import Encoder


class Node:
	def __init__(self, value: int) -> None:
		self.value = value


def make_encoder(**kwargs: Any) -> Encoder:
	return Encoder(Markers(), AtomRegistry(), **kwargs)


def test_identifiers_follow_preorder_discovery():
	data = {"a": {"b": {}}, "c": {}}

	table = make_encoder().encode(data)

	assert table == [
		{"a": {"#": 1}, "c": {"#": 3}},
		{"b": {"#": 2}},
		{},
		{},
	]


def test_arrays_are_visited_in_index_order():
	first: dict[str, Any] = {}
	second: dict[str, Any] = {}

	table = make_encoder().encode([second, first, second])

	assert table == [[{"#": 1}, {"#": 2}, {"#": 1}], {}, {}]


def test_atom_root_has_no_table():
	encoder = make_encoder()

	assert encoder.encode(3) == 3
	assert encoder.encode(UNDEFINED) == {"#": -1}
	assert encoder.table == []


def test_entries_are_one_level_deep():
	data = {"outer": {"inner": {"leaf": [1, [2, [3]]]}}}

	table = make_encoder().encode(data)

	assert isinstance(table, list)
	for entry in table:
		values = entry.values() if isinstance(entry, dict) else entry
		for value in values:
			assert not isinstance(value, list)
			if isinstance(value, dict):
				assert set(value) == {"#"}


def test_type_name_recorded_first_in_entry():
	registry = TypeRegistry([Node])

	table = make_encoder(resolver=registry).encode(Node(7))

	assert table == [{"#": "Node", "value": 7}]
	assert next(iter(table[0])) == "#"


def test_no_type_name_without_resolver():
	assert make_encoder().encode(Node(7)) == [{"value": 7}]


def test_replacer_called_in_traversal_order():
	calls: list[str] = []

	def replacer(key: str, value: Any) -> Any:
		calls.append(key)
		return value

	make_encoder(replacer=replacer).encode({"a": {"b": [{"c": 1}]}, "d": 2})

	assert calls == ["a", "b", "c", "d"]


def test_replacer_not_called_for_array_items():
	calls: list[Any] = []

	def replacer(key: str, value: Any) -> Any:
		calls.append(key)
		return value

	make_encoder(replacer=replacer).encode([1, 2, [3]])

	assert calls == []


def test_replacer_skips_reserved_keys():
	seen: list[str] = []

	def replacer(key: str, value: Any) -> Any:
		seen.append(key)
		return OMIT

	table = make_encoder(replacer=replacer).encode({"#meta": 1, "x": 2})

	assert seen == ["x"]
	assert table == [{"#meta": 1}]


def test_replacer_result_is_encoded():
	shared = {"s": 1}

	def replacer(key: str, value: Any) -> Any:
		return shared if key == "swap" else value

	table = make_encoder(replacer=replacer).encode({"swap": 0, "keep": shared})

	assert table == [{"swap": {"#": 1}, "keep": {"#": 1}}, {"s": 1}]


def test_reserved_key_collision_logs_warning(caplog: pytest.LogCaptureFixture):
	with caplog.at_level(logging.WARNING, logger="resurrect.encoder"):
		make_encoder().encode({"#": 1, "#x": 2})

	warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
	assert len(warnings) == 1
	assert "reserved marker prefix" in warnings[0].getMessage()


def test_non_string_keys_are_stringified():
	assert make_encoder().encode({1: "a", None: "b"}) == [{"1": "a", "None": "b"}]


def test_clear_drops_scratch_state():
	encoder = make_encoder()
	encoder.encode([{}, {}])

	encoder.clear()

	assert encoder.table == []


def test_stringified_key_collision_rejected():
	with pytest.raises(UnserializableValueError):
		make_encoder().encode({1: "int", "1": "str"})
