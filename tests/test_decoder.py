import datetime as dt
import json
from typing import Any

import pytest
from resurrect import (
	UNDEFINED,
	AtomRegistry,
	MalformedPayloadError,
	Markers,
	Resurrect,
	TypeRegistry,
	UnknownEncodingError,
	UnknownTypeError,
)
from resurrect.decoder import Decoder


class Widget:
	def __init__(self) -> None:
		raise AssertionError("revival must not call __init__")

	def label(self) -> str:
		return f"widget {self.size}"  # type: ignore[attr-defined]


class Fixed:
	__slots__ = ("a",)


def make_decoder(resolver: Any = None) -> Decoder:
	return Decoder(Markers(), AtomRegistry(), resolver=resolver)


def test_plain_atoms_pass_through():
	decoder = make_decoder()

	assert decoder.decode(3) == 3
	assert decoder.decode("x") == "x"
	assert decoder.decode(None) is None


def test_single_records_at_top_level():
	decoder = make_decoder()

	assert decoder.decode({"#": -1}) is UNDEFINED
	assert decoder.decode({"#.": "BigInt", "#v": ["123456789012345678901"]}) == (
		123456789012345678901
	)


def test_top_level_reference_without_table_is_dangling():
	with pytest.raises(UnknownEncodingError):
		make_decoder().decode({"#": 0})


def test_resolution_is_one_level_per_entry():
	table = [{"items": {"#": 1}}, [{"#": 2}, {"#": 2}, 5], {"k": "v"}]

	out = make_decoder().decode(table)

	assert out == {"items": [{"k": "v"}, {"k": "v"}, 5]}
	assert out["items"][0] is out["items"][1]


def test_revival_skips_init():
	registry = TypeRegistry([Widget])

	out = make_decoder(registry).decode([{"#": "Widget", "size": 3}])

	assert type(out) is Widget
	assert out.label() == "widget 3"
	assert "#" not in vars(out)


def test_marker_stripped_without_revival():
	out = make_decoder().decode([{"#": "Widget", "size": 3}])

	assert out == {"size": 3}


def test_unknown_type_name_fails_before_resolution():
	with pytest.raises(UnknownTypeError):
		make_decoder(TypeRegistry()).decode([{"a": {"#": 1}}, {"#": "Missing"}])


def test_unknown_field_on_slotted_class():
	registry = TypeRegistry([Fixed])

	with pytest.raises(UnknownEncodingError):
		make_decoder(registry).decode([{"#": "Fixed", "a": 1, "b": 2}])


@pytest.mark.parametrize(
	"payload",
	[
		[],
		[{"a": {"#": 5}}],
		[{"a": {"#": "1"}}],
		[{"a": {"#": True}}],
		[{"a": {"other": 1}}],
		[{"a": [1, 2]}],
		[3],
		[{"a": {"#.": "Nope", "#v": []}}],
		[{"a": {"#.": 7, "#v": []}}],
		[{"#": 7, "a": 1}],
	],
)
def test_malformed_tables_rejected(payload: Any):
	resolver = TypeRegistry()
	with pytest.raises(UnknownEncodingError):
		make_decoder(resolver).decode(payload)


def test_invalid_json_is_malformed_payload():
	codec = Resurrect()

	with pytest.raises(MalformedPayloadError) as info:
		codec.resurrect("[{")
	assert isinstance(info.value, ValueError)
	assert isinstance(info.value.__cause__, json.JSONDecodeError)


def test_builder_with_bare_argument():
	out = make_decoder().decode(
		[{"when": {"#.": "Date", "#v": "2020-01-01T00:00:00.000Z"}}]
	)

	assert out["when"] == dt.datetime(2020, 1, 1, tzinfo=dt.UTC)


def test_bytes_payload_accepted():
	assert Resurrect().resurrect(b'[{"a": 1}]') == {"a": 1}
