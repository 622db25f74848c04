import pytest
from resurrect import Resurrect, ResurrectOptions


def test_defaults():
	options = ResurrectOptions.from_env({})

	assert options == ResurrectOptions(prefix="#", cleanup=False, revive=True)


def test_reads_environment():
	options = ResurrectOptions.from_env(
		{
			"RESURRECT_PREFIX": "__#",
			"RESURRECT_CLEANUP": "yes",
			"RESURRECT_REVIVE": "0",
		}
	)

	assert options.prefix == "__#"
	assert options.cleanup is True
	assert options.revive is False


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("RESURRECT_PREFIX", "$")
	monkeypatch.delenv("RESURRECT_REVIVE", raising=False)

	assert ResurrectOptions.from_env().prefix == "$"
	assert ResurrectOptions.from_env().revive is True


def test_rejects_bad_flags():
	with pytest.raises(ValueError):
		ResurrectOptions.from_env({"RESURRECT_CLEANUP": "maybe"})


def test_codec_from_options():
	codec = Resurrect.from_options(ResurrectOptions(prefix="@", revive=False))

	assert codec.prefix == "@"
	assert codec.revive is False
	assert codec.stringify([[]]) == '[[{"@": 1}], []]'


def test_empty_prefix_rejected():
	with pytest.raises(ValueError):
		Resurrect(prefix="")
