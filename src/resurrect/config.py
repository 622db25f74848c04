from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from resurrect.markers import DEFAULT_PREFIX

ENV_RESURRECT_PREFIX = "RESURRECT_PREFIX"
ENV_RESURRECT_CLEANUP = "RESURRECT_CLEANUP"
ENV_RESURRECT_REVIVE = "RESURRECT_REVIVE"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
	raw = environ.get(name)
	if raw is None:
		return default
	value = raw.strip().lower()
	if value in _TRUE:
		return True
	if value in _FALSE:
		return False
	raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True, slots=True)
class ResurrectOptions:
	"""Codec settings that must agree between encode and decode.

	- prefix: marker key prefix; caller data must not use keys starting with it
	- cleanup: drop per-call scratch state eagerly, even when a call fails
	- revive: record type names on encode and restore classes on decode
	"""

	prefix: str = DEFAULT_PREFIX
	cleanup: bool = False
	revive: bool = True

	@classmethod
	def from_env(
		cls, environ: Mapping[str, str] | None = None
	) -> "ResurrectOptions":
		env = os.environ if environ is None else environ
		return cls(
			prefix=env.get(ENV_RESURRECT_PREFIX) or DEFAULT_PREFIX,
			cleanup=_env_flag(env, ENV_RESURRECT_CLEANUP, False),
			revive=_env_flag(env, ENV_RESURRECT_REVIVE, True),
		)


__all__ = [
	"ENV_RESURRECT_CLEANUP",
	"ENV_RESURRECT_PREFIX",
	"ENV_RESURRECT_REVIVE",
	"ResurrectOptions",
]
