"""
Resurrect package version indicator.

Exposes `__version__` which matches the distribution version when installed.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

__all__ = ["__version__"]


def _resolve_version() -> str:
	try:
		return _pkg_version("resurrect")
	except PackageNotFoundError:
		return "0.0.0"


__version__: str = _resolve_version()
