"""
Command-line interface for resurrect payloads.
Inspect the reference table of a payload or decode it for display.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import typer
from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table

from resurrect.cli.helpers import load_namespace, read_payload, summarize_table
from resurrect.codec import Resurrect
from resurrect.config import ResurrectOptions
from resurrect.errors import ResurrectError
from resurrect.markers import Markers
from resurrect.resolver import Resolver

cli = typer.Typer(
	name="resurrect",
	help="Inspect and decode identity-preserving JSON payloads",
	no_args_is_help=True,
)


def _fail(console: Console, exc: BaseException) -> typer.Exit:
	console.print(f"❌ {exc}", style="red", markup=False)
	return typer.Exit(1)


@cli.command("inspect")
def inspect_payload(
	source: str = typer.Argument(..., help="Payload file, or '-' for stdin"),
	prefix: str | None = typer.Option(
		None, "--prefix", help="Marker prefix (default: $RESURRECT_PREFIX or '#')"
	),
):
	"""Print the reference table of a payload."""
	console = Console()
	options = ResurrectOptions.from_env()
	markers = Markers(prefix or options.prefix)
	try:
		summaries = summarize_table(read_payload(source), markers)
	except (OSError, ResurrectError) as exc:
		raise _fail(console, exc) from None

	if summaries is None:
		console.print("Payload is a single value (no reference table)")
		return

	table = Table(title=f"{len(summaries)} table entries")
	table.add_column("id", justify="right")
	table.add_column("kind")
	table.add_column("type")
	table.add_column("fields", justify="right")
	table.add_column("refs")
	table.add_column("builders")
	for entry in summaries:
		table.add_row(
			str(entry.ident),
			entry.kind,
			entry.type_name or "[dim]-[/dim]",
			str(entry.size),
			", ".join(str(ref) for ref in entry.refs),
			", ".join(entry.builders),
		)
	console.print(table)


@cli.command("decode")
def decode_payload(
	source: str = typer.Argument(..., help="Payload file, or '-' for stdin"),
	revive: bool = typer.Option(
		False, "--revive/--no-revive", help="Restore classes from type names"
	),
	types: str | None = typer.Option(
		None, "--types", help="Module whose classes resolve type names"
	),
	prefix: str | None = typer.Option(
		None, "--prefix", help="Marker prefix (default: $RESURRECT_PREFIX or '#')"
	),
):
	"""Decode a payload and pretty-print the result."""
	console = Console()
	options = ResurrectOptions.from_env()
	try:
		resolver: Resolver | None = load_namespace(types) if types else None
		codec = Resurrect(
			prefix=prefix or options.prefix,
			cleanup=options.cleanup,
			revive=revive,
			resolver=resolver,
		)
		value = codec.resurrect(read_payload(source))
	except (OSError, ValueError, ResurrectError) as exc:
		raise _fail(console, exc) from None
	console.print(Pretty(value))


def main():
	"""Main CLI entry point."""
	try:
		cli()
	except Exception:
		console = Console()
		console.print_exception()
		raise typer.Exit(1) from None


if __name__ == "__main__":
	main()
