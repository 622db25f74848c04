from resurrect.cli.cmd import cli, main

__all__ = ["cli", "main"]
