"""Point d'entrée ``python -m bytefmt``."""

from bytefmt.cli import cli

cli(prog_name="bytefmt")
