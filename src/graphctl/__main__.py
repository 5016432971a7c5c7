"""Allow ``python -m graphctl``."""

from graphctl.cli import cli

cli()
