"""Allow running as ``python -m dejunk``."""

from dejunk.cli import app

app(prog_name="dejunk")
