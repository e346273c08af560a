"""Module entry point for `python -m lsm.cli`."""
from __future__ import annotations

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from lsm.cli import cli

    cli()
