"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands. Keep this file minimal to avoid circular
imports and duplication.
"""
from lsm.cli.helpers import cli  # root group
from lsm.cli import match_cmds  # noqa: F401
from lsm.cli import store_cmds  # noqa: F401

__all__ = ["cli"]
