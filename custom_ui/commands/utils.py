"""Shared helpers for commands."""

import sys
from typing import NoReturn

import click

from custom_ui.errors import CLIError, exit_code_for
from custom_ui.registry import RegistryClient, RegistryLoader


def build_registry_client(ctx: click.Context) -> RegistryClient:
    """Create a registry client for the source chosen on the root group."""
    obj = ctx.obj or {}
    return RegistryClient(RegistryLoader(obj.get("registry")))


def exit_with_error(error: CLIError) -> NoReturn:
    """Exit with the code mapped to ``error``.

    The error is expected to have been reported already.
    """
    sys.exit(exit_code_for(error))
