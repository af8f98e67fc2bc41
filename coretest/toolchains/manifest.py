"""Toolchain manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from coretest.toolchains.base import Toolchain


@dataclass(frozen=True, kw_only=True)
class ToolchainManifest:
    """Manifest describing a toolchain plugin.

    The manifest holds a factory so that toolchains are only constructed once
    selected by their key.
    """

    description: str
    toolchain_factory: Callable[[], Toolchain[Any]]
