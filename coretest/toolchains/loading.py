"""Resolve the toolchain that compiles and invokes test modules.

Toolchains register a ``ToolchainManifest`` under the ``coretest.toolchains``
entry-point group; the built-in ``python`` toolchain is registered by this
package itself.
"""

from importlib.metadata import entry_points

from coretest.toolchains.manifest import ToolchainManifest

ENTRY_POINT_GROUP = "coretest.toolchains"


class ToolchainNotFoundError(Exception):
    """Raised when no installed toolchain matches the configured key."""


def available_toolchains() -> list[str]:
    """Keys of all installed toolchains, sorted."""
    return sorted(entry.name for entry in entry_points(group=ENTRY_POINT_GROUP))


def load_toolchain_manifest(key: str) -> ToolchainManifest:
    """Load the manifest of the toolchain selected by ``--toolchain``/config.

    Raises:
        ToolchainNotFoundError: If no installed toolchain is registered as ``key``

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise ToolchainNotFoundError(
            f"Toolchain '{key}' not found. "
            f"Available toolchains: {available_toolchains()}"
        )

    manifest: ToolchainManifest = next(iter(matches)).load()
    return manifest
