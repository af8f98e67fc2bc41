"""Python toolchain manifest."""

from coretest.toolchains.manifest import ToolchainManifest
from coretest.toolchains.python.toolchain import PythonToolchain

python_manifest = ToolchainManifest(
    description="Load .py test modules with importlib",
    toolchain_factory=PythonToolchain,
)
