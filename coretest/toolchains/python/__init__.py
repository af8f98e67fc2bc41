"""Python toolchain module."""

from coretest.toolchains.python.manifest import python_manifest
from coretest.toolchains.python.toolchain import PythonToolchain

__all__ = ["PythonToolchain", "python_manifest"]
