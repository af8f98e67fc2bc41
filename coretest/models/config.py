"""Models for harness configuration loaded from coretest.yaml files."""

from collections.abc import Sequence

from pydantic import Field

from coretest.models.base import Model


class HarnessConfig(Model):
    """Configuration for a harness run."""

    timeout: float | None = Field(
        default=60.0,
        ge=0,
        description="Per-test wait limit in seconds (0 or None waits indefinitely)",
    )
    module_suffix: str = Field(
        default="_test", description="Stem suffix identifying test modules"
    )
    function_prefix: str = Field(
        default="test_", description="Name prefix identifying test functions"
    )
    exclude_dirs: Sequence[str] = Field(
        default=("__pycache__", ".git"),
        description="Directory names never descended into during discovery",
    )
    toolchain: str = Field(default="python", description="Toolchain plugin key")

    @property
    def wait_limit(self) -> float | None:
        """Timeout to apply per test, or None to wait without limit."""
        return self.timeout or None
