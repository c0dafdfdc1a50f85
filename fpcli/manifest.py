"""Information about the build of this program."""

from __future__ import annotations

import os
import platform
from dataclasses import asdict, dataclass

from fpcli.output import GenericKeyValue

_UNKNOWN = "unknown"


@dataclass(frozen=True)
class Manifest:
    """Build and runtime details of the running program."""

    build_timestamp: str
    build_version: str
    commit_date: str
    commit_sha: str
    commit_branch: str
    python_version: str
    python_implementation: str
    python_compiler: str
    platform: str

    @classmethod
    def from_env(cls) -> Manifest:
        """Read the build details from the environment and the interpreter."""
        def env(name: str) -> str:
            return os.environ.get(name) or _UNKNOWN

        return cls(
            build_timestamp=env("FP_BUILD_TIMESTAMP"),
            build_version=env("FP_BUILD_VERSION"),
            commit_date=env("FP_COMMIT_DATE"),
            commit_sha=env("FP_COMMIT_SHA"),
            commit_branch=env("FP_COMMIT_BRANCH"),
            python_version=platform.python_version(),
            python_implementation=platform.python_implementation(),
            python_compiler=platform.python_compiler(),
            platform=platform.platform(),
        )

    def key_values(self) -> list[GenericKeyValue]:
        """The manifest as labelled rows for display."""
        labels = (
            "Build Timestamp:",
            "Build Version:",
            "Commit Date:",
            "Commit SHA:",
            "Commit Branch:",
            "Python Version:",
            "Python Implementation:",
            "Python Compiler:",
            "Platform:",
        )
        return [GenericKeyValue(label, value) for label, value in zip(labels, asdict(self).values())]