from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ApiStubError(Exception):
    """Base class for every error raised by apistub."""


class MissingRouteMetadata(ApiStubError):
    def __init__(self, class_name: str) -> None:
        super().__init__(f"{class_name} has no base route metadata; cannot resolve endpoint paths")
        self.class_name = class_name


class CyclicTypeShape(ApiStubError):
    """A structured type contains itself, directly or through other types."""

    def __init__(self, path: Sequence[str]) -> None:
        super().__init__("cyclic type shape: " + " -> ".join(path))
        self.path = tuple(path)


class OutputIOFailure(ApiStubError):
    def __init__(self, class_name: str, path: Path) -> None:
        super().__init__(f"failed to write output for {class_name}: {path}")
        self.class_name = class_name
        self.path = path


class ManifestError(ApiStubError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"invalid manifest {path}: {reason}")
        self.path = path
        self.reason = reason
