from __future__ import annotations

from typing import Sequence


class EncodeError(Exception):
    """Base class for filter and codec failures raised by pixmatrix_encode."""


class UnknownColorFilterError(EncodeError, ValueError):
    def __init__(self, name: str, supported: Sequence[str]) -> None:
        self.name = name
        self.supported = tuple(supported)
        super().__init__(f"invalid color filter: {name!r}; supported filters: {', '.join(self.supported)}")


class FilterChainError(EncodeError):
    """A filter failed; `position` is its index in the chain and `__cause__` the original error."""

    def __init__(self, position: int, cause: BaseException) -> None:
        self.position = position
        self.cause = cause
        super().__init__(f"filter {position} failed: {cause}")


class CodecUnavailableError(EncodeError):
    pass
