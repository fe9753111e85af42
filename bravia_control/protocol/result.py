# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Tagged result of a single transport request.

Transports never raise for device or network failures; they return either
Ok(value) or Err(error), and callers dispatch on error.kind.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import BraviaError, ErrorKind

T = TypeVar('T')

class Ok(Generic[T]):
    """A successful transport result."""
    value: T

    def __init__(self, value: T):
        self.value = value

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def __str__(self) -> str:
        return f"Ok({self.value!r})"

    def __repr__(self) -> str:
        return str(self)

class Err:
    """A failed transport result, carrying the classified error."""
    error: BraviaError

    def __init__(self, error: BraviaError):
        self.error = error

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self) -> NoReturn:
        """Raises the carried error."""
        raise self.error

    def __str__(self) -> str:
        return f"Err({self.kind.value}: {self.error})"

    def __repr__(self) -> str:
        return str(self)

Result = Union[Ok[T], Err]
