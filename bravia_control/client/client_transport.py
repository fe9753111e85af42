# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA client abstract transport interface.

Provides a low-level abstract interface for submitting IRCC codes and
Scalar Web API requests to a TV and receiving decoded responses. Does not
provide any higher-level abstractions such as named commands, version
negotiation or result interpretation.

Transports do not raise for device or network failures. Every request
returns a tagged Result: Ok(value) on success, or Err(error) where error is
a classified BraviaError (TransportError, HttpStatusError, ApplicationError
or MalformedResponseError). Transports never retry.

This abstraction allows for the implementation of proxies, emulators, and
test doubles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *
from ..protocol import ScalarRequest, ScalarResponse, Result

class BraviaClientTransport(ABC):
    @abstractmethod
    async def send_ircc(self, code: str) -> Result[str]:
        """Submits one literal IRCC code. On success, returns Ok(raw response body).

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    async def call(self, request: ScalarRequest) -> Result[ScalarResponse]:
        """Performs one Scalar Web API call. On success, returns Ok(decoded response).

        A response carrying an "error" pair is returned as Err(ApplicationError).

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    # @abstractmethod
    async def aclose(self) -> None:
        """Releases any resources held by the transport.

        Has no effect if the transport is already closed.

        May be overridden by subclasses. The default implementation does nothing.
        """
        pass

    async def __aenter__(self) -> BraviaClientTransport:
        """Enters a context that will close the transport on exit."""
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        """Exits the context and closes the transport."""
        await self.aclose()
