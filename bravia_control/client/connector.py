# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA client abstract transport connector interface.

Provides a low-level abstract interface for objects that can create
transports to a BRAVIA TV. This abstraction allows for the implementation
of proxies and alternate transports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *
from .client_transport import BraviaClientTransport

class BraviaConnector(ABC):
    """Abstract base class for BRAVIA client transport connectors."""

    @abstractmethod
    async def connect(self) -> BraviaClientTransport:
        """Create a client transport for the TV associated with this
           connector, resolving its host if necessary.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()
