# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SsdpSearcher -- A single SSDP (UPnP discovery) search that:

  1. Sends an M-SEARCH for a single search target through async_upnp_client
  2. Collects the responses that carry a LOCATION header
  3. Delivers them through an async iterator until the searcher is closed

Usage:
    async with SsdpSearcher() as searcher:
        async for response in searcher:
            print(response.location)
"""

from __future__ import annotations

import asyncio
import time
from urllib.parse import urlsplit

from async_upnp_client.search import SsdpSearchListener
from requests.structures import CaseInsensitiveDict

from ..internal_types import *
from ..constants import IRCC_SERVICE_TYPE, SSDP_MX
from ..exceptions import DiscoveryError
from ..pkg_logging import logger

MAX_QUEUE_SIZE = 1000

class SsdpResponseInfo:
    headers: CaseInsensitiveDict[Any]
    """The response headers"""

    monotonic_time: float
    """The time.monotonic() at which the response was received."""

    def __init__(self, headers: Mapping[str, Any]) -> None:
        self.headers = CaseInsensitiveDict(headers)
        self.monotonic_time = time.monotonic()

    @property
    def location(self) -> Optional[str]:
        """The URL of the responder's UPnP device descriptor."""
        location = self.headers.get('LOCATION')
        return None if location is None or location == '' else str(location)

    @property
    def st(self) -> Optional[str]:
        return self.headers.get('ST')

    @property
    def usn(self) -> Optional[str]:
        return self.headers.get('USN')

    @property
    def host(self) -> str:
        """The responder's host, as named by its LOCATION URL."""
        location = self.location
        if location is None:
            return '<unknown>'
        try:
            hostname = urlsplit(location).hostname
        except ValueError:
            hostname = None
        return location if hostname is None else hostname

    def __str__(self) -> str:
        return f"SsdpResponseInfo(location={self.location}, st={self.st})"

    def __repr__(self) -> str:
        return str(self)

class SsdpSearcher(
        AsyncContextManager['SsdpSearcher'],
        AsyncIterable[SsdpResponseInfo]
      ):
    """An object that manages a single SSDP search and all of the received responses
       within an AsyncContextManager/AsyncIterable interface.

       The iterator does not end on its own; it ends when the searcher is closed.
       Callers are expected to enforce their own deadline.
    """

    search_target: str
    mx: int

    queue: asyncio.Queue[Optional[SsdpResponseInfo]]
    _listener: Optional[SsdpSearchListener] = None
    eos: bool = False

    def __init__(
            self,
            search_target: str=IRCC_SERVICE_TYPE,
            mx: int=SSDP_MX,
            max_queue_size: int=MAX_QUEUE_SIZE,
          ):
        self.search_target = search_target
        self.mx = mx
        self.queue = asyncio.Queue(max_queue_size)

    async def __aenter__(self) -> SsdpSearcher:
        listener = SsdpSearchListener(
            callback=self.on_response,
            timeout=self.mx,
            search_target=self.search_target,
          )
        try:
            await listener.async_start()
        except OSError as e:
            raise DiscoveryError(f"Unable to start the SSDP search: {e}") from e
        self._listener = listener
        try:
            logger.debug(f"{self}: Sending M-SEARCH")
            listener.async_search()
        except BaseException:
            await self.aclose()
            raise
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType]
          ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        listener = self._listener
        self._listener = None
        if listener is not None:
            listener.async_stop()
        self.on_end_of_stream()

    def on_response(self, headers: Mapping[str, Any]) -> None:
        if self.eos:
            return
        response = SsdpResponseInfo(headers)
        if response.location is None:
            logger.debug(f"{self}: Ignoring SSDP response without LOCATION: {response}")
            return
        try:
            self.queue.put_nowait(response)
        except asyncio.QueueFull:
            logger.warning(f"Queue full, dropping SSDP response from {response.host}")

    def on_end_of_stream(self) -> None:
        if not self.eos:
            self.eos = True
            try:
                # wake up any waiting tasks
                self.queue.put_nowait(None)
            except asyncio.QueueFull:
                pass

    async def iter_responses(self) -> AsyncIterator[SsdpResponseInfo]:
        while True:
            response = await self.queue.get()
            if response is None:
                break
            yield response

    def __aiter__(self) -> AsyncIterator[SsdpResponseInfo]:
        return self.iter_responses()

    def __str__(self) -> str:
        return f"SsdpSearcher(st={self.search_target})"

    def __repr__(self) -> str:
        return str(self)
