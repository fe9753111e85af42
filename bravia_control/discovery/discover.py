# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
One-shot, time-boxed discovery of BRAVIA TVs on the local network.

A scan multicasts an SSDP search for the IRCC service, fetches the device
descriptor of each responder, and returns the TVs found before the deadline.
"""

from __future__ import annotations

import asyncio
from asyncio import Future
from enum import Enum

import aiohttp

from ..internal_types import *
from ..constants import DEFAULT_DISCOVERY_TIMEOUT, DEFAULT_TIMEOUT, IRCC_SERVICE_TYPE
from ..exceptions import (
    BraviaError,
    DiscoveryError,
    HttpStatusError,
    TransportError,
  )
from ..pkg_logging import logger

from .ssdp import SsdpSearcher, SsdpResponseInfo
from .descriptor import DiscoveredDevice, parse_device_descriptor, DESCRIPTOR_OPERATION

class DiscoveryState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    RESOLVED = "resolved"
    FAILED = "failed"

class BraviaDiscovery:
    """A single discovery scan.

    Each instance runs at most one scan; separate instances share no state and
    may scan concurrently.
    """

    timeout_secs: float
    """Length of the scan. Responses arriving later are ignored."""

    isolate_failures: bool
    """If False, a responder whose descriptor cannot be fetched or decoded
       fails the whole scan. If True, that responder is logged and skipped."""

    request_timeout_secs: float
    searcher_factory: Callable[[], SsdpSearcher]

    state: DiscoveryState = DiscoveryState.IDLE
    devices: List[DiscoveredDevice]
    error: Optional[BaseException] = None

    _session: Optional[aiohttp.ClientSession] = None

    def __init__(
            self,
            timeout_secs: float=DEFAULT_DISCOVERY_TIMEOUT,
            isolate_failures: bool=False,
            session: Optional[aiohttp.ClientSession]=None,
            request_timeout_secs: float=DEFAULT_TIMEOUT,
            searcher_factory: Optional[Callable[[], SsdpSearcher]]=None,
          ):
        self.timeout_secs = timeout_secs
        self.isolate_failures = isolate_failures
        self.request_timeout_secs = request_timeout_secs
        self._session = session
        self.searcher_factory = (lambda: SsdpSearcher(IRCC_SERVICE_TYPE)) if searcher_factory is None else searcher_factory
        self.devices = []

    async def fetch_device(self, session: aiohttp.ClientSession, response: SsdpResponseInfo) -> Optional[DiscoveredDevice]:
        """Fetches and decodes the device descriptor of one SSDP responder.

        Returns None if the responder does not offer the IRCC service.
        """
        location = response.location
        assert location is not None
        timeout = aiohttp.ClientTimeout(total=self.request_timeout_secs)
        try:
            async with session.get(location, timeout=timeout) as http_response:
                status = http_response.status
                raw = await http_response.read()
        except asyncio.TimeoutError as e:
            raise TransportError(
                DESCRIPTOR_OPERATION,
                f"Timed out retrieving the description metadata for device {response.host}") from e
        except aiohttp.ClientError as e:
            raise TransportError(
                DESCRIPTOR_OPERATION,
                f"Error retrieving the description metadata for device {response.host}: {e}") from e
        body = raw.decode('utf-8', errors='replace')
        if status != 200:
            raise HttpStatusError(DESCRIPTOR_OPERATION, status, body)
        return parse_device_descriptor(body, location)

    async def scan(self, match: Optional[Callable[[DiscoveredDevice], bool]]=None) -> List[DiscoveredDevice]:
        """Runs the scan and returns the TVs found before the deadline.

        If match is provided, the scan ends as soon as a device for which
        match(device) is True has been found.

        Raises the first descriptor failure unless isolate_failures is True.
        """
        if self.state != DiscoveryState.IDLE:
            raise BraviaError(f"{self}: A discovery scan can only be run once")
        self.state = DiscoveryState.SCANNING
        loop = asyncio.get_running_loop()
        failed: Future[None] = loop.create_future()
        found: Future[None] = loop.create_future()
        devices: List[DiscoveredDevice] = []
        fetch_tasks: Set[asyncio.Task[None]] = set()
        seen_locations: Set[str] = set()

        session = self._session
        owns_session = session is None
        if session is None:
            session = aiohttp.ClientSession()

        def fail(e: BaseException) -> None:
            if not failed.done():
                failed.set_exception(e)

        def on_fetch_done(task: asyncio.Task[None]) -> None:
            fetch_tasks.discard(task)
            if not task.cancelled() and task.exception() is not None:
                fail(task.exception())

        async def fetch(response: SsdpResponseInfo) -> None:
            assert session is not None
            try:
                device = await self.fetch_device(session, response)
            except Exception as e:
                if isinstance(e, BraviaError):
                    error: BraviaError = e
                else:
                    error = DiscoveryError(f"Unable to decode the device descriptor at {response.location}: {e}")
                    error.__cause__ = e
                if self.isolate_failures:
                    logger.warning(f"{self}: Skipping SSDP responder {response.host}: {error}")
                    return
                fail(error)
                return
            if device is None:
                logger.debug(f"{self}: {response.host} does not offer the IRCC service")
                return
            if failed.done() or found.done():
                return
            logger.debug(f"{self}: Found {device}")
            devices.append(device)
            if match is not None and match(device):
                found.set_result(None)

        async def collect(searcher: SsdpSearcher) -> None:
            try:
                async for response in searcher:
                    location = response.location
                    if location is None or location in seen_locations:
                        continue
                    seen_locations.add(location)
                    task = asyncio.create_task(fetch(response))
                    fetch_tasks.add(task)
                    task.add_done_callback(on_fetch_done)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                error = DiscoveryError(f"SSDP search failed: {e}")
                error.__cause__ = e
                fail(error)

        try:
            try:
                async with self.searcher_factory() as searcher:
                    collector = asyncio.create_task(collect(searcher))
                    try:
                        await asyncio.wait([failed, found], timeout=self.timeout_secs, return_when=asyncio.FIRST_COMPLETED)
                    finally:
                        collector.cancel()
                        pending = [collector] + list(fetch_tasks)
                        for task in pending:
                            task.cancel()
                        await asyncio.gather(*pending, return_exceptions=True)
            finally:
                if owns_session:
                    await session.close()
        except BaseException as e:
            self.state = DiscoveryState.FAILED
            self.error = e
            raise

        if failed.done():
            self.state = DiscoveryState.FAILED
            self.error = failed.exception()
            assert self.error is not None
            raise self.error
        found.cancel()
        failed.cancel()
        self.devices = list(devices)
        self.state = DiscoveryState.RESOLVED
        logger.info(f"{self}: Found {len(self.devices)} BRAVIA device(s)")
        return list(self.devices)

    def __str__(self) -> str:
        return f"BraviaDiscovery(timeout_secs={self.timeout_secs}, state={self.state.value})"

    def __repr__(self) -> str:
        return str(self)

async def discover(
        timeout_secs: float=DEFAULT_DISCOVERY_TIMEOUT,
        isolate_failures: bool=False,
        session: Optional[aiohttp.ClientSession]=None,
      ) -> List[DiscoveredDevice]:
    """Scans the local network for BRAVIA TVs for timeout_secs seconds."""
    discovery = BraviaDiscovery(timeout_secs=timeout_secs, isolate_failures=isolate_failures, session=session)
    return await discovery.scan()
