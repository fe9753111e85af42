# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA HTTP client transport.

Provides an implementation of BraviaClientTransport over HTTP using aiohttp.
"""

from __future__ import annotations

import asyncio
import json

import aiohttp

from ..internal_types import *
from ..exceptions import (
    BraviaError,
    TransportError,
    HttpStatusError,
    ApplicationError,
    MalformedResponseError,
  )
from ..constants import (
    DEFAULT_PORT,
    DEFAULT_PSK,
    DEFAULT_TIMEOUT,
    API_PATH_PREFIX,
    IRCC_PATH,
    IRCC_SOAP_ACTION,
    PSK_HEADER,
  )
from ..pkg_logging import logger
from ..protocol import (
    Ok,
    Err,
    Result,
    ScalarRequest,
    ScalarResponse,
    build_ircc_envelope,
    parse_ircc_fault,
  )

from .client_transport import BraviaClientTransport
from .resolve_host import resolve_bravia_host

IRCC_METHOD_NAME = "X_SendIRCC"
"""Name used for IRCC submissions in errors and logs."""

def _malformed(method: str, body: str, status: Optional[int], cause: Optional[BaseException]=None, detail: Optional[str]=None) -> Err:
    error = MalformedResponseError(method, body, status=status, detail=detail)
    error.__cause__ = cause
    return Err(error)

class HttpBraviaClientTransport(BraviaClientTransport):
    """BRAVIA HTTP client transport.

    Every request carries the pre-shared key in the X-Auth-PSK header and is
    bounded by timeout_secs. Requests are independent; nothing is serialized.
    """

    host: str
    port: int
    psk: str
    timeout_secs: float

    _session: Optional[aiohttp.ClientSession] = None
    _owns_session: bool = True
    _closed: bool = False

    def __init__(
            self,
            host: str,
            psk: str=DEFAULT_PSK,
            port: int=DEFAULT_PORT,
            timeout_secs: float=DEFAULT_TIMEOUT,
            session: Optional[aiohttp.ClientSession]=None,
          ) -> None:
        """Initializes the transport.

        Args:
            host: The hostname or IP address of the TV.
            psk: The pre-shared key configured on the TV.
            port: The HTTP port of the TV.
            timeout_secs: The timeout for each request, in seconds.
            session: An optional aiohttp session to use. If provided, the caller
                     owns it and aclose() will not close it. If None, a session
                     is created on first use and closed by aclose().
        """
        super().__init__()
        self.host = host
        self.port = port
        self.psk = psk
        self.timeout_secs = timeout_secs
        if session is not None:
            self._session = session
            self._owns_session = False

    @property
    def base_url(self) -> str:
        host = self.host
        if ':' in host and not host.startswith('['):
            # IPv6 literal
            host = f"[{host}]"
        return f"http://{host}:{self.port}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._closed:
            raise BraviaError(f"{self}: Transport is closed")
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _post(self, path: str, data: str, headers: Dict[str, str], method: str) -> Tuple[int, str]:
        """POSTs a request body and returns (status, body text).

        Raises TransportError if no HTTP response was received.
        """
        session = self._get_session()
        url = self.base_url + path
        timeout = aiohttp.ClientTimeout(total=self.timeout_secs)
        try:
            async with session.post(url, data=data.encode('utf-8'), headers=headers, timeout=timeout) as response:
                raw = await response.read()
                body = raw.decode('utf-8', errors='replace')
                logger.debug(f"{self}: {method}: HTTP {response.status}: {body}")
                return (response.status, body)
        except asyncio.TimeoutError as e:
            raise TransportError(method, f"Timed out after {self.timeout_secs} seconds") from e
        except aiohttp.ClientError as e:
            raise TransportError(method, str(e) or e.__class__.__name__) from e

    async def send_ircc(self, code: str) -> Result[str]:
        """Submits one literal IRCC code. On success, returns Ok(raw response body)."""
        headers = {
            'Content-Type': 'text/xml; charset=UTF-8',
            'SOAPACTION': IRCC_SOAP_ACTION,
            PSK_HEADER: self.psk,
          }
        logger.debug(f"{self}: Sending IRCC code {code}")
        try:
            status, body = await self._post(API_PATH_PREFIX + IRCC_PATH, build_ircc_envelope(code), headers, IRCC_METHOD_NAME)
        except TransportError as e:
            return Err(e)

        if status == 200:
            if body.strip() != '':
                try:
                    fault = parse_ircc_fault(body)
                except ValueError:
                    # A 200 with a body that is not XML is still an accepted code
                    fault = None
                if fault is not None:
                    return Err(ApplicationError(IRCC_METHOD_NAME, fault[0], fault[1], status=status))
            return Ok(body)

        if body.strip() == '':
            return Err(HttpStatusError(IRCC_METHOD_NAME, status))
        try:
            fault = parse_ircc_fault(body)
        except ValueError as e:
            return _malformed(IRCC_METHOD_NAME, body, status, cause=e, detail="Failed to parse the error response")
        if fault is None:
            return _malformed(IRCC_METHOD_NAME, body, status, detail="Unexpected or malformed error response")
        return Err(ApplicationError(IRCC_METHOD_NAME, fault[0], fault[1], status=status))

    async def call(self, request: ScalarRequest) -> Result[ScalarResponse]:
        """Performs one Scalar Web API call. On success, returns Ok(decoded response)."""
        method = request.method
        headers = {
            'Content-Type': 'application/json; charset=UTF-8',
            PSK_HEADER: self.psk,
          }
        logger.debug(f"{self}: Calling {request}")
        try:
            status, body = await self._post(request.path, request.encode(), headers, method)
        except TransportError as e:
            return Err(e)

        if status != 200:
            return Err(HttpStatusError(method, status, body))

        try:
            decoded = json.loads(body)
        except ValueError as e:
            return _malformed(method, body, status, cause=e, detail="Failed to parse the response")
        if not isinstance(decoded, dict):
            return _malformed(method, body, status)

        response = ScalarResponse(method, decoded, raw_body=body)
        if response.has_error:
            message = response.error_message
            if message is None:
                return _malformed(method, body, status, detail="Malformed error response")
            return Err(ApplicationError(method, response.error_code, message, status=status))
        return Ok(response)

    # @override
    async def aclose(self) -> None:
        """Closes the aiohttp session if this transport created it."""
        if self._closed:
            return
        self._closed = True
        session = self._session
        self._session = None
        if session is not None and self._owns_session:
            await session.close()

    @classmethod
    async def create(
            cls,
            host: Optional[str]=None,
            psk: str=DEFAULT_PSK,
            port: Optional[int]=None,
            timeout_secs: float=DEFAULT_TIMEOUT,
            discovery_timeout_secs: Optional[float]=None,
            session: Optional[aiohttp.ClientSession]=None,
          ) -> Self:
        """Creates a transport to a BRAVIA TV that is reachable over HTTP.

              Args:
                host: The hostname or IPV4 address of the TV.
                      May optionally be prefixed with "http://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      May be "ssdp://" or "ssdp://<name>" to use
                      SSDP to discover the TV.
                      If None, the host will be taken from the
                        BRAVIA_HOST environment variable.
                psk:  The pre-shared key configured on the TV.
                port: The default HTTP port number to use. If None, the port
                      will be taken from BRAVIA_PORT. If that
                      environment variable is not found, port 80 is used.
                timeout_secs: The timeout for each request, in seconds.
                discovery_timeout_secs: The length of the SSDP scan if
                      discovery is used.
                session: An optional caller-owned aiohttp session.
        """
        final_host, final_port, device = await resolve_bravia_host(
            host,
            port,
            discovery_timeout_secs=discovery_timeout_secs,
          )
        if device is not None:
            logger.debug(f"Resolved BRAVIA host {host!r} to {device}")
        return cls(final_host, psk=psk, port=final_port, timeout_secs=timeout_secs, session=session)

    def __str__(self) -> str:
        return f"HttpBraviaClientTransport({self.host}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
