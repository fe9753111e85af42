# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA HTTP client connector.

Provides a connector for a BraviaClientTransport over HTTP.
"""

from __future__ import annotations

import aiohttp

from ..internal_types import *
from ..exceptions import BraviaConfigError
from .connector import BraviaConnector
from .client_transport import BraviaClientTransport
from .client_config import BraviaClientConfig
from .http_client_transport import HttpBraviaClientTransport

SUPPORTED_SCHEMES = ('http://', 'ssdp://')

class HttpBraviaConnector(BraviaConnector):
    """BRAVIA HTTP client transport connector."""

    config: BraviaClientConfig
    session: Optional[aiohttp.ClientSession] = None

    def __init__(
            self,
            host: Optional[str]=None,
            psk: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float]=None,
            config: Optional[BraviaClientConfig]=None,
            session: Optional[aiohttp.ClientSession]=None,
          ) -> None:
        """Creates a connector that can create transports to
           a BRAVIA TV that is reachable over HTTP.

              Args:
                host: The hostname or IPV4 address of the TV.
                      May optionally be prefixed with "http://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      May be "ssdp://" or "ssdp://<name>" to use
                      SSDP to discover the TV.
                      If None, the host will be taken from the config.
                psk:  The pre-shared key. If None, it will be taken from the config.
                port: The default HTTP port number to use. If None, it
                      will be taken from the config.
                timeout_secs: The timeout for each request. If None, it
                      will be taken from the config.
                config: A BraviaClientConfig object that specifies
                        the default host, port, PSK, etc to use.
                        If None, a default config will be created.
                session: An optional caller-owned aiohttp session to be
                        shared by the transports this connector creates.
        """
        super().__init__()
        self.config = BraviaClientConfig(
            default_host=host,
            default_port=port,
            timeout_secs=timeout_secs,
            psk=psk,
            base_config=config
          )
        self.session = session
        host = self.config.default_host
        if '://' in host and not host.startswith(SUPPORTED_SCHEMES):
            raise BraviaConfigError(f"Unsupported protocol in host specifier: '{host}'")

    # @abstractmethod
    async def connect(self) -> BraviaClientTransport:
        """Create an HTTP client transport for the TV associated with this
           connector. If the host is an "ssdp://" specifier, the TV is
           discovered first.
        """
        transport = await HttpBraviaClientTransport.create(
            self.config.default_host,
            psk=self.config.psk,
            port=self.config.default_port,
            timeout_secs=self.config.timeout_secs,
            discovery_timeout_secs=self.config.discovery_timeout_secs,
            session=self.session,
          )
        return transport

    def __str__(self) -> str:
        return f"HttpBraviaConnector(host='{self.config.default_host}', port={self.config.default_port})"

    def __repr__(self) -> str:
        return str(self)
