# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA simple client connection API.

Provides a simple API for connecting to a TV from a configuration.
"""

from __future__ import annotations

from ..internal_types import *
from .client_transport import BraviaClientTransport
from .client_config import BraviaClientConfig
from .client_impl import BraviaClient
from .http_connector import HttpBraviaConnector

async def bravia_transport_connect(
        host: Optional[str]=None,
        psk: Optional[str]=None,
        config: Optional[BraviaClientConfig]=None
      ) -> BraviaClientTransport:
    """Create a transport for a BRAVIA TV from a configuration.

    Args:
        host: The hostname or IPV4 address of the TV.
                May optionally be prefixed with "http://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                May be "ssdp://" or "ssdp://<name>" to use
                SSDP to discover the TV.
                If None, the host will be taken from the config.
        psk:
                The pre-shared key. If None, the PSK will be taken
                from the config.
        config: A BraviaClientConfig object that specifies
                the default host, port, PSK, etc. to use.
                If None, a default config will be created.
    """
    connector = HttpBraviaConnector(
        host=host,
        psk=psk,
        config=config
      )
    transport = await connector.connect()
    return transport

async def bravia_connect(
        host: Optional[str]=None,
        psk: Optional[str]=None,
        config: Optional[BraviaClientConfig]=None
      ) -> BraviaClient:
    """Create a BRAVIA client from a configuration.

    Args:
        host: The hostname or IPV4 address of the TV, or an "http://"
                or "ssdp://" specifier. If None, the host will be taken
                from the config.
        psk:
                The pre-shared key. If None, the PSK will be taken
                from the config.
        config: A BraviaClientConfig object that specifies
                the default host, port, PSK, etc. to use.
                If None, a default config will be created.
    """
    config = BraviaClientConfig(
        default_host=host,
        psk=psk,
        base_config=config
      )
    transport = await bravia_transport_connect(
        config=config
      )
    try:
        client = BraviaClient(
            transport=transport,
            config=config,
        )
    except BaseException:
        await transport.aclose()
        raise

    return client
