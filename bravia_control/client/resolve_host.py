# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA host IP/Port resolver.

Provides a method that can resolve various host specifiers, environment variables,
SSDP discovery, etc. into a TV IP address and port.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import BraviaConfigError, DiscoveryError
from ..constants import DEFAULT_PORT, DEFAULT_DISCOVERY_TIMEOUT
from ..pkg_logging import logger
from ..discovery import BraviaDiscovery, DiscoveredDevice

async def resolve_bravia_host(
        host: Optional[str]=None,
        default_port: Optional[int]=None,
        discovery_timeout_secs: Optional[float]=None,
        discovery: Optional[BraviaDiscovery]=None,
      ) -> Tuple[str, int, Optional[DiscoveredDevice]]:
    """Resolves a BRAVIA host string into a hostname and port.

        Args:
            host: The hostname or IPV4 address of the TV.
                    May optionally be prefixed with "http://".
                    May be suffixed with ":<port>" to specify a
                    non-default port, which will override the default_port argument.
                    May be "ssdp://" to use the first TV found by SSDP, or
                    "ssdp://<name>" to use the TV whose friendly name, UDN or
                    IP address is <name>.
                    If None, the host will be taken from the
                    BRAVIA_HOST environment variable.
            default_port: The default HTTP port number to use. If None, the port
                    will be taken from BRAVIA_PORT. If that
                    environment variable is not found, port 80 is used.
            discovery_timeout_secs: The length of the SSDP scan. If None,
                    DEFAULT_DISCOVERY_TIMEOUT is used.
            discovery: An optional unused BraviaDiscovery to scan with.

        Returns:
            A tuple of (hostname: str, port: int, device: Optional[DiscoveredDevice]) where:
                hostname: The resolved host.
                port:     The resolved port number.
                device:   The discovered device, if SSDP was used to
                          find the TV. None otherwise.
    """
    if host is None or host == '':
        host = os.environ.get('BRAVIA_HOST')
        if host is None or host == '':
            host = "ssdp://" # Use SSDP discovery

    if default_port is None or default_port <= 0:
        default_port_str = os.environ.get('BRAVIA_PORT')
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            try:
                default_port = int(default_port_str)
            except ValueError as e:
                raise BraviaConfigError(f"Invalid BRAVIA_PORT: '{default_port_str}'") from e

    if host.startswith('ssdp://'):
        ssdp_name: Optional[str] = host[7:]
        if ssdp_name == '':
            ssdp_name = None
        if discovery is None:
            discovery = BraviaDiscovery(
                timeout_secs=DEFAULT_DISCOVERY_TIMEOUT if discovery_timeout_secs is None else discovery_timeout_secs,
                isolate_failures=True,
              )

        def match(device: DiscoveredDevice) -> bool:
            return ssdp_name is None or device.matches(ssdp_name)

        devices = await discovery.scan(match=match)
        for device in devices:
            if match(device):
                logger.debug(f"SSDP resolved '{host}' to {device}")
                return (device.host, device.port, device)
        if ssdp_name is None:
            raise DiscoveryError("SSDP discovery failed to find a BRAVIA TV")
        raise DiscoveryError(f"SSDP discovery failed to find a BRAVIA TV named '{ssdp_name}'")

    if '://' in host:
        if not host.startswith('http://'):
            raise BraviaConfigError(f"Unsupported protocol in host specifier: '{host}'")
        host = host[7:].rstrip('/')
    port = default_port
    if host.startswith('['):
        # [IPv6]:port
        bracket = host.find(']')
        if bracket < 0:
            raise BraviaConfigError(f"Invalid host specifier: '{host}'")
        rest = host[bracket+1:]
        host = host[1:bracket]
        if rest.startswith(':'):
            port = _parse_port(rest[1:], host)
    elif host.count(':') == 1:
        host, port_str = host.rsplit(':', 1)
        port = _parse_port(port_str, host)
    if host == '':
        raise BraviaConfigError("Empty host in host specifier")
    return (host, port, None)

def _parse_port(port_str: str, host: str) -> int:
    try:
        port = int(port_str)
    except ValueError as e:
        raise BraviaConfigError(f"Invalid port in host specifier for '{host}': '{port_str}'") from e
    if port <= 0 or port > 65535:
        raise BraviaConfigError(f"Invalid port in host specifier for '{host}': {port}")
    return port
