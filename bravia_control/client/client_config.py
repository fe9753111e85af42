# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA client configuration.

Provides a general config object for a BraviaClient and its transport.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import BraviaConfigError
from ..constants import (
    DEFAULT_PORT,
    DEFAULT_PSK,
    DEFAULT_TIMEOUT,
    DEFAULT_COMMAND_INTERVAL,
    DEFAULT_DISCOVERY_TIMEOUT,
  )

class BraviaClientConfig:
    """BRAVIA client configuration."""
    default_host: str
    default_port: int
    psk: str
    timeout_secs: float
    command_interval_secs: float
    discovery_timeout_secs: float

    def __init__(
            self,
            default_host: Optional[str]=None,
            psk: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            timeout_secs: Optional[float]=None,
            command_interval_secs: Optional[float]=None,
            discovery_timeout_secs: Optional[float]=None,
            base_config: Optional[BraviaClientConfig]=None
          ) -> None:
        """Creates a configuration for a BRAVIA client.

           Args:
             default_host: The default hostname or IPV4 address of the TV.
                   May optionally be prefixed with "http://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override the default_port argument.
                   May be "ssdp://" or "ssdp://<name>" to use
                   SSDP to discover the TV, where <name> is matched against
                   the friendly name, UDN or IP address of discovered TVs.
                   If None, the default host will be taken from the
                     BRAVIA_HOST environment variable.
             psk:
                   The pre-shared key configured on the TV. If None, the PSK
                   will be taken from the BRAVIA_PSK environment variable.
                   If the environment variable is not found, "0000" is used.
             default_port: The default HTTP port number to use.
                    If None, the default port will be taken from BRAVIA_PORT.
                    If that environment variable is not found, port 80 is used.
             timeout_secs:
                   The timeout for a single HTTP request, in seconds.
                   If None, the timeout will be taken from the
                   BRAVIA_TIMEOUT environment variable.
                   If the environment variable is not found, the
                   default timeout will be used.
             command_interval_secs:
                   The pause after each IRCC code sent by send_commands(),
                   in seconds. If None, DEFAULT_COMMAND_INTERVAL is used.
             discovery_timeout_secs:
                   The length of an SSDP scan when the host is "ssdp://...",
                   in seconds. If None, DEFAULT_DISCOVERY_TIMEOUT is used.
             base_config:
                     An optional base configuration to use.
        """
        if base_config is None:
            self.init_from_defaults()
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if default_port is not None and default_port > 0:
            self.default_port = default_port

        if psk is not None:
            self.psk = psk

        if timeout_secs is not None:
            self.timeout_secs = timeout_secs

        if command_interval_secs is not None:
            self.command_interval_secs = command_interval_secs

        if discovery_timeout_secs is not None:
            self.discovery_timeout_secs = discovery_timeout_secs

    def init_from_defaults(self) -> None:
        """Initializes the configuration from defaults."""
        default_host: Optional[str] = os.environ.get('BRAVIA_HOST')
        if default_host is None or default_host == '':
            default_host = "ssdp://" # Use SSDP discovery by default
        self.default_host = default_host
        default_port_str = os.environ.get('BRAVIA_PORT')
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            try:
                default_port = int(default_port_str)
            except ValueError as e:
                raise BraviaConfigError(f"Invalid BRAVIA_PORT: '{default_port_str}'") from e
        self.default_port = default_port
        psk = os.environ.get('BRAVIA_PSK')
        if psk is None:
            psk = DEFAULT_PSK
        self.psk = psk
        timeout_str = os.environ.get('BRAVIA_TIMEOUT')
        if timeout_str is None or timeout_str == '':
            timeout_secs = DEFAULT_TIMEOUT
        else:
            try:
                timeout_secs = float(timeout_str)
            except ValueError as e:
                raise BraviaConfigError(f"Invalid BRAVIA_TIMEOUT: '{timeout_str}'") from e
        self.timeout_secs = timeout_secs
        self.command_interval_secs = DEFAULT_COMMAND_INTERVAL
        self.discovery_timeout_secs = DEFAULT_DISCOVERY_TIMEOUT

    def init_from_base_config(self, base_config: BraviaClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.psk = base_config.psk
        self.timeout_secs = base_config.timeout_secs
        self.command_interval_secs = base_config.command_interval_secs
        self.discovery_timeout_secs = base_config.discovery_timeout_secs

    @classmethod
    def from_jsonable(
            cls,
            data: Mapping[str, Any],
            base_config: Optional[BraviaClientConfig]=None
          ) -> Self:
        """Creates a configuration from a JSON-compatible dict, e.g. the contents of
           bravia_config.json. Recognized keys are "host", "port", "psk", "timeout_secs",
           "command_interval_secs" and "discovery_timeout_secs"; missing keys fall back to
           base_config and then to the environment/defaults."""
        known_keys = { 'host', 'port', 'psk', 'timeout_secs', 'command_interval_secs', 'discovery_timeout_secs' }
        unknown_keys = set(data.keys()) - known_keys
        if len(unknown_keys) > 0:
            raise BraviaConfigError(f"Unknown BRAVIA config keys: {sorted(unknown_keys)}")
        try:
            port = data.get('port')
            timeout_secs = data.get('timeout_secs')
            command_interval_secs = data.get('command_interval_secs')
            discovery_timeout_secs = data.get('discovery_timeout_secs')
            return cls(
                default_host=data.get('host'),
                psk=data.get('psk'),
                default_port=None if port is None else int(port),
                timeout_secs=None if timeout_secs is None else float(timeout_secs),
                command_interval_secs=None if command_interval_secs is None else float(command_interval_secs),
                discovery_timeout_secs=None if discovery_timeout_secs is None else float(discovery_timeout_secs),
                base_config=base_config,
              )
        except (TypeError, ValueError) as e:
            raise BraviaConfigError(f"Invalid BRAVIA config: {e}") from e

    def to_jsonable(self) -> JsonableDict:
        """Returns a JSON-compatible dict that from_jsonable() accepts. The PSK is included."""
        return dict(
            host=self.default_host,
            port=self.default_port,
            psk=self.psk,
            timeout_secs=self.timeout_secs,
            command_interval_secs=self.command_interval_secs,
            discovery_timeout_secs=self.discovery_timeout_secs,
          )

    def __str__(self) -> str:
        return (
            f"BraviaClientConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
