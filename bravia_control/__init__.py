# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package bravia_control provides a command-line tool and API for controlling
Sony BRAVIA TVs via their Scalar Web API (REST/JSON) and IRCC-IP (SOAP) interfaces.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict

from .exceptions import (
    ErrorKind,
    BraviaError,
    BraviaConfigError,
    UnknownCommandError,
    MissingResultError,
    HttpStatusError,
    TransportError,
    ApplicationError,
    MalformedResponseError,
    DiscoveryError,
  )

from .constants import (
    DEFAULT_PORT,
    DEFAULT_PSK,
    DEFAULT_TIMEOUT,
    DEFAULT_COMMAND_INTERVAL,
    DEFAULT_DISCOVERY_TIMEOUT,
  )

from .protocol import (
    ServiceNamespace,
    SERVICE_NAMESPACES,
    Ok,
    Err,
    Result,
    IrccCode,
    is_ircc_code,
    ScalarRequest,
    ScalarResponse,
  )

from .discovery import (
    DiscoveredDevice,
    DiscoveryState,
    BraviaDiscovery,
    discover,
  )

from .client import (
    BraviaClient,
    resolve_bravia_host,
    BraviaConnector,
    HttpBraviaConnector,
    bravia_transport_connect,
    bravia_connect,
    BraviaClientConfig,
    BraviaClientTransport,
    HttpBraviaClientTransport,
  )
