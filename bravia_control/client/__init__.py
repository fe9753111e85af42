# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA TV client.
"""

from .resolve_host import resolve_bravia_host
from .connector import BraviaConnector
from .http_connector import HttpBraviaConnector
from .simple import bravia_transport_connect, bravia_connect
from .client_config import BraviaClientConfig
from .client_transport import BraviaClientTransport
from .http_client_transport import HttpBraviaClientTransport
from .command_table import IrccCommandTable
from .api_version_cache import ApiVersionCache
from .client_impl import (
    BraviaClient,
  )
