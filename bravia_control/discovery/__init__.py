# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SSDP discovery of Sony BRAVIA TVs.
"""

from .ssdp import (
    SsdpSearcher,
    SsdpResponseInfo,
  )

from .descriptor import (
    DiscoveredDevice,
    parse_device_descriptor,
  )

from .discover import (
    DiscoveryState,
    BraviaDiscovery,
    discover,
  )
