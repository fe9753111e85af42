# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Scalar Web API service namespaces.

The TV groups its API methods into a fixed set of services. Each service is
reached at its own path below /sony and has its own table of supported API
versions.
"""

from __future__ import annotations

from enum import Enum

from ..internal_types import *
from ..constants import API_PATH_PREFIX

class ServiceNamespace(str, Enum):
    ACCESS_CONTROL = "accessControl"
    APP_CONTROL = "appControl"
    AUDIO = "audio"
    AV_CONTENT = "avContent"
    BROWSER = "browser"
    CEC = "cec"
    ENCRYPTION = "encryption"
    GUIDE = "guide"
    RECORDING = "recording"
    SYSTEM = "system"
    VIDEO_SCREEN = "videoScreen"

    @property
    def path(self) -> str:
        """The URL path of the service endpoint, e.g. "/sony/system"."""
        return f"{API_PATH_PREFIX}/{self.value}"

    def __str__(self) -> str:
        return self.value

ServiceNamespaceLike = Union[ServiceNamespace, str]

SERVICE_NAMESPACES: List[ServiceNamespace] = list(ServiceNamespace)
"""All known service namespaces."""

def to_service_namespace(namespace: ServiceNamespaceLike) -> ServiceNamespace:
    """Converts a service name (e.g., "avContent") to a ServiceNamespace.

    Raises ValueError if the name is not a known service.
    """
    if isinstance(namespace, ServiceNamespace):
        return namespace
    return ServiceNamespace(namespace)
