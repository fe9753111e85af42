# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Scalar Web API version negotiation.

Each service namespace advertises its methods and their supported versions
through guide/getSupportedApiInfo. The table for a namespace is fetched once
and reused; the newest (last listed) version of a method is used for calls.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import MissingResultError
from ..constants import DEFAULT_API_VERSION
from ..pkg_logging import logger
from ..protocol import (
    ServiceNamespace,
    ServiceNamespaceLike,
    to_service_namespace,
    ScalarRequest,
  )

from .client_transport import BraviaClientTransport

GET_SUPPORTED_API_INFO = "getSupportedApiInfo"

class ApiVersionCache:
    """Per-client cache of supported API tables, keyed by service namespace."""

    transport: BraviaClientTransport

    _api_info: Dict[ServiceNamespace, List[JsonableDict]]

    def __init__(self, transport: BraviaClientTransport) -> None:
        self.transport = transport
        self._api_info = {}

    def is_cached(self, namespace: ServiceNamespaceLike) -> bool:
        return to_service_namespace(namespace) in self._api_info

    async def fetch_service_info(self, namespace: ServiceNamespaceLike) -> List[JsonableDict]:
        """Queries the TV for the service table of a namespace, bypassing the cache.

        Returns the raw list of service descriptors, each of the form
        {"service": <ns>, "apis": [{"name": <method>, "versions": [{"version": <v>}, ...]}, ...]}.
        """
        ns = to_service_namespace(namespace)
        request = ScalarRequest(ServiceNamespace.GUIDE, GET_SUPPORTED_API_INFO, [{"services": [ns.value]}])
        response = (await self.transport.call(request)).unwrap()
        if not response.has_result:
            raise MissingResultError(GET_SUPPORTED_API_INFO, response.raw_body)
        services = response.first_result()
        if not isinstance(services, list):
            raise MissingResultError(GET_SUPPORTED_API_INFO, response.raw_body)
        return services

    async def get_apis(self, namespace: ServiceNamespaceLike) -> List[JsonableDict]:
        """Returns the cached list of API descriptors for a namespace, fetching it on a miss."""
        ns = to_service_namespace(namespace)
        apis = self._api_info.get(ns)
        if apis is None:
            services = await self.fetch_service_info(ns)
            apis = []
            if len(services) > 0 and isinstance(services[0], dict):
                raw_apis = services[0].get('apis')
                if isinstance(raw_apis, list):
                    apis = [ api for api in raw_apis if isinstance(api, dict) ]
            self._api_info[ns] = apis
            logger.debug(f"{self}: Cached {len(apis)} API descriptors for '{ns}'")
        return apis

    async def version_for(self, namespace: ServiceNamespaceLike, method: str) -> str:
        """Returns the version to use when calling a method.

        This is the last version listed for the method, or "1.0" if the method
        (or its version list) is not advertised.
        """
        apis = await self.get_apis(namespace)
        for api in apis:
            if api.get('name') == method:
                versions = api.get('versions')
                if isinstance(versions, list) and len(versions) > 0:
                    last = versions[-1]
                    if isinstance(last, dict) and 'version' in last:
                        return str(last['version'])
                break
        return DEFAULT_API_VERSION

    def __str__(self) -> str:
        return f"ApiVersionCache(transport={self.transport})"

    def __repr__(self) -> str:
        return str(self)
