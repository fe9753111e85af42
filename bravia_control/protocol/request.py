# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

import json

from ..internal_types import *
from ..constants import DEFAULT_API_VERSION, REQUEST_ID
from .service import ServiceNamespace, ServiceNamespaceLike, to_service_namespace

class ScalarRequest:
    """A single Scalar Web API method call.

    Serialized as the JSON body:

        {"method": <method>, "id": <id>, "params": [...], "version": <version>}

    and POSTed to the path of its service namespace.
    """
    namespace: ServiceNamespace
    method: str
    params: List[Jsonable]
    version: str
    id: int

    def __init__(
            self,
            namespace: ServiceNamespaceLike,
            method: str,
            params: Optional[Sequence[Jsonable]]=None,
            version: str=DEFAULT_API_VERSION,
            id: int=REQUEST_ID,
          ):
        self.namespace = to_service_namespace(namespace)
        self.method = method
        self.params = [] if params is None else list(params)
        self.version = version
        self.id = id

    @property
    def path(self) -> str:
        return self.namespace.path

    def to_jsonable(self) -> JsonableDict:
        return dict(
            method=self.method,
            id=self.id,
            params=self.params,
            version=self.version,
          )

    def encode(self) -> str:
        return json.dumps(self.to_jsonable())

    def __str__(self) -> str:
        return f"ScalarRequest({self.namespace}/{self.method} v{self.version}: {self.params!r})"

    def __repr__(self) -> str:
        return str(self)
