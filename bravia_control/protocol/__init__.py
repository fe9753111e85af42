# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for Sony BRAVIA TVs.

Refer to https://pro-bravia.sony.net/develop/integrate/rest-api/spec/
for the official Scalar Web API documentation, and to
https://pro-bravia.sony.net/develop/integrate/ircc-ip/overview/
for IRCC-IP.
"""

from .service import (
    ServiceNamespace,
    ServiceNamespaceLike,
    SERVICE_NAMESPACES,
    to_service_namespace,
  )

from .result import (
    Ok,
    Err,
    Result,
  )

from .ircc import (
    IRCC_CODE_RE,
    IrccCode,
    is_ircc_code,
    build_ircc_envelope,
    parse_ircc_fault,
  )

from .request import (
    ScalarRequest,
  )

from .response import (
    ScalarResponse,
  )
