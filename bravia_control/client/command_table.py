# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
IRCC command table.

Maps remote control button names (e.g., "PowerOff", "VolumeUp") to the
literal IRCC codes the TV accepts. The table is fetched from the TV with
system/getRemoteControllerInfo the first time a name must be resolved, and
is kept for the lifetime of the table object.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import UnknownCommandError, MissingResultError
from ..pkg_logging import logger
from ..protocol import (
    ServiceNamespace,
    ScalarRequest,
    IrccCode,
    is_ircc_code,
  )

from .client_transport import BraviaClientTransport

GET_REMOTE_CONTROLLER_INFO = "getRemoteControllerInfo"

class IrccCommandTable:
    """Lazily fetched mapping of IRCC command names to codes."""

    transport: BraviaClientTransport

    _codes: Optional[List[IrccCode]] = None
    _codes_by_name: Dict[str, str]

    def __init__(self, transport: BraviaClientTransport) -> None:
        self.transport = transport
        self._codes_by_name = {}

    @property
    def is_loaded(self) -> bool:
        return self._codes is not None

    async def get_codes(self) -> List[IrccCode]:
        """Returns the TV's command table, fetching it on first use."""
        if self._codes is None:
            codes = await self._fetch()
            # A concurrent fetch may have filled the table first; either copy is equivalent
            self._codes = codes
            self._codes_by_name = {}
            for code in codes:
                # First entry wins if the TV lists a name twice
                self._codes_by_name.setdefault(code.name, code.value)
            logger.debug(f"{self}: Loaded {len(codes)} IRCC codes")
        return list(self._codes)

    async def resolve(self, code_or_name: str) -> str:
        """Returns the literal IRCC code for a command name or literal code.

        Literal codes are returned unchanged without contacting the TV.
        Names are matched exactly (case-sensitive).

        Raises UnknownCommandError if the name is not in the table.
        """
        if is_ircc_code(code_or_name):
            return code_or_name
        await self.get_codes()
        code = self._codes_by_name.get(code_or_name)
        if code is None:
            raise UnknownCommandError(code_or_name)
        return code

    async def _fetch(self) -> List[IrccCode]:
        request = ScalarRequest(ServiceNamespace.SYSTEM, GET_REMOTE_CONTROLLER_INFO)
        response = (await self.transport.call(request)).unwrap()
        if not response.has_result:
            raise MissingResultError(GET_REMOTE_CONTROLLER_INFO, response.raw_body)
        result = response.result
        # result is [<bundle info>, [{name, value}, ...]]
        if len(result) > 1 and isinstance(result[1], list):
            entries = result[1]
        elif len(result) > 0 and isinstance(result[0], list):
            entries = result[0]
        else:
            raise MissingResultError(GET_REMOTE_CONTROLLER_INFO, response.raw_body)
        return [ IrccCode.from_jsonable(entry) for entry in entries if isinstance(entry, dict) and 'name' in entry and 'value' in entry ]

    def __str__(self) -> str:
        return f"IrccCommandTable(transport={self.transport})"

    def __repr__(self) -> str:
        return str(self)
