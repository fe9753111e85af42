# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
BRAVIA TV client.

Provides the high-level command and query API for a Sony BRAVIA TV on top of
a BraviaClientTransport.
"""

from __future__ import annotations

import asyncio

from ..internal_types import *
from ..exceptions import (
    MissingResultError,
    ApplicationError,
  )
from ..constants import DEFAULT_API_VERSION
from ..pkg_logging import logger
from ..protocol import (
    ServiceNamespace,
    ServiceNamespaceLike,
    ScalarRequest,
    ScalarResponse,
    IrccCode,
  )

from .client_transport import BraviaClientTransport
from .client_config import BraviaClientConfig
from .http_client_transport import HttpBraviaClientTransport
from .command_table import IrccCommandTable
from .api_version_cache import ApiVersionCache

SYSTEM = ServiceNamespace.SYSTEM
AV_CONTENT = ServiceNamespace.AV_CONTENT
APP_CONTROL = ServiceNamespace.APP_CONTROL
AUDIO = ServiceNamespace.AUDIO

class BraviaClient:
    """Sony BRAVIA TV client."""

    transport: BraviaClientTransport
    config: BraviaClientConfig
    command_table: IrccCommandTable
    api_versions: ApiVersionCache

    command_interval_secs: float
    """Pause after each IRCC code sent by send_commands()."""

    def __init__(
            self,
            transport: BraviaClientTransport,
            config: Optional[BraviaClientConfig]=None,
            command_interval_secs: Optional[float]=None,
          ):
        self.transport = transport
        self.config = BraviaClientConfig(
            command_interval_secs=command_interval_secs,
            base_config=config,
          )
        self.command_interval_secs = self.config.command_interval_secs
        self.command_table = IrccCommandTable(transport)
        self.api_versions = ApiVersionCache(transport)

    async def call(self, request: ScalarRequest) -> ScalarResponse:
        """Performs a Scalar Web API call and returns the response.

        Raises the classified BraviaError if the call fails.
        """
        return (await self.transport.call(request)).unwrap()

    async def _call_for_result(
            self,
            operation: str,
            namespace: ServiceNamespace,
            method: str,
            params: Optional[List[Jsonable]]=None,
            version: str=DEFAULT_API_VERSION,
          ) -> ScalarResponse:
        response = await self.call(ScalarRequest(namespace, method, params, version=version))
        if not response.has_result:
            raise MissingResultError(operation, response.raw_body)
        return response

    async def invoke(
            self,
            namespace: ServiceNamespaceLike,
            method: str,
            params: Optional[List[Jsonable]]=None,
            version: Optional[str]=None,
          ) -> ScalarResponse:
        """Calls an arbitrary Scalar Web API method.

        If version is None, the newest version the TV advertises for the method
        is used.
        """
        if version is None:
            version = await self.api_versions.version_for(namespace, method)
        return await self.call(ScalarRequest(namespace, method, params, version=version))

    # ---- IRCC remote control codes

    async def get_ircc_codes(self) -> List[IrccCode]:
        """Returns the TV's remote control command table."""
        return await self.command_table.get_codes()

    async def resolve_ircc_code(self, code_or_name: str) -> str:
        """Returns the literal IRCC code for a command name or literal code."""
        return await self.command_table.resolve(code_or_name)

    async def send_ircc(self, code_or_name: str) -> str:
        """Sends a single IRCC command by name or literal code, without pausing.

        Returns the raw response body.
        """
        code = await self.command_table.resolve(code_or_name)
        return (await self.transport.send_ircc(code)).unwrap()

    async def send_commands(self, codes: Union[str, Iterable[str]]) -> None:
        """Sends IRCC commands in order, pausing command_interval_secs after each one.

        Each entry may be a command name (e.g., "VolumeUp") or a literal code.
        Stops at the first failure and raises its error; later commands are
        never sent.
        """
        if isinstance(codes, str):
            codes = [codes]
        for code_or_name in codes:
            code = await self.command_table.resolve(code_or_name)
            logger.debug(f"{self}: Sending {code_or_name}")
            (await self.transport.send_ircc(code)).unwrap()
            await asyncio.sleep(self.command_interval_secs)

    # ---- system

    async def get_interface_information(self) -> JsonableDict:
        """Returns the raw system/getInterfaceInformation result, e.g.:

            {"modelName": "FW-55BZ35F", "serverName": "", "interfaceVersion": "5.0.1",
             "productName": "BRAVIA", "productCategory": "tv"}
        """
        operation = "getInterfaceInformation"
        response = await self._call_for_result(operation, SYSTEM, operation)
        info = response.first_result()
        if not isinstance(info, dict):
            raise MissingResultError(operation, response.raw_body)
        return info

    async def get_device_info(self) -> str:
        """Returns "<modelName> <productName>/<interfaceVersion>", e.g. "FW-55BZ35F BRAVIA/5.0.1"."""
        info = await self.get_interface_information()
        return f"{info.get('modelName')} {info.get('productName')}/{info.get('interfaceVersion')}"

    async def get_power_state(self) -> str:
        """Returns the power status, e.g. "active" or "standby"."""
        operation = "getPowerStatus"
        response = await self._call_for_result(operation, SYSTEM, operation)
        status = response.first_result()
        if not isinstance(status, dict) or 'status' not in status:
            raise MissingResultError(operation, response.raw_body)
        return str(status['status'])

    async def set_power_state(self, on: bool) -> None:
        """Turns the TV on (True) or to standby (False)."""
        operation = "setPowerStatus"
        await self._call_for_result(operation, SYSTEM, operation, [{"status": bool(on)}])

    # ---- avContent

    async def get_playing_content_info(self) -> JsonableDict:
        """Returns the raw avContent/getPlayingContentInfo result, e.g.:

            {"source": "extInput:hdmi", "title": "HDMI 2", "uri": "extInput:hdmi?port=2"}
        """
        operation = "getPlayingContentInfo"
        response = await self._call_for_result(operation, AV_CONTENT, operation)
        info = response.first_result()
        if not isinstance(info, dict):
            raise MissingResultError(operation, response.raw_body)
        return info

    async def get_playback_info(self) -> str:
        """Returns the title of the content being played.

        When the TV reports an application error instead (e.g. 40005 "Display
        Is Turned off"), the error message is returned as the title.
        """
        operation = "getPlayingContentInfo"
        try:
            info = await self.get_playing_content_info()
        except ApplicationError as e:
            logger.debug(f"{self}: {operation} reported {e.code}: {e.message}")
            return e.message
        title = info.get('title')
        if title is None:
            raise MissingResultError(operation, str(info))
        return str(title)

    async def list_schemes(self) -> List[Jsonable]:
        """Returns the content schemes, e.g. [{"scheme": "extInput"}, {"scheme": "tv"}]."""
        operation = "getSchemeList"
        response = await self._call_for_result(operation, AV_CONTENT, operation)
        return _list_or_empty(response.first_result())

    async def list_sources(self, scheme: str) -> List[Jsonable]:
        """Returns the sources of a scheme, e.g. [{"source": "extInput:hdmi"}, ...]."""
        operation = "getSourceList"
        response = await self._call_for_result(operation, AV_CONTENT, operation, [{"scheme": scheme}])
        return _list_or_empty(response.first_result())

    async def list_content(self, start_index: int, count: int, source_uri: str) -> List[Jsonable]:
        """Returns one page of the content list of a source.

        The method version is negotiated with the TV.
        """
        method = "getContentList"
        version = await self.api_versions.version_for(AV_CONTENT, method)
        response = await self._call_for_result(
            f"{method} {source_uri}",
            AV_CONTENT,
            method,
            [{"stIdx": start_index, "cnt": count, "uri": source_uri}],
            version=version,
          )
        return _list_or_empty(response.first_result())

    async def select_content(self, uri: str) -> None:
        """Switches to a content or input, e.g. "extInput:hdmi?port=2"."""
        operation = "setPlayContent"
        await self._call_for_result(operation, AV_CONTENT, operation, [{"uri": uri}])

    # ---- appControl

    async def list_applications(self) -> List[Jsonable]:
        """Returns the installed applications, each with "title", "uri" and "icon"."""
        operation = "getApplicationList"
        response = await self._call_for_result(operation, APP_CONTROL, operation)
        return _list_or_empty(response.first_result())

    async def launch_application(self, uri: str) -> None:
        operation = "setActiveApp"
        await self._call_for_result(operation, APP_CONTROL, operation, [{"uri": uri}])

    async def terminate_applications(self) -> None:
        operation = "terminateApps"
        await self._call_for_result(operation, APP_CONTROL, operation)

    # ---- guide

    async def get_supported_api_info(self, namespace: ServiceNamespaceLike) -> List[JsonableDict]:
        """Returns the TV's service table for a namespace. Always queries the TV."""
        return await self.api_versions.fetch_service_info(namespace)

    # ---- audio

    async def get_volume_information(self) -> List[Jsonable]:
        """Returns the volume of each output, e.g.
           [{"target": "speaker", "volume": 18, "mute": false, "maxVolume": 100, "minVolume": 0}]."""
        operation = "getVolumeInformation"
        response = await self._call_for_result(operation, AUDIO, operation)
        return _list_or_empty(response.first_result())

    async def set_audio_volume(self, volume: Union[int, str], target: str="speaker") -> None:
        """Sets the volume of an output. volume may be absolute ("25") or relative ("+1", "-1")."""
        operation = "setAudioVolume"
        await self._call_for_result(operation, AUDIO, operation, [{"target": target, "volume": str(volume)}])

    async def set_audio_mute(self, mute: bool) -> None:
        operation = "setAudioMute"
        await self._call_for_result(operation, AUDIO, operation, [{"status": bool(mute)}])

    # ---- lifetime

    async def _async_dispose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> BraviaClient:
        logger.debug(f"{self}: Entering async context manager")
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        logger.debug(f"{self}: Exiting async context manager, exc={exc_val}")
        await self._async_dispose()

    @classmethod
    async def create(
            cls,
            host: Optional[str]=None,
            psk: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float]=None,
            command_interval_secs: Optional[float]=None,
          ) -> Self:
        config = BraviaClientConfig(
            psk=psk,
            timeout_secs=timeout_secs,
            command_interval_secs=command_interval_secs,
          )
        transport = await HttpBraviaClientTransport.create(
                host,
                psk=config.psk,
                port=port,
                timeout_secs=config.timeout_secs,
                discovery_timeout_secs=config.discovery_timeout_secs,
              )
        try:
            self = cls(transport, config=config)
        except BaseException:
            await transport.aclose()
            raise
        return self

    def __str__(self) -> str:
        return f"BraviaClient(transport={self.transport})"

    def __repr__(self) -> str:
        return str(self)

    async def aclose(self) -> None:
        await self._async_dispose()

def _list_or_empty(value: Any) -> List[Jsonable]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
