# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
REST API routes for the BRAVIA REST server.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .logger import logger
from ..internal_types import *
from ..version import __version__ as pkg_version
from ..exceptions import BraviaError, ErrorKind
from ..protocol import to_service_namespace
from ..client import BraviaClient, BraviaClientConfig

router = APIRouter()

def get_bravia_client(request: Request) -> BraviaClient:
    return request.app.state.bravia_client

def get_bravia_config(request: Request) -> BraviaClientConfig:
    return request.app.state.bravia_config

_status_by_kind: Dict[ErrorKind, int] = {
    ErrorKind.UNKNOWN_COMMAND: 404,
    ErrorKind.CONFIG: 400,
    ErrorKind.DISCOVERY: 503,
  }

async def bravia_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Maps a BraviaError raised by a route to an HTTP error response.

    Errors reported by the TV (or failure to reach it) are 502 Bad Gateway.
    """
    assert isinstance(exc, BraviaError)
    status_code = _status_by_kind.get(exc.kind, 502)
    logger.info(f"{request.method} {request.url.path} failed: [{exc.kind.value}] {exc}")
    return JSONResponse(
        status_code=status_code,
        content=dict(detail=str(exc), kind=exc.kind.value),
      )

class PowerRequest(BaseModel):
    on: bool

class CommandsRequest(BaseModel):
    commands: List[str]

class UriRequest(BaseModel):
    uri: str

class VolumeRequest(BaseModel):
    volume: Union[int, str]
    target: str = "speaker"

class MuteRequest(BaseModel):
    mute: bool

class InvokeRequest(BaseModel):
    params: List[Any] = []
    version: Optional[str] = None

@router.get("/")
async def get_root() -> Dict[str, Any]:
    return dict(name="bravia-control", version=pkg_version)

@router.get("/device_info")
async def get_device_info(client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    return dict(device_info=await client.get_device_info())

@router.get("/interface_info")
async def get_interface_info(client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    return await client.get_interface_information()

@router.get("/power")
async def get_power(client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    return dict(status=await client.get_power_state())

@router.put("/power")
async def put_power(body: PowerRequest, client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.set_power_state(body.on)
    return dict(on=body.on)

@router.get("/playing")
async def get_playing(client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    return dict(title=await client.get_playback_info())

@router.get("/playing_content")
async def get_playing_content(client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    return await client.get_playing_content_info()

@router.post("/commands")
async def post_commands(body: CommandsRequest, client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.send_commands(body.commands)
    return dict(sent=body.commands)

@router.get("/ircc_codes")
async def get_ircc_codes(client: BraviaClient = Depends(get_bravia_client)) -> List[Dict[str, Any]]:
    return [ code.to_jsonable() for code in await client.get_ircc_codes() ]

@router.get("/schemes")
async def get_schemes(client: BraviaClient = Depends(get_bravia_client)) -> List[Any]:
    return await client.list_schemes()

@router.get("/sources")
async def get_sources(scheme: str, client: BraviaClient = Depends(get_bravia_client)) -> List[Any]:
    return await client.list_sources(scheme)

@router.get("/content")
async def get_content(
        source: str,
        start: int = 0,
        count: int = 50,
        client: BraviaClient = Depends(get_bravia_client)
      ) -> List[Any]:
    return await client.list_content(start, count, source)

@router.put("/content")
async def put_content(body: UriRequest, client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.select_content(body.uri)
    return dict(uri=body.uri)

@router.get("/apps")
async def get_apps(client: BraviaClient = Depends(get_bravia_client)) -> List[Any]:
    return await client.list_applications()

@router.post("/apps/launch")
async def post_app_launch(body: UriRequest, client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.launch_application(body.uri)
    return dict(uri=body.uri)

@router.post("/apps/terminate")
async def post_apps_terminate(client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.terminate_applications()
    return dict()

@router.get("/volume")
async def get_volume(client: BraviaClient = Depends(get_bravia_client)) -> List[Any]:
    return await client.get_volume_information()

@router.put("/volume")
async def put_volume(body: VolumeRequest, client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.set_audio_volume(body.volume, target=body.target)
    return dict(volume=str(body.volume), target=body.target)

@router.put("/mute")
async def put_mute(body: MuteRequest, client: BraviaClient = Depends(get_bravia_client)) -> Dict[str, Any]:
    await client.set_audio_mute(body.mute)
    return dict(mute=body.mute)

@router.get("/api_info/{namespace}")
async def get_api_info(namespace: str, client: BraviaClient = Depends(get_bravia_client)) -> Any:
    try:
        ns = to_service_namespace(namespace)
    except ValueError:
        return JSONResponse(status_code=404, content=dict(detail=f"Unknown service '{namespace}'"))
    return await client.get_supported_api_info(ns)

@router.post("/invoke/{namespace}/{method}")
async def post_invoke(
        namespace: str,
        method: str,
        body: InvokeRequest,
        client: BraviaClient = Depends(get_bravia_client)
      ) -> Any:
    try:
        ns = to_service_namespace(namespace)
    except ValueError:
        return JSONResponse(status_code=404, content=dict(detail=f"Unknown service '{namespace}'"))
    response = await client.invoke(ns, method, body.params, version=body.version)
    return response.body

@router.get("/config")
async def get_config(config: BraviaClientConfig = Depends(get_bravia_config)) -> Dict[str, Any]:
    result = config.to_jsonable()
    # never echo the pre-shared key
    result.pop('psk', None)
    return result
