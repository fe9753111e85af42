#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A REST FastAPI server that controls a Sony BRAVIA TV.

Run with, e.g.:

    uvicorn bravia_control.rest_server:bravia_api
"""

from __future__ import annotations

from fastapi import FastAPI

import os
import json

from contextlib import asynccontextmanager

from .logger import logger
from ..internal_types import *
from ..exceptions import BraviaError, BraviaConfigError
from ..client import bravia_connect, BraviaClientConfig

from .api import (
    router as api_router,
    bravia_error_handler,
    get_bravia_client,
    get_bravia_config,
  )

DEFAULT_CONFIG_FILE = "bravia_config.json"

def load_raw_config() -> JsonableDict:
    """Loads the server config from $BRAVIA_CONFIG, or ./bravia_config.json if it exists."""
    config_file = os.environ.get("BRAVIA_CONFIG", None)
    if config_file is None:
        if os.path.exists(DEFAULT_CONFIG_FILE):
            config_file = DEFAULT_CONFIG_FILE
    if config_file is None:
        return {}
    try:
        with open(config_file, "r") as f:
            raw_config = json.load(f)
    except (OSError, ValueError) as e:
        raise BraviaConfigError(f"Unable to load config file '{config_file}': {e}") from e
    if not isinstance(raw_config, dict):
        raise BraviaConfigError(f"Config file '{config_file}' must contain a JSON object")
    return raw_config

@asynccontextmanager
async def fastapi_lifetime(app: FastAPI) -> AsyncIterator[None]:
    """
    A context manager that initializes and cleans up for FastAPI.
    """
    bravia_client = None
    try:
        logger.info("BRAVIA REST server starting up--initializing...")
        bravia_config = BraviaClientConfig.from_jsonable(load_raw_config())
        app.state.bravia_config = bravia_config
        bravia_client = await bravia_connect(config=bravia_config)
        app.state.bravia_client = bravia_client
        logger.info(f"Serving API for TV at {bravia_client}...")

        logger.info("BRAVIA REST server initialization done; starting server...")
        yield
    finally:
        logger.info("BRAVIA REST server shutting down--cleaning up...")
        if bravia_client is not None:
            await bravia_client.aclose()

bravia_api = FastAPI(lifespan=fastapi_lifetime)
bravia_api.include_router(api_router)
bravia_api.add_exception_handler(BraviaError, bravia_error_handler)
