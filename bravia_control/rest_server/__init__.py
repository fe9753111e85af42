# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A REST FastAPI server that controls a Sony BRAVIA TV.
"""
from .app import bravia_api, get_bravia_client, get_bravia_config
