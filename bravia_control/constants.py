# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by bravia_control"""

DEFAULT_PORT = 80
"""The HTTP port number used by the TV for the Scalar Web API and IRCC."""

DEFAULT_PSK = "0000"
"""The pre-shared key used when none is configured."""

DEFAULT_TIMEOUT = 5.0
"""The default timeout for a single HTTP request to the TV, in seconds."""

DEFAULT_COMMAND_INTERVAL = 0.35
"""The pause after each IRCC code sent by send_commands(), in seconds."""

DEFAULT_DISCOVERY_TIMEOUT = 3.0
"""The length of an SSDP discovery scan, in seconds."""

DEFAULT_API_VERSION = "1.0"
"""The Scalar Web API version used for methods the TV does not advertise."""

REQUEST_ID = 1337
"""The JSON request id. The TV echoes it back but does not require it to be unique."""

API_PATH_PREFIX = "/sony"
"""All API endpoints live below this path."""

IRCC_PATH = "/IRCC"
"""Path (below API_PATH_PREFIX) of the legacy IRCC SOAP endpoint."""

IRCC_SERVICE_TYPE = "urn:schemas-sony-com:service:IRCC:1"
"""UPnP service type of the IRCC service; also the SSDP search target."""

IRCC_SOAP_ACTION = f'"{IRCC_SERVICE_TYPE}#X_SendIRCC"'
"""Value of the SOAPACTION header for IRCC submissions. The quotes are part of the value."""

PSK_HEADER = "X-Auth-PSK"
"""HTTP header carrying the pre-shared key."""

SSDP_MX = 1
"""Maximum response delay requested from responders, in seconds."""
