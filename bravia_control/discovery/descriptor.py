# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
UPnP device descriptor decoding.

An SSDP responder's LOCATION header points to an XML device descriptor:

    <root xmlns="urn:schemas-upnp-org:device-1-0">
      <device>
        <friendlyName>Living Room TV</friendlyName>
        <manufacturer>Sony Corporation</manufacturer>
        <manufacturerURL>http://www.sony.net/</manufacturerURL>
        <modelName>FW-55BZ35F</modelName>
        <UDN>uuid:...</UDN>
        <serviceList>
          <service>
            <serviceType>urn:schemas-sony-com:service:IRCC:1</serviceType>
            <controlURL>http://192.168.1.20:80/sony/IRCC</controlURL>
          </service>
        </serviceList>
      </device>
    </root>
"""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit

import lxml.etree

from ..internal_types import *
from ..constants import DEFAULT_PORT, IRCC_SERVICE_TYPE
from ..exceptions import MalformedResponseError

DESCRIPTOR_OPERATION = "discover"

class DiscoveredDevice:
    """A BRAVIA TV found by SSDP discovery."""

    host: str
    port: int
    friendly_name: str
    manufacturer: str
    manufacturer_url: Optional[str]
    model_name: Optional[str]
    udn: str
    location: str
    """URL of the device descriptor the device was decoded from."""

    def __init__(
            self,
            host: str,
            port: int,
            friendly_name: str,
            manufacturer: str,
            udn: str,
            location: str,
            manufacturer_url: Optional[str]=None,
            model_name: Optional[str]=None,
          ):
        self.host = host
        self.port = port
        self.friendly_name = friendly_name
        self.manufacturer = manufacturer
        self.manufacturer_url = manufacturer_url
        self.model_name = model_name
        self.udn = udn
        self.location = location

    def matches(self, name: str) -> bool:
        """Returns True if name is this device's friendly name, UDN or IP address."""
        return name in (self.friendly_name, self.udn, self.host)

    def to_jsonable(self) -> JsonableDict:
        return dict(
            host=self.host,
            port=self.port,
            friendly_name=self.friendly_name,
            manufacturer=self.manufacturer,
            manufacturer_url=self.manufacturer_url,
            model_name=self.model_name,
            udn=self.udn,
            location=self.location,
          )

    def __str__(self) -> str:
        return f"DiscoveredDevice('{self.friendly_name}' {self.host}:{self.port} {self.udn})"

    def __repr__(self) -> str:
        return str(self)

def _child(elem: lxml.etree._Element, local_name: str) -> Optional[lxml.etree._Element]:
    children = elem.xpath(f'./*[local-name()="{local_name}"]')
    return children[0] if len(children) > 0 else None

def _child_text(elem: lxml.etree._Element, local_name: str) -> Optional[str]:
    child = _child(elem, local_name)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text if text != '' else None

def parse_device_descriptor(body: str, location: str) -> Optional[DiscoveredDevice]:
    """Decodes a UPnP device descriptor fetched from location.

    Returns None if the device does not offer the IRCC service (including
    devices with no serviceList at all).

    Raises MalformedResponseError if the body is not XML, or if an IRCC device
    lacks a required field.
    """
    parser = lxml.etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = lxml.etree.fromstring(body.encode('utf-8'), parser=parser)  # pylint: disable=c-extension-no-member
    except lxml.etree.XMLSyntaxError as e:  # pylint: disable=c-extension-no-member
        raise MalformedResponseError(
            DESCRIPTOR_OPERATION, body, detail="Failed to parse the discovery response") from e

    device = _child(root, "device")
    if device is None:
        raise MalformedResponseError(DESCRIPTOR_OPERATION, body, detail="Unexpected or malformed discovery response")

    service_list = _child(device, "serviceList")
    if service_list is None:
        # Not every SSDP responder has a serviceList (e.g., some bridges and hubs)
        return None

    control_url: Optional[str] = None
    for service in service_list.xpath('./*[local-name()="service"]'):
        if _child_text(service, "serviceType") == IRCC_SERVICE_TYPE:
            control_url = _child_text(service, "controlURL")
            if control_url is None:
                raise MalformedResponseError(
                    DESCRIPTOR_OPERATION, body, detail="IRCC service without a controlURL")
            break
    else:
        return None

    friendly_name = _child_text(device, "friendlyName")
    manufacturer = _child_text(device, "manufacturer")
    udn = _child_text(device, "UDN")
    if friendly_name is None or manufacturer is None or udn is None:
        raise MalformedResponseError(DESCRIPTOR_OPERATION, body, detail="Unexpected or malformed discovery response")

    try:
        url = urlsplit(urljoin(location, control_url))
        host = url.hostname
        port = url.port
    except ValueError as e:
        raise MalformedResponseError(DESCRIPTOR_OPERATION, body, detail=f"Invalid controlURL '{control_url}'") from e
    if host is None or host == '':
        raise MalformedResponseError(DESCRIPTOR_OPERATION, body, detail=f"Invalid controlURL '{control_url}'")

    return DiscoveredDevice(
        host=host,
        port=DEFAULT_PORT if port is None else port,
        friendly_name=friendly_name,
        manufacturer=manufacturer,
        udn=udn,
        location=location,
        manufacturer_url=_child_text(device, "manufacturerURL"),
        model_name=_child_text(device, "modelName"),
      )
