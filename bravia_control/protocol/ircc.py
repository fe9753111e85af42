# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Legacy IRCC (infrared-compatible remote control code) encoding.

IRCC codes are base64-shaped strings that each correspond to one button on the
physical remote. They are submitted in a SOAP 1.1 envelope to /sony/IRCC.
Failures are reported as a SOAP fault carrying a UPnPError, e.g.:

    <s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
      <s:Body>
        <s:Fault>
          <faultcode>s:Client</faultcode>
          <faultstring>UPnPError</faultstring>
          <detail>
            <UPnPError xmlns="urn:schemas-upnp-org:control-1-0">
              <errorCode>401</errorCode>
              <errorDescription>Invalid Action</errorDescription>
            </UPnPError>
          </detail>
        </s:Fault>
      </s:Body>
    </s:Envelope>
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

import lxml.etree

from ..internal_types import *
from ..constants import IRCC_SERVICE_TYPE

IRCC_CODE_RE = re.compile(r'^A{5}[a-zA-Z0-9]{13}={2}$')
"""Shape of a literal IRCC code: "AAAAA" + 13 alphanumerics + "=="."""

_ENVELOPE_TEMPLATE = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
    <s:Body>
        <u:X_SendIRCC xmlns:u="{service_type}">
            <IRCCCode>{code}</IRCCCode>
        </u:X_SendIRCC>
    </s:Body>
</s:Envelope>"""

def is_ircc_code(code_or_name: str) -> bool:
    """Returns True iff the string is a literal IRCC code rather than a command name."""
    return IRCC_CODE_RE.match(code_or_name) is not None

class IrccCode:
    """One entry of the TV's remote controller command table."""
    name: str
    value: str

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    @classmethod
    def from_jsonable(cls, data: Mapping[str, Any]) -> Self:
        return cls(str(data['name']), str(data['value']))

    def to_jsonable(self) -> JsonableDict:
        return dict(name=self.name, value=self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IrccCode) and other.name == self.name and other.value == self.value

    def __hash__(self) -> int:
        return hash((self.name, self.value))

    def __str__(self) -> str:
        return f"IrccCode({self.name}={self.value})"

    def __repr__(self) -> str:
        return str(self)

def build_ircc_envelope(code: str) -> str:
    """Builds the SOAP request body that submits one IRCC code."""
    return _ENVELOPE_TEMPLATE.format(service_type=IRCC_SERVICE_TYPE, code=escape(code))

def _parse_xml(body: str) -> lxml.etree._Element:
    parser = lxml.etree.XMLParser(resolve_entities=False, no_network=True)
    return lxml.etree.fromstring(body.encode('utf-8'), parser=parser)  # pylint: disable=c-extension-no-member

def _local_text(elem: lxml.etree._Element, local_name: str) -> Optional[str]:
    matches = elem.xpath(f'.//*[local-name()="{local_name}"]')
    if len(matches) == 0 or matches[0].text is None:
        return None
    return matches[0].text.strip()

def parse_ircc_fault(body: str) -> Optional[Tuple[Optional[int], str]]:
    """Decodes a SOAP fault from an IRCC response body.

    Returns (error_code, error_description) if the body is a SOAP fault, or None
    if it is well-formed XML that is not a fault.

    Raises ValueError if the body is not well-formed XML, or is a fault that
    carries no description.
    """
    try:
        root = _parse_xml(body)
    except lxml.etree.XMLSyntaxError as e:  # pylint: disable=c-extension-no-member
        raise ValueError(f"Failed to parse the IRCC response: {e}") from e
    faults = root.xpath('//*[local-name()="Fault"]')
    if len(faults) == 0:
        return None
    fault = faults[0]
    description = _local_text(fault, "errorDescription")
    if description is None:
        description = _local_text(fault, "faultstring")
    if description is None:
        raise ValueError("SOAP fault without an error description")
    error_code: Optional[int] = None
    code_str = _local_text(fault, "errorCode")
    if code_str is not None:
        try:
            error_code = int(code_str)
        except ValueError:
            pass
    return (error_code, description)
