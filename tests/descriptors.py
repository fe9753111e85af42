#!/usr/bin/env python3
''' sample UPnP device descriptors '''

BRAVIA_DESCRIPTOR = '''<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0" xmlns:av="urn:schemas-sony-com:av">
  <specVersion><major>1</major><minor>0</minor></specVersion>
  <device>
    <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
    <friendlyName>Living Room TV</friendlyName>
    <manufacturer>Sony Corporation</manufacturer>
    <manufacturerURL>http://www.sony.net/</manufacturerURL>
    <modelName>FW-55BZ35F</modelName>
    <UDN>uuid:00000000-0000-1010-8000-0123456789ab</UDN>
    <serviceList>
      <service>
        <serviceType>urn:schemas-upnp-org:service:RenderingControl:1</serviceType>
        <controlURL>/upnp/control/RenderingControl</controlURL>
      </service>
      <service>
        <serviceType>urn:schemas-sony-com:service:IRCC:1</serviceType>
        <serviceId>urn:schemas-sony-com:serviceId:IRCC</serviceId>
        <SCPDURL>/sony/ircc/IRCCSCPD.xml</SCPDURL>
        <controlURL>http://192.168.1.20:80/sony/ircc</controlURL>
        <eventSubURL></eventSubURL>
      </service>
    </serviceList>
  </device>
</root>'''

HUE_DESCRIPTOR = '''<?xml version="1.0" encoding="UTF-8" ?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
  <device>
    <friendlyName>Philips hue (192.168.1.30)</friendlyName>
    <manufacturer>Royal Philips Electronics</manufacturer>
    <UDN>uuid:2f402f80-da50-11e1-9b23-001788255acc</UDN>
  </device>
</root>'''

ROUTER_DESCRIPTOR = '''<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
  <device>
    <friendlyName>Router</friendlyName>
    <manufacturer>Acme</manufacturer>
    <UDN>uuid:router</UDN>
    <serviceList>
      <service>
        <serviceType>urn:schemas-upnp-org:service:Layer3Forwarding:1</serviceType>
        <controlURL>/ctl/L3F</controlURL>
      </service>
    </serviceList>
  </device>
</root>'''


def bravia_descriptor(friendly_name, udn, control_url):
    ''' a BRAVIA descriptor with the given identity and IRCC control URL '''
    return (BRAVIA_DESCRIPTOR
            .replace('Living Room TV', friendly_name)
            .replace('uuid:00000000-0000-1010-8000-0123456789ab', udn)
            .replace('http://192.168.1.20:80/sony/ircc', control_url))
