"""Client for the UniFi Network API."""

import json
import logging
from typing import Any, Dict, List

from ..errors import RemoteRequestError
from ..models import NetworkDevice, NetworkSite, VPNServer, WiFiNetwork, parse_resources
from .base import AuthScheme, Envelope, UnifiBaseClient, body_text, path_segment as _segment

logger = logging.getLogger(__name__)

ROOT = '/proxy/network'
INTEGRATION = f'{ROOT}/integration/v1'


def _site(site_id: str) -> str:
    return f'{ROOT}/api/s/{_segment(site_id)}'


def _integration_site(site_id: str) -> str:
    return f'{INTEGRATION}/sites/{_segment(site_id)}'


class NetworkClient(UnifiBaseClient):
    """UniFi Network endpoints. Every endpoint takes the ``X-API-KEY`` header
    and, apart from ``/info``, wraps its payload under ``data``."""

    service_name = 'network'

    auth_scheme = AuthScheme.API_KEY
    envelope = Envelope.DATA

    async def _list(self, path: str, **kwargs) -> List[Dict[str, Any]]:
        return await self._fetch_list(path, auth=self.auth_scheme, envelope=self.envelope, **kwargs)

    async def _object(self, path: str) -> Dict[str, Any]:
        return await self._fetch_object(path, auth=self.auth_scheme, envelope=self.envelope)

    async def _patch(self, path: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate('PATCH', path, settings, auth=self.auth_scheme, envelope=self.envelope)

    async def _create(self, path: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate('POST', path, config, auth=self.auth_scheme, envelope=self.envelope)

    # Controller

    async def get_info(self) -> Dict[str, Any]:
        logger.debug("Fetching UniFi Network info")
        return await self._fetch_object(f'{INTEGRATION}/info', auth=self.auth_scheme, envelope=Envelope.BARE)

    async def check_endpoint_health(self) -> Dict[str, Any]:
        """Probe the controller. HTTP failures are reported, only transport failures raise."""
        logger.debug("Performing health check on UniFi Network endpoint")
        status, raw = await self._send('GET', f'{INTEGRATION}/info', auth=self.auth_scheme)
        health: Dict[str, Any] = {'status': 'healthy', 'code': status}
        if not 200 <= status < 300:
            health['status'] = 'unhealthy'
            health['error'] = body_text(raw)
            logger.warning(f"Network endpoint health check failed with status {status}")
            return health
        try:
            text = raw.decode('utf-8')
            body = json.loads(text) if text.strip() else {}
        except ValueError:
            health['status'] = 'unhealthy'
            health['error'] = 'Failed to decode response'
            return health
        data = body.get('data') if isinstance(body, dict) else None
        if isinstance(data, dict) and data:
            health['version'] = data.get('version')
        return health

    async def get_sites(self) -> List[NetworkSite]:
        logger.debug("Fetching sites from UniFi Network")
        sites = parse_resources(NetworkSite, await self._list(f'{ROOT}/api/self/sites'))
        logger.debug(f"Retrieved {len(sites)} sites")
        return sites

    async def get_pending_devices(self) -> List[Dict[str, Any]]:
        return await self._list(f'{INTEGRATION}/pending-devices')

    async def get_dpi_categories(self) -> List[Dict[str, Any]]:
        return await self._list(f'{INTEGRATION}/dpi/categories')

    async def get_dpi_applications(self) -> List[Dict[str, Any]]:
        return await self._list(f'{ROOT}/api/v1/dpi/applications')

    # Devices and clients

    async def get_devices(self, site_id: str) -> List[NetworkDevice]:
        logger.debug(f"Fetching devices for site {site_id}")
        devices = parse_resources(NetworkDevice, await self._list(f'{_site(site_id)}/stat/device'))
        logger.debug(f"Retrieved {len(devices)} devices")
        return devices

    async def get_device_detailed(self, site_id: str, device_id: str) -> Dict[str, Any]:
        for device in await self.get_devices(site_id):
            if device.id == device_id:
                return device.dump()
        raise RemoteRequestError(404, f"device not found: {device_id}")

    async def get_health(self, site_id: str) -> Dict[str, Any]:
        entries = await self._list(f'{_integration_site(site_id)}/health')
        return entries[0] if entries else {}

    async def get_clients(self, site_id: str, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        logger.debug(f"Fetching clients for site {site_id} (limit={limit}, offset={offset})")
        return await self._list(f'{_site(site_id)}/stat/sta', params={'limit': limit, 'offset': offset})

    async def get_client_detailed(self, site_id: str, mac: str) -> Dict[str, Any]:
        return await self._object(f'{_integration_site(site_id)}/clients/{_segment(mac)}')

    async def get_device_tags(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_site(site_id)}/rest/tag')

    async def get_wan_config(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_site(site_id)}/rest/wanconf')

    async def get_radius_profiles(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_site(site_id)}/rest/radiusprofile')

    # WiFi

    async def get_wifi_networks(self, site_id: str) -> List[WiFiNetwork]:
        return parse_resources(WiFiNetwork, await self._list(f'{_site(site_id)}/rest/networkconf'))

    async def get_wifi_network_detailed(self, site_id: str, network_id: str) -> Dict[str, Any]:
        return await self._object(f'{_site(site_id)}/rest/networkconf/{_segment(network_id)}')

    async def patch_wifi_network(self, site_id: str, network_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch(f'{_site(site_id)}/rest/networkconf/{_segment(network_id)}', settings)

    async def create_wifi_network(self, site_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create(f'{_site(site_id)}/rest/networkconf', config)

    async def get_wifi_broadcasts(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_integration_site(site_id)}/wifi/broadcasts')

    # Firewall zones

    async def get_firewall_zones(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_integration_site(site_id)}/firewall/zones')

    async def get_firewall_zone_detailed(self, site_id: str, zone_id: str) -> Dict[str, Any]:
        return await self._object(f'{_site(site_id)}/rest/firewallzone/{_segment(zone_id)}')

    async def patch_firewall_zone(self, site_id: str, zone_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch(f'{_site(site_id)}/rest/firewallzone/{_segment(zone_id)}', settings)

    async def create_firewall_zone(self, site_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create(f'{_site(site_id)}/rest/firewallzone', config)

    # ACL rules

    async def get_acl_rules(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_integration_site(site_id)}/acl-rules')

    async def get_acl_rule_detailed(self, site_id: str, rule_id: str) -> Dict[str, Any]:
        return await self._object(f'{_site(site_id)}/rest/rule/{_segment(rule_id)}')

    async def patch_acl_rule(self, site_id: str, rule_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch(f'{_site(site_id)}/rest/rule/{_segment(rule_id)}', settings)

    async def create_acl_rule(self, site_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create(f'{_site(site_id)}/rest/rule', config)

    # Hotspot vouchers

    async def get_hotspot_vouchers(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_integration_site(site_id)}/hotspot/vouchers')

    async def get_hotspot_voucher_detailed(self, site_id: str, voucher_id: str) -> Dict[str, Any]:
        return await self._object(f'{_site(site_id)}/rest/hotspotop/{_segment(voucher_id)}')

    async def patch_hotspot_voucher(self, site_id: str, voucher_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch(f'{_site(site_id)}/rest/hotspotop/{_segment(voucher_id)}', settings)

    async def create_hotspot_voucher(self, site_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create(f'{_site(site_id)}/rest/hotspotop', config)

    # Traffic rules

    async def get_traffic_rules(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_site(site_id)}/rest/trafficrule')

    async def get_traffic_rule_detailed(self, site_id: str, rule_id: str) -> Dict[str, Any]:
        return await self._object(f'{_site(site_id)}/rest/trafficrule/{_segment(rule_id)}')

    async def patch_traffic_rule(self, site_id: str, rule_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch(f'{_site(site_id)}/rest/trafficrule/{_segment(rule_id)}', settings)

    async def create_traffic_rule(self, site_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create(f'{_site(site_id)}/rest/trafficrule', config)

    # VPN

    async def get_vpn_servers(self, site_id: str) -> List[VPNServer]:
        return parse_resources(VPNServer, await self._list(f'{_integration_site(site_id)}/vpn/servers'))

    async def get_vpn_tunnels(self, site_id: str) -> List[Dict[str, Any]]:
        return await self._list(f'{_site(site_id)}/rest/vpnserverconfig')

    async def create_vpn_tunnel(self, site_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._create(f'{_site(site_id)}/rest/vpnserverconfig', config)


__all__ = ['NetworkClient']
