"""UniFi Network tools. Every site-scoped tool takes an optional ``site_id`` (default ``default``)."""

from typing import Any, Awaitable, Callable, Dict, List

from ..arguments import ToolArguments
from ..clients.network import NetworkClient
from ..results import listing
from .base import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    DEFAULT_SITE,
    Toolset,
    input_schema,
    integer_param,
    object_param,
    plain,
    string_param,
    tool_handler,
)

SITE_PARAM = {'site_id': string_param(f"Site ID (optional, default '{DEFAULT_SITE}')")}


def _site_id(args: ToolArguments) -> str:
    return args.optional_string('site_id', DEFAULT_SITE)


class NetworkToolset(Toolset):
    client: NetworkClient

    def _list_tool(self, name: str, description: str, key: str, action: str,
                   fetch: Callable[..., Awaitable[List[Any]]], *, site: bool = True) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            site_args = (_site_id(args),) if site else ()
            self.client.authenticate()
            return listing(key, plain(await fetch(*site_args)))

        self.add(name, description, input_schema(SITE_PARAM if site else None), handler)

    def _detail_tool(self, name: str, description: str, param: str, label: str, action: str,
                     fetch: Callable[[str, str], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            site_id = _site_id(args)
            resource_id = args.string(param)
            self.client.authenticate()
            return await fetch(site_id, resource_id)

        self.add(name, description, input_schema({**SITE_PARAM, param: string_param(label)}, [param]), handler)

    def _patch_tool(self, name: str, description: str, param: str, label: str, action: str,
                    patch: Callable[[str, str, Dict[str, Any]], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            site_id = _site_id(args)
            resource_id = args.string(param)
            settings = args.mapping('settings', required=True)
            self.client.authenticate()
            return await patch(site_id, resource_id, settings)

        schema = input_schema({
            **SITE_PARAM,
            param: string_param(label),
            'settings': object_param('Settings to update'),
        }, [param, 'settings'])
        self.add(name, description, schema, handler)

    def _create_tool(self, name: str, description: str, config_label: str, action: str,
                     create: Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            site_id = _site_id(args)
            config = args.mapping('config')
            self.client.authenticate()
            return await create(site_id, config)

        self.add(name, description, input_schema({**SITE_PARAM, 'config': object_param(config_label)}), handler)

    def build(self) -> None:
        client = self.client

        # Controller
        @tool_handler('get_network_info', 'get network info')
        async def get_network_info(args: ToolArguments):
            client.authenticate()
            return await client.get_info()

        self.add('get_network_info', 'Get UniFi Network application information', input_schema(), get_network_info)

        @tool_handler('check_network_endpoint_health', 'check network endpoint health')
        async def check_network_endpoint_health(args: ToolArguments):
            client.authenticate()
            return await client.check_endpoint_health()

        self.add('check_network_endpoint_health', 'Check reachability and status of the UniFi Network endpoint',
                 input_schema(), check_network_endpoint_health)

        self._list_tool('get_network_sites', 'Get all sites from Unifi Network', 'sites', 'get sites',
                        client.get_sites, site=False)

        # Devices, health, clients
        self._list_tool('get_network_devices', 'Get all devices of a site', 'devices', 'get devices',
                        client.get_devices)
        self._detail_tool('get_network_device_detailed', 'Get detailed information about a specific device',
                          'device_id', 'Device ID', 'get device details', client.get_device_detailed)

        @tool_handler('get_network_health', 'get network health')
        async def get_network_health(args: ToolArguments):
            site_id = _site_id(args)
            client.authenticate()
            return await client.get_health(site_id)

        self.add('get_network_health', 'Get the health summary of a site', input_schema(SITE_PARAM),
                 get_network_health)

        @tool_handler('get_network_clients', 'get clients')
        async def get_network_clients(args: ToolArguments):
            site_id = _site_id(args)
            limit = args.integer('limit', DEFAULT_LIMIT)
            offset = args.integer('offset', DEFAULT_OFFSET)
            client.authenticate()
            clients = await client.get_clients(site_id, limit, offset)
            return listing('clients', clients, limit=limit, offset=offset)

        self.add('get_network_clients', 'Get connected clients of a site', input_schema({
            **SITE_PARAM,
            'limit': integer_param('Number of clients to retrieve (optional, default 50)', default=DEFAULT_LIMIT),
            'offset': integer_param('Offset for pagination (optional, default 0)', default=DEFAULT_OFFSET),
        }), get_network_clients)

        self._detail_tool('get_network_client_detailed', 'Get detailed information about a connected client',
                          'mac', 'Client MAC address', 'get client details', client.get_client_detailed)

        # WiFi
        self._list_tool('get_network_wifi_networks', 'Get WiFi networks of a site', 'networks',
                        'get WiFi networks', client.get_wifi_networks)
        self._detail_tool('get_network_wifi_network_detailed', 'Get details of a specific WiFi network',
                          'network_id', 'Network ID', 'get WiFi network details', client.get_wifi_network_detailed)
        self._patch_tool('patch_network_wifi_network', 'Update WiFi network settings', 'network_id', 'Network ID',
                         'update WiFi network', client.patch_wifi_network)
        self._create_tool('create_network_wifi_network', 'Create a new WiFi network', 'WiFi network configuration',
                          'create WiFi network', client.create_wifi_network)
        self._list_tool('get_network_wifi_broadcasts', 'Get WiFi broadcasts (SSIDs) of a site', 'broadcasts',
                        'get WiFi broadcasts', client.get_wifi_broadcasts)

        # Firewall zones
        self._list_tool('get_network_firewall_zones', 'Get firewall zones of a site', 'zones',
                        'get firewall zones', client.get_firewall_zones)
        self._detail_tool('get_network_firewall_zone_detailed', 'Get details of a specific firewall zone',
                          'zone_id', 'Firewall zone ID', 'get firewall zone details', client.get_firewall_zone_detailed)
        self._patch_tool('patch_network_firewall_zone', 'Update firewall zone settings', 'zone_id',
                         'Firewall zone ID', 'update firewall zone', client.patch_firewall_zone)
        self._create_tool('create_network_firewall_zone', 'Create a new firewall zone', 'Firewall zone configuration',
                          'create firewall zone', client.create_firewall_zone)

        # ACL rules
        self._list_tool('get_network_acl_rules', 'Get ACL rules of a site', 'rules', 'get ACL rules',
                        client.get_acl_rules)
        self._detail_tool('get_network_acl_rule_detailed', 'Get details of a specific ACL rule', 'rule_id',
                          'ACL rule ID', 'get ACL rule details', client.get_acl_rule_detailed)
        self._patch_tool('patch_network_acl_rule', 'Update an ACL rule', 'rule_id', 'ACL rule ID',
                         'update ACL rule', client.patch_acl_rule)
        self._create_tool('create_network_acl_rule', 'Create a new ACL rule', 'ACL rule configuration',
                          'create ACL rule', client.create_acl_rule)

        # Hotspot vouchers
        self._list_tool('get_network_hotspot_vouchers', 'Get hotspot vouchers of a site', 'vouchers',
                        'get hotspot vouchers', client.get_hotspot_vouchers)
        self._detail_tool('get_network_hotspot_voucher_detailed', 'Get details of a specific hotspot voucher',
                          'voucher_id', 'Voucher ID', 'get hotspot voucher details',
                          client.get_hotspot_voucher_detailed)
        self._patch_tool('patch_network_hotspot_voucher', 'Update a hotspot voucher', 'voucher_id', 'Voucher ID',
                         'update hotspot voucher', client.patch_hotspot_voucher)
        self._create_tool('create_network_hotspot_voucher', 'Create a new hotspot voucher',
                          'Hotspot voucher configuration', 'create hotspot voucher', client.create_hotspot_voucher)

        # Traffic rules
        self._list_tool('get_network_traffic_rules', 'Get traffic matching rules of a site', 'rules',
                        'get traffic rules', client.get_traffic_rules)
        self._detail_tool('get_network_traffic_rule_detailed', 'Get details of a specific traffic rule', 'rule_id',
                          'Traffic rule ID', 'get traffic rule details', client.get_traffic_rule_detailed)
        self._patch_tool('patch_network_traffic_rule', 'Update a traffic matching rule', 'rule_id', 'Traffic rule ID',
                         'update traffic rule', client.patch_traffic_rule)
        self._create_tool('create_network_traffic_rule', 'Create a new traffic matching rule',
                          'Traffic rule configuration', 'create traffic rule', client.create_traffic_rule)

        # VPN
        self._list_tool('get_network_vpn_servers', 'Get VPN servers of a site', 'servers', 'get VPN servers',
                        client.get_vpn_servers)
        self._list_tool('get_network_vpn_tunnels', 'Get site-to-site VPN tunnels of a site', 'tunnels',
                        'get VPN tunnels', client.get_vpn_tunnels)
        self._create_tool('create_network_vpn_tunnel', 'Create a new site-to-site VPN tunnel',
                          'VPN tunnel configuration', 'create VPN tunnel', client.create_vpn_tunnel)

        # Inventory and configuration
        self._list_tool('get_network_pending_devices', 'Get devices pending adoption', 'devices',
                        'get pending devices', client.get_pending_devices, site=False)
        self._list_tool('get_network_dpi_categories', 'Get DPI categories', 'categories',
                        'get DPI categories', client.get_dpi_categories, site=False)
        self._list_tool('get_network_dpi_applications', 'Get DPI applications', 'applications',
                        'get DPI applications', client.get_dpi_applications, site=False)
        self._list_tool('get_network_device_tags', 'Get device tags of a site', 'tags', 'get device tags',
                        client.get_device_tags)
        self._list_tool('get_network_wan_config', 'Get WAN configuration of a site', 'wan_configs',
                        'get WAN configuration', client.get_wan_config)
        self._list_tool('get_network_radius_profiles', 'Get RADIUS profiles of a site', 'profiles',
                        'get RADIUS profiles', client.get_radius_profiles)


__all__ = ['NetworkToolset']
