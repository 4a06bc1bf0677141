import pytest

from unifi_protect_mcp.clients import AuthScheme, NetworkClient, ProtectClient
from unifi_protect_mcp.config import ClientConfig
from unifi_protect_mcp.errors import (
    AuthenticationError,
    RemoteDecodeError,
    RemoteRequestError,
    RemoteTransportError,
)
from unifi_protect_mcp.registry import ToolInvocation
from unifi_protect_mcp.results import ToolError, ToolSuccess
from unifi_protect_mcp.tools import build_registry

PROTECT = '/proxy/protect/integration/v1'
PROTECT_API = '/proxy/protect/api/v1'
NETWORK = '/proxy/network'


def test_auth_families_are_explicit():
    assert ProtectClient.listing_auth is AuthScheme.API_KEY
    assert ProtectClient.resource_auth is AuthScheme.BEARER
    assert NetworkClient.auth_scheme is AuthScheme.API_KEY


def test_authenticate_is_local_check():
    with pytest.raises(AuthenticationError):
        ProtectClient(ClientConfig(base_url='https://console', api_key='')).authenticate()
    ProtectClient(ClientConfig(base_url='https://console', api_key='k')).authenticate()


@pytest.mark.asyncio
async def test_protect_listing_uses_api_key_header(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/cameras', [{'id': 'cam1', 'name': 'Porch', 'unknownField': 1}])
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            cameras = await client.get_cameras()
    assert [c.dump() for c in cameras] == [{'id': 'cam1', 'name': 'Porch'}]
    headers = vendor.last['headers']
    assert headers['X-API-KEY'] == 'secret-key'
    assert 'Authorization' not in headers
    assert headers['Accept'] == 'application/json'


@pytest.mark.asyncio
async def test_protect_detail_uses_bearer_header(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/cameras/cam1', {'id': 'cam1', 'isMicEnabled': True})
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            camera = await client.get_camera_detailed('cam1')
    assert camera == {'id': 'cam1', 'isMicEnabled': True}
    headers = vendor.last['headers']
    assert headers['Authorization'] == 'Bearer secret-key'
    assert 'X-API-KEY' not in headers


@pytest.mark.asyncio
async def test_protect_patch_unwraps_data(vendor, serve_vendor):
    vendor.add('PATCH', f'{PROTECT_API}/viewers/v1', {'data': {'id': 'v1', 'liveview': 'lv2'}})
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            viewer = await client.patch_viewer('v1', {'liveview': 'lv2'})
    assert viewer == {'id': 'v1', 'liveview': 'lv2'}
    assert vendor.last['body'] == {'liveview': 'lv2'}
    assert vendor.last['headers']['Content-Type'] == 'application/json'
    assert vendor.last['headers']['Authorization'] == 'Bearer secret-key'


@pytest.mark.asyncio
async def test_ptz_patrol_path_includes_slot(vendor, serve_vendor):
    vendor.add('POST', f'{PROTECT_API}/cameras/cam1/ptz/patrol/start/0', {'data': {}})
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            assert await client.camera_start_ptz_patrol('cam1', 0) == {}
    assert vendor.last['path'] == f'{PROTECT_API}/cameras/cam1/ptz/patrol/start/0'


@pytest.mark.asyncio
async def test_events_pass_pagination(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/events', [{'id': 'e1', 'type': 'motion', 'timestamp': '2024-01-01T00:00:00Z'}])
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            events = await client.get_events(10, 20)
    assert len(events) == 1
    assert vendor.last['query'] == {'limit': '10', 'offset': '20'}


@pytest.mark.asyncio
async def test_events_404_is_empty(vendor, serve_vendor):
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            assert await client.get_events() == []


@pytest.mark.asyncio
async def test_404_elsewhere_is_an_error(vendor, serve_vendor):
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            with pytest.raises(RemoteRequestError) as exc_info:
                await client.get_cameras()
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_non_2xx_raises_with_body(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/cameras', 'boom', status=500)
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            with pytest.raises(RemoteRequestError) as exc_info:
                await client.get_cameras()
    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == 'request failed with status 500: boom'


@pytest.mark.asyncio
async def test_undecodable_error_body_keeps_status(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/cameras', b'\xff\xfe boom', status=500)
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            with pytest.raises(RemoteRequestError) as exc_info:
                await client.get_cameras()
    assert exc_info.value.status_code == 500
    assert 'boom' in str(exc_info.value)


@pytest.mark.asyncio
async def test_undecodable_success_body_raises_decode_error(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/meta/info', b'\xff\xfe{}')
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            with pytest.raises(RemoteDecodeError):
                await client.get_system_info()


@pytest.mark.asyncio
async def test_malformed_json_raises_decode_error(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/meta/info', '{not json')
    async with serve_vendor() as cfg:
        async with ProtectClient(cfg) as client:
            with pytest.raises(RemoteDecodeError):
                await client.get_system_info()


@pytest.mark.asyncio
async def test_unreachable_host_raises_transport_error():
    cfg = ClientConfig(base_url='http://127.0.0.1:1', api_key='k', timeout=2)
    async with ProtectClient(cfg) as client:
        with pytest.raises(RemoteTransportError):
            await client.get_cameras()


@pytest.mark.asyncio
async def test_network_sites_unwrap_data(vendor, serve_vendor):
    vendor.add('GET', f'{NETWORK}/api/self/sites', {'data': [{'_id': 's1', 'name': 'default'}]})
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            sites = await client.get_sites()
    assert sites[0].id == 's1'
    assert vendor.last['headers']['X-API-KEY'] == 'secret-key'


@pytest.mark.asyncio
async def test_network_info_is_bare(vendor, serve_vendor):
    vendor.add('GET', f'{NETWORK}/integration/v1/info', {'applicationVersion': '9.0.1'})
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            assert await client.get_info() == {'applicationVersion': '9.0.1'}


@pytest.mark.asyncio
async def test_network_missing_data_is_empty(vendor, serve_vendor):
    vendor.add('GET', f'{NETWORK}/api/s/default/rest/tag', {'meta': {'rc': 'ok'}})
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            assert await client.get_device_tags('default') == []


@pytest.mark.asyncio
async def test_network_health_first_entry(vendor, serve_vendor):
    vendor.add('GET', f'{NETWORK}/integration/v1/sites/default/health', {'data': [{'subsystem': 'wan'}, {'x': 1}]})
    vendor.add('GET', f'{NETWORK}/integration/v1/sites/empty/health', {'data': []})
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            assert await client.get_health('default') == {'subsystem': 'wan'}
            assert await client.get_health('empty') == {}


@pytest.mark.asyncio
async def test_network_device_detail_filters_by_id(vendor, serve_vendor):
    vendor.add('GET', f'{NETWORK}/api/s/default/stat/device',
               {'data': [{'_id': 'd1', 'name': 'AP'}, {'_id': 'd2', 'name': 'Switch'}]})
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            assert await client.get_device_detailed('default', 'd2') == {'_id': 'd2', 'name': 'Switch'}
            with pytest.raises(RemoteRequestError) as exc_info:
                await client.get_device_detailed('default', 'missing')
    assert 'device not found: missing' in str(exc_info.value)


@pytest.mark.asyncio
async def test_network_endpoint_health_reports_status(vendor, serve_vendor):
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            unhealthy = await client.check_endpoint_health()
            vendor.add('GET', f'{NETWORK}/integration/v1/info', {'data': {'version': '9.0'}})
            healthy = await client.check_endpoint_health()
    assert unhealthy == {'status': 'unhealthy', 'code': 404, 'error': 'not found'}
    assert healthy == {'status': 'healthy', 'code': 200, 'version': '9.0'}


@pytest.mark.asyncio
async def test_network_endpoint_health_tolerates_undecodable_body(vendor, serve_vendor):
    vendor.add('GET', f'{NETWORK}/integration/v1/info', b'\xff\xfe boom', status=500)
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            health = await client.check_endpoint_health()
    assert health['status'] == 'unhealthy'
    assert health['code'] == 500
    assert health['error'].endswith(' boom')


@pytest.mark.asyncio
async def test_network_create_posts_config(vendor, serve_vendor):
    vendor.add('POST', f'{NETWORK}/api/s/default/rest/firewallzone', {'data': {'_id': 'z1'}}, status=201)
    async with serve_vendor() as cfg:
        async with NetworkClient(cfg) as client:
            assert await client.create_firewall_zone('default', {'name': 'iot'}) == {'_id': 'z1'}
    assert vendor.last['body'] == {'name': 'iot'}


@pytest.mark.asyncio
async def test_events_tool_end_to_end_on_old_controller(vendor, serve_vendor):
    async with serve_vendor() as cfg:
        protect, network = ProtectClient(cfg), NetworkClient(cfg)
        registry = build_registry(protect, network)
        try:
            result = await registry.dispatch(ToolInvocation('get_protect_events', {}))
        finally:
            await protect.close()
            await network.close()
    assert result == ToolSuccess({'events': [], 'count': 0, 'limit': 50, 'offset': 0})


@pytest.mark.asyncio
async def test_cameras_tool_end_to_end_on_server_error(vendor, serve_vendor):
    vendor.add('GET', f'{PROTECT}/cameras', 'boom', status=500)
    async with serve_vendor() as cfg:
        protect, network = ProtectClient(cfg), NetworkClient(cfg)
        registry = build_registry(protect, network)
        try:
            result = await registry.dispatch(ToolInvocation('get_protect_cameras', {}))
        finally:
            await protect.close()
            await network.close()
    assert isinstance(result, ToolError)
    assert result.cause == 'request failed with status 500: boom'
