"""UniFi Protect tools: cameras, sensors, lights, chimes, viewers, live views and events."""

from typing import Any, Awaitable, Callable, Dict, List

from ..arguments import ToolArguments
from ..clients.protect import ProtectClient
from ..results import ToolError, listing
from .base import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    Toolset,
    input_schema,
    integer_param,
    object_param,
    plain,
    string_param,
    tool_handler,
)


class ProtectToolset(Toolset):
    client: ProtectClient

    def _list_tool(self, name: str, description: str, key: str, action: str,
                   fetch: Callable[[], Awaitable[List[Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            self.client.authenticate()
            return listing(key, plain(await fetch()))

        self.add(name, description, input_schema(), handler)

    def _detail_tool(self, name: str, description: str, resource: str, label: str,
                     fetch: Callable[[str], Awaitable[Dict[str, Any]]]) -> None:
        param = f'{resource}_id'

        @tool_handler(name, f'get {resource} details')
        async def handler(args: ToolArguments):
            resource_id = args.string(param, missing_message=f'{param} is required')
            self.client.authenticate()
            return {resource: await fetch(resource_id), param: resource_id}

        self.add(name, description, input_schema({param: string_param(f'{label} ID (required)')}, [param]), handler)

    def _patch_tool(self, name: str, description: str, label: str, action: str,
                    patch: Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            resource_id = args.string('id')
            settings = args.mapping('settings', required=True)
            self.client.authenticate()
            return await patch(resource_id, settings)

        schema = input_schema({
            'id': string_param(f'{label} ID'),
            'settings': object_param(f'{label} settings to update'),
        }, ['id', 'settings'])
        self.add(name, description, schema, handler)

    def _camera_action_tool(self, name: str, description: str, action: str,
                            call: Callable[[str], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            camera_id = args.string('camera_id')
            self.client.authenticate()
            return await call(camera_id)

        self.add(name, description, input_schema({'camera_id': string_param('Camera ID')}, ['camera_id']), handler)

    def _camera_slot_tool(self, name: str, description: str, slot_label: str, action: str,
                          call: Callable[[str, int], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            camera_id = args.string('camera_id')
            slot = args.integer('slot', 0)
            if slot < 0:
                return ToolError("Invalid slot number", code='VALIDATION_ERROR')
            self.client.authenticate()
            return await call(camera_id, slot)

        schema = input_schema({
            'camera_id': string_param('Camera ID'),
            'slot': integer_param(slot_label, default=0),
        }, ['camera_id'])
        self.add(name, description, schema, handler)

    def _camera_config_tool(self, name: str, description: str, config_label: str, action: str,
                            call: Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]) -> None:
        @tool_handler(name, action)
        async def handler(args: ToolArguments):
            camera_id = args.string('camera_id')
            config = args.mapping('config')
            self.client.authenticate()
            return await call(camera_id, config)

        schema = input_schema({
            'camera_id': string_param('Camera ID'),
            'config': object_param(config_label),
        }, ['camera_id'])
        self.add(name, description, schema, handler)

    def build(self) -> None:
        client = self.client

        # Device listings
        self._list_tool('get_protect_cameras', 'Get all cameras from Unifi Protect',
                        'cameras', 'get cameras', client.get_cameras)
        self._list_tool('get_protect_sensors', 'Get all sensors from Unifi Protect',
                        'sensors', 'get sensors', client.get_sensors)
        self._list_tool('get_protect_lights', 'Get all lights from Unifi Protect',
                        'lights', 'get lights', client.get_lights)
        self._list_tool('get_protect_chimes', 'Get all chimes from Unifi Protect',
                        'chimes', 'get chimes', client.get_chimes)
        self._list_tool('get_protect_liveviews', 'Get all live views from Unifi Protect',
                        'liveviews', 'get liveviews', client.get_liveviews)

        # Detail lookups
        self._detail_tool('get_camera_detailed', 'Get detailed information about a specific camera',
                          'camera', 'Camera', client.get_camera_detailed)
        self._detail_tool('get_sensor_detailed', 'Get detailed information about a specific sensor',
                          'sensor', 'Sensor', client.get_sensor_detailed)
        self._detail_tool('get_light_detailed', 'Get detailed information about a specific light',
                          'light', 'Light', client.get_light_detailed)
        self._detail_tool('get_chime_detailed', 'Get detailed information about a specific chime',
                          'chime', 'Chime', client.get_chime_detailed)
        self._detail_tool('get_liveview_detailed', 'Get detailed information about a specific live view',
                          'liveview', 'Live view', client.get_liveview_detailed)

        # System
        @tool_handler('get_protect_info', 'get system info')
        async def get_protect_info(args: ToolArguments):
            client.authenticate()
            info = await client.get_system_info()
            return {
                'version': info.version,
                'application_version': info.application_version,
                'unique_id': info.unique_id,
                'system_type': info.system_type,
            }

        self.add('get_protect_info', 'Get system information from Unifi Protect', input_schema(), get_protect_info)

        @tool_handler('get_protect_nvr', 'get NVR information')
        async def get_protect_nvr(args: ToolArguments):
            client.authenticate()
            return await client.get_nvr()

        self.add('get_protect_nvr', 'Get NVR information from Unifi Protect', input_schema(), get_protect_nvr)

        self._list_tool('get_protect_viewers', 'Get all viewers from Unifi Protect',
                        'viewers', 'get viewers', client.get_viewers)

        @tool_handler('get_protect_viewer_detailed', 'get viewer details')
        async def get_protect_viewer_detailed(args: ToolArguments):
            viewer_id = args.string('id')
            client.authenticate()
            return await client.get_viewer_detailed(viewer_id)

        self.add('get_protect_viewer_detailed', 'Get detailed information about a specific viewer',
                 input_schema({'id': string_param('Viewer ID')}, ['id']), get_protect_viewer_detailed)

        self._patch_tool('patch_protect_viewer', 'Update viewer settings', 'Viewer', 'update viewer',
                         client.patch_viewer)

        # Camera controls
        self._camera_slot_tool('camera_start_ptz_patrol', 'Start a PTZ patrol on a camera',
                               'Patrol slot number', 'start PTZ patrol', client.camera_start_ptz_patrol)
        self._camera_action_tool('camera_stop_ptz_patrol', 'Stop a PTZ patrol on a camera',
                                 'stop PTZ patrol', client.camera_stop_ptz_patrol)
        self._camera_slot_tool('camera_goto_ptz_preset', 'Move camera to a PTZ preset position',
                               'Preset slot number', 'move to PTZ preset', client.camera_goto_ptz_preset)
        self._camera_config_tool('camera_create_rtsps_stream', 'Create an RTSPS stream for a camera',
                                 'RTSPS stream configuration', 'create RTSPS stream',
                                 client.camera_create_rtsps_stream)
        self._camera_config_tool('camera_create_talkback_session', 'Create a talkback session with a camera',
                                 'Talkback session configuration', 'create talkback session',
                                 client.camera_create_talkback_session)
        self._camera_action_tool('camera_disable_mic_permanently', 'Disable microphone permanently on a camera',
                                 'disable microphone', client.camera_disable_mic_permanently)

        @tool_handler('trigger_webhook_alarm', 'trigger webhook alarm')
        async def trigger_webhook_alarm(args: ToolArguments):
            webhook_id = args.string('webhook_id')
            payload = args.mapping('payload')
            client.authenticate()
            return await client.trigger_webhook_alarm(webhook_id, payload)

        self.add('trigger_webhook_alarm', 'Trigger a configured alarm webhook', input_schema({
            'webhook_id': string_param('Webhook ID'),
            'payload': object_param('Alarm trigger payload (optional)'),
        }, ['webhook_id']), trigger_webhook_alarm)

        # Events
        @tool_handler('get_protect_events', 'get events')
        async def get_protect_events(args: ToolArguments):
            limit = args.integer('limit', DEFAULT_LIMIT)
            offset = args.integer('offset', DEFAULT_OFFSET)
            client.authenticate()
            events = await client.get_events(limit, offset)
            return listing('events', plain(events), limit=limit, offset=offset)

        self.add('get_protect_events', 'Get events from Unifi Protect', input_schema({
            'limit': integer_param('Number of events to retrieve (optional, default 50)', default=DEFAULT_LIMIT),
            'offset': integer_param('Offset for pagination (optional, default 0)', default=DEFAULT_OFFSET),
        }), get_protect_events)

        # Remaining client operations
        self._list_tool('get_protect_devices', 'Get all adopted devices from Unifi Protect',
                        'devices', 'get devices', client.get_devices)
        self._patch_tool('patch_protect_camera', 'Update camera settings', 'Camera', 'update camera',
                         client.patch_camera)
        self._patch_tool('patch_protect_sensor', 'Update sensor settings', 'Sensor', 'update sensor',
                         client.patch_sensor)
        self._patch_tool('patch_protect_light', 'Update light settings', 'Light', 'update light',
                         client.patch_light)
        self._patch_tool('patch_protect_chime', 'Update chime settings', 'Chime', 'update chime',
                         client.patch_chime)
        self._patch_tool('patch_protect_liveview', 'Update live view settings', 'Live view', 'update liveview',
                         client.patch_liveview)

        @tool_handler('create_protect_liveview', 'create liveview')
        async def create_protect_liveview(args: ToolArguments):
            config = args.mapping('config')
            client.authenticate()
            return await client.create_liveview(config)

        self.add('create_protect_liveview', 'Create a new live view', input_schema({
            'config': object_param('Live view configuration'),
        }), create_protect_liveview)


__all__ = ['ProtectToolset']
