"""Client for the UniFi Protect (camera / sensor / light / chime) API."""

import logging
from typing import Any, Dict, List

from ..models import (
    ProtectCamera,
    ProtectChime,
    ProtectDevice,
    ProtectEvent,
    ProtectLight,
    ProtectSensor,
    ProtectSystemInfo,
    parse_resource,
    parse_resources,
)
from .base import AuthScheme, Envelope, UnifiBaseClient, path_segment as _segment

logger = logging.getLogger(__name__)

INTEGRATION = '/proxy/protect/integration/v1'
API = '/proxy/protect/api/v1'


class ProtectClient(UnifiBaseClient):
    """UniFi Protect endpoints.

    Listing endpoints of the integration API take the ``X-API-KEY`` header;
    per-resource lookups and every mutation take a bearer token.
    """

    service_name = 'protect'

    listing_auth = AuthScheme.API_KEY
    resource_auth = AuthScheme.BEARER
    listing_envelope = Envelope.BARE
    mutation_envelope = Envelope.DATA

    # Listings

    async def _list(self, resource: str, model):
        logger.debug(f"Fetching {resource} from UniFi Protect")
        items = parse_resources(model, await self._fetch_list(
            f'{INTEGRATION}/{resource}', auth=self.listing_auth, envelope=self.listing_envelope))
        logger.debug(f"Retrieved {len(items)} {resource}")
        return items

    async def get_devices(self) -> List[ProtectDevice]:
        return await self._list('devices', ProtectDevice)

    async def get_cameras(self) -> List[ProtectCamera]:
        return await self._list('cameras', ProtectCamera)

    async def get_sensors(self) -> List[ProtectSensor]:
        return await self._list('sensors', ProtectSensor)

    async def get_lights(self) -> List[ProtectLight]:
        return await self._list('lights', ProtectLight)

    async def get_chimes(self) -> List[ProtectChime]:
        return await self._list('chimes', ProtectChime)

    async def get_events(self, limit: int = 50, offset: int = 0) -> List[ProtectEvent]:
        """Fetch one page of events.

        Controllers without the events endpoint answer 404; that is reported
        as an empty page rather than an error.
        """
        logger.debug(f"Fetching events from UniFi Protect (limit={limit}, offset={offset})")
        raw = await self._fetch_list(
            f'{INTEGRATION}/events',
            auth=self.listing_auth,
            envelope=self.listing_envelope,
            params={'limit': limit, 'offset': offset},
            allow_not_found=True,
        )
        events = parse_resources(ProtectEvent, raw)
        logger.debug(f"Retrieved {len(events)} events")
        return events

    async def get_system_info(self) -> ProtectSystemInfo:
        logger.debug("Fetching system info from UniFi Protect")
        info = parse_resource(ProtectSystemInfo, await self._fetch_object(
            f'{INTEGRATION}/meta/info', auth=self.listing_auth, envelope=self.listing_envelope))
        logger.debug(f"Retrieved system info (version={info.version})")
        return info

    async def get_viewers(self) -> List[Dict[str, Any]]:
        return await self._fetch_list(f'{INTEGRATION}/viewers', auth=self.resource_auth)

    async def get_liveviews(self) -> List[Dict[str, Any]]:
        return await self._fetch_list(f'{INTEGRATION}/liveviews', auth=self.resource_auth)

    async def get_nvr(self) -> Dict[str, Any]:
        logger.debug("Fetching NVR information")
        return await self._fetch_object(f'{INTEGRATION}/nvrs', auth=self.resource_auth)

    # Detail lookups

    async def _detail(self, resource: str, resource_id: str) -> Dict[str, Any]:
        logger.debug(f"Fetching {resource} details for ID: {resource_id}")
        return await self._fetch_object(
            f'{INTEGRATION}/{resource}/{_segment(resource_id)}', auth=self.resource_auth)

    async def get_camera_detailed(self, camera_id: str) -> Dict[str, Any]:
        return await self._detail('cameras', camera_id)

    async def get_sensor_detailed(self, sensor_id: str) -> Dict[str, Any]:
        return await self._detail('sensors', sensor_id)

    async def get_light_detailed(self, light_id: str) -> Dict[str, Any]:
        return await self._detail('lights', light_id)

    async def get_chime_detailed(self, chime_id: str) -> Dict[str, Any]:
        return await self._detail('chimes', chime_id)

    async def get_viewer_detailed(self, viewer_id: str) -> Dict[str, Any]:
        return await self._detail('viewers', viewer_id)

    async def get_liveview_detailed(self, liveview_id: str) -> Dict[str, Any]:
        return await self._detail('liveviews', liveview_id)

    # Mutations

    async def _patch(self, resource: str, resource_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"Updating {resource} settings for ID: {resource_id}")
        return await self._mutate('PATCH', f'{API}/{resource}/{_segment(resource_id)}', settings,
                                  auth=self.resource_auth, envelope=self.mutation_envelope)

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate('POST', f'{API}/{path}', payload,
                                  auth=self.resource_auth, envelope=self.mutation_envelope)

    async def patch_camera(self, camera_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch('cameras', camera_id, settings)

    async def patch_sensor(self, sensor_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch('sensors', sensor_id, settings)

    async def patch_light(self, light_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch('lights', light_id, settings)

    async def patch_chime(self, chime_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch('chimes', chime_id, settings)

    async def patch_viewer(self, viewer_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch('viewers', viewer_id, settings)

    async def patch_liveview(self, liveview_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        return await self._patch('liveviews', liveview_id, settings)

    async def create_liveview(self, config: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("Creating new liveview")
        return await self._post('liveviews', config)

    async def camera_start_ptz_patrol(self, camera_id: str, slot: int) -> Dict[str, Any]:
        logger.debug(f"Starting PTZ patrol on camera {camera_id}, slot {slot}")
        return await self._post(f'cameras/{_segment(camera_id)}/ptz/patrol/start/{slot}', {})

    async def camera_stop_ptz_patrol(self, camera_id: str) -> Dict[str, Any]:
        logger.debug(f"Stopping PTZ patrol on camera {camera_id}")
        return await self._post(f'cameras/{_segment(camera_id)}/ptz/patrol/stop', {})

    async def camera_goto_ptz_preset(self, camera_id: str, slot: int) -> Dict[str, Any]:
        logger.debug(f"Moving camera {camera_id} to PTZ preset {slot}")
        return await self._post(f'cameras/{_segment(camera_id)}/ptz/goto/{slot}', {})

    async def camera_create_rtsps_stream(self, camera_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post(f'cameras/{_segment(camera_id)}/rtsps-stream', config)

    async def camera_create_talkback_session(self, camera_id: str, config: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post(f'cameras/{_segment(camera_id)}/talkback-session', config)

    async def camera_disable_mic_permanently(self, camera_id: str) -> Dict[str, Any]:
        logger.debug(f"Disabling microphone permanently on camera {camera_id}")
        return await self._post(f'cameras/{_segment(camera_id)}/disable-mic-permanently', {})

    async def trigger_webhook_alarm(self, webhook_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"Triggering webhook alarm {webhook_id}")
        return await self._post(f'alarm-manager/webhook/{_segment(webhook_id)}', payload)


__all__ = ['ProtectClient']
