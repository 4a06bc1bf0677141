"""Records mirroring the vendor JSON shapes returned by UniFi Protect and Network.

Fields are optional exactly as the vendor omits them; unknown vendor fields
are ignored and absent ones are left out of tool output.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import RemoteDecodeError


class RemoteResource(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True, frozen=True)

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


# Protect ----------------------------------------------------------------------

class ProtectDevice(RemoteResource):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    firmware_version: Optional[str] = Field(default=None, alias='firmwareVersion')
    status: Optional[str] = None
    mac: Optional[str] = None
    ip: Optional[str] = None


class ProtectCamera(ProtectDevice):
    recording: Optional[bool] = None
    motion: Optional[bool] = None
    last_motion: Optional[int] = Field(default=None, alias='lastMotion')


class ProtectSensor(RemoteResource):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    status: Optional[str] = None
    battery: Optional[int] = None
    last_event: Optional[int] = Field(default=None, alias='lastEvent')
    last_event_type: Optional[str] = Field(default=None, alias='lastEventType')


class ProtectLight(RemoteResource):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    status: Optional[str] = None
    on: Optional[bool] = None


class ProtectChime(RemoteResource):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    status: Optional[str] = None


class ProtectEvent(RemoteResource):
    id: Optional[str] = None
    type: Optional[str] = None
    timestamp: Optional[Union[int, float, str]] = None
    camera: Optional[str] = None
    score: Optional[float] = None
    metadata: Optional[Dict[str, Any]] = None


class ProtectSystemInfo(RemoteResource):
    application_version: Optional[str] = Field(default=None, alias='applicationVersion')
    version: Optional[str] = None
    unique_id: Optional[str] = Field(default=None, alias='uniqueId')
    system_type: Optional[str] = Field(default=None, alias='systemType')


# Network ----------------------------------------------------------------------

class NetworkDevice(RemoteResource):
    id: Optional[str] = Field(default=None, alias='_id')
    name: Optional[str] = None
    type: Optional[str] = None
    model: Optional[str] = None
    mac: Optional[str] = None
    ip: Optional[str] = None
    connected: Optional[bool] = None
    last_seen: Optional[int] = None
    uptime: Optional[int] = None
    signal: Optional[int] = None


class NetworkSite(RemoteResource):
    id: Optional[str] = Field(default=None, alias='_id')
    name: Optional[str] = None
    external_id: Optional[str] = None
    desc: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    num_sta: Optional[int] = None
    rx_packets: Optional[int] = None
    tx_packets: Optional[int] = None


class WiFiNetwork(RemoteResource):
    id: Optional[str] = Field(default=None, alias='_id')
    name: Optional[str] = None
    ssid: Optional[str] = None
    security: Optional[str] = None
    enabled: Optional[bool] = None
    channel_width: Optional[str] = None
    channel: Optional[int] = None
    band: Optional[str] = None


class VPNServer(RemoteResource):
    id: Optional[str] = Field(default=None, alias='_id')
    name: Optional[str] = None
    desc: Optional[str] = None


R = TypeVar('R', bound=RemoteResource)


def parse_resource(model: Type[R], payload: Any) -> R:
    """Validate one vendor object, mapping failures to :class:`RemoteDecodeError`."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RemoteDecodeError(f"failed to decode response: {exc}") from exc


def parse_resources(model: Type[R], payload: Any) -> List[R]:
    """Validate a vendor array. ``None`` (an absent ``data`` key) decodes as empty."""
    if payload is None:
        return []
    try:
        return TypeAdapter(List[model]).validate_python(payload)  # type: ignore[valid-type]
    except ValidationError as exc:
        raise RemoteDecodeError(f"failed to decode response: {exc}") from exc


__all__ = [
    'RemoteResource',
    'ProtectDevice',
    'ProtectCamera',
    'ProtectSensor',
    'ProtectLight',
    'ProtectChime',
    'ProtectEvent',
    'ProtectSystemInfo',
    'NetworkDevice',
    'NetworkSite',
    'WiFiNetwork',
    'VPNServer',
    'parse_resource',
    'parse_resources',
]
