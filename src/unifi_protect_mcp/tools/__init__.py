"""Tool catalog of the gateway."""

from ..clients import NetworkClient, ProtectClient
from ..registry import ToolRegistry
from .network import NetworkToolset
from .protect import ProtectToolset


def build_registry(protect_client: ProtectClient, network_client: NetworkClient) -> ToolRegistry:
    """Build, fill and seal the registry for both subsystems."""
    registry = ToolRegistry()
    ProtectToolset(protect_client).register(registry)
    NetworkToolset(network_client).register(registry)
    return registry.seal()


__all__ = ['build_registry', 'ProtectToolset', 'NetworkToolset']
