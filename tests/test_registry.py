import pytest

from unifi_protect_mcp.arguments import ToolArguments
from unifi_protect_mcp.errors import DuplicateToolError, RegistryError, UnknownToolError
from unifi_protect_mcp.registry import ToolDescriptor, ToolInvocation, ToolRegistry
from unifi_protect_mcp.results import ToolSuccess


async def _echo(args: ToolArguments):
    return ToolSuccess(args.as_dict())


def _descriptor(name):
    return ToolDescriptor(name, f'{name} tool', {'type': 'object', 'properties': {}})


def test_register_keeps_declaration_order():
    registry = ToolRegistry()
    for name in ('b', 'a', 'c'):
        registry.register(_descriptor(name), _echo)
    assert [d.name for d in registry.list()] == ['b', 'a', 'c']
    assert len(registry) == 3


def test_duplicate_name_is_rejected():
    registry = ToolRegistry()
    registry.register(_descriptor('dup'), _echo)
    with pytest.raises(DuplicateToolError) as exc_info:
        registry.register(_descriptor('dup'), _echo)
    assert exc_info.value.message == 'Tool already registered: dup'


def test_register_after_seal_fails():
    registry = ToolRegistry().seal()
    with pytest.raises(RegistryError):
        registry.register(_descriptor('late'), _echo)


@pytest.mark.asyncio
async def test_dispatch_requires_seal():
    registry = ToolRegistry()
    registry.register(_descriptor('x'), _echo)
    with pytest.raises(RegistryError):
        await registry.dispatch(ToolInvocation('x', {}))


@pytest.mark.asyncio
async def test_dispatch_unknown_tool():
    registry = ToolRegistry().seal()
    with pytest.raises(UnknownToolError) as exc_info:
        await registry.dispatch(ToolInvocation('nonexistent_tool', {}))
    assert exc_info.value.code == 'UNKNOWN_TOOL'


@pytest.mark.asyncio
async def test_dispatch_passes_arguments():
    registry = ToolRegistry()
    registry.register(_descriptor('echo'), _echo)
    registry.seal()
    result = await registry.dispatch(ToolInvocation('echo', {'k': 'v'}))
    assert result == ToolSuccess({'k': 'v'})


def test_descriptor_to_mcp_tool():
    tool = _descriptor('x').to_mcp_tool()
    assert tool.name == 'x'
    assert tool.inputSchema == {'type': 'object', 'properties': {}}


def test_catalog_names_are_unique(registry):
    names = [d.name for d in registry.list()]
    assert len(names) == len(set(names))
    assert registry.sealed


def test_catalog_contains_both_subsystems(registry):
    assert 'get_protect_cameras' in registry
    assert 'get_protect_events' in registry
    assert 'create_protect_liveview' in registry
    assert 'get_network_sites' in registry
    assert 'create_network_vpn_tunnel' in registry
    assert len(registry) == 68


def test_required_parameters_are_declared(registry):
    schema = registry.get('patch_protect_viewer').input_schema
    assert schema['required'] == ['id', 'settings']
    assert 'required' not in registry.get('get_protect_cameras').input_schema
