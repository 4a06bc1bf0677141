import pytest

from unifi_protect_mcp.arguments import ToolArguments
from unifi_protect_mcp.errors import InvalidArgument, MissingArgument


def test_string_returns_value():
    assert ToolArguments({'camera_id': 'abc'}).string('camera_id') == 'abc'


@pytest.mark.parametrize('raw', [{}, {'camera_id': None}, {'camera_id': ''}])
def test_string_missing_or_empty(raw):
    with pytest.raises(MissingArgument) as exc_info:
        ToolArguments(raw).string('camera_id')
    assert exc_info.value.message == 'Missing required parameter: camera_id'
    assert exc_info.value.details == {'parameter': 'camera_id'}


def test_string_custom_missing_message():
    with pytest.raises(MissingArgument) as exc_info:
        ToolArguments({}).string('camera_id', missing_message='camera_id is required')
    assert exc_info.value.message == 'camera_id is required'


def test_string_wrong_type():
    with pytest.raises(InvalidArgument) as exc_info:
        ToolArguments({'camera_id': 42}).string('camera_id')
    assert exc_info.value.message == 'Invalid parameter camera_id: expected string'


def test_optional_string_default():
    args = ToolArguments({'site_id': ''})
    assert args.optional_string('site_id', 'default') == 'default'
    assert ToolArguments({'site_id': 'lab'}).optional_string('site_id', 'default') == 'lab'


def test_integer_defaults_and_floats():
    assert ToolArguments({}).integer('limit', 50) == 50
    assert ToolArguments({'limit': 10}).integer('limit', 50) == 10
    assert ToolArguments({'limit': 10.0}).integer('limit', 50) == 10


@pytest.mark.parametrize('value', ['10', 1.5, True])
def test_integer_rejects_non_integers(value):
    with pytest.raises(InvalidArgument) as exc_info:
        ToolArguments({'slot': value}).integer('slot', 0)
    assert exc_info.value.message == 'Invalid parameter slot: expected integer'


def test_mapping_optional_defaults_to_empty():
    assert ToolArguments({}).mapping('config') == {}
    assert ToolArguments({'config': {'a': 1}}).mapping('config') == {'a': 1}


def test_mapping_optional_wrong_type():
    with pytest.raises(InvalidArgument):
        ToolArguments({'config': 'nope'}).mapping('config')


@pytest.mark.parametrize('raw', [{}, {'settings': {}}, {'settings': 'x'}])
def test_mapping_required(raw):
    with pytest.raises(MissingArgument) as exc_info:
        ToolArguments(raw).mapping('settings', required=True)
    assert exc_info.value.message == 'Missing required parameter: settings'
