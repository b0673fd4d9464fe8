from __future__ import annotations

import json

import pytest

from sublayer_builder.export import render_json
from sublayer_builder.karabiner.importer import (
    InvalidRuleError,
    MalformedRuleError,
    MissingManipulatorsError,
    parse_sublayer_rule,
)
from sublayer_builder.karabiner.sublayer import generate_sublayer_rule
from sublayer_builder.sublayer.model import Action, CommandType, SublayerConfig


def _config() -> SublayerConfig:
    return SublayerConfig(
        sublayer_char="o",
        description='Hyper Key sublayer "o"',
        actions=[
            Action(id="x-1", key_code="f", description="Open Finder", command="open ~/"),
            Action(id="x-2", key_code="t", description="Terminal", command="open -a Terminal"),
            Action(id="x-3", key_code="s", description="Safari", command="open -a Safari"),
        ],
    )


def test_not_json_fails() -> None:
    with pytest.raises(MalformedRuleError):
        parse_sublayer_rule("not json")


def test_empty_manipulators_fails() -> None:
    with pytest.raises(MissingManipulatorsError):
        parse_sublayer_rule('{"description":"d","manipulators":[]}')


@pytest.mark.parametrize(
    "text",
    [
        '{"description": "d"}',
        '{"manipulators": {"a": 1}}',
        "[1, 2, 3]",
        '"manipulators"',
        "null",
    ],
)
def test_missing_manipulators_fails(text: str) -> None:
    with pytest.raises(MissingManipulatorsError):
        parse_sublayer_rule(text)


def test_failures_share_base_error() -> None:
    for text in ("{", "{}"):
        with pytest.raises(InvalidRuleError):
            parse_sublayer_rule(text)
    assert issubclass(InvalidRuleError, ValueError)


def test_round_trip() -> None:
    config = _config()
    parsed = parse_sublayer_rule(render_json(generate_sublayer_rule(config)))

    assert parsed.sublayer_char == config.sublayer_char
    assert parsed.description == config.description
    assert [(a.key_code, a.description, a.command) for a in parsed.actions] == [
        (a.key_code, a.description, a.command) for a in config.actions
    ]
    assert [a.id for a in parsed.actions] == ["action-0", "action-1", "action-2"]
    assert all(a.command_type == CommandType.SHELL_COMMAND for a in parsed.actions)


def test_toggle_shape_not_checked() -> None:
    text = json.dumps(
        {
            "description": "hand written",
            "manipulators": [
                {"from": {"key_code": "j"}, "to": [{"key_code": "down_arrow"}]},
                {"description": "Docs", "from": {"key_code": "d"}, "to": [{"shell_command": "open ~/Documents"}]},
            ],
        }
    )
    parsed = parse_sublayer_rule(text)

    assert parsed.sublayer_char == "j"
    assert parsed.description == "hand written"
    assert len(parsed.actions) == 1
    assert parsed.actions[0].command == "open ~/Documents"


def test_missing_fields_degrade_to_empty() -> None:
    text = json.dumps(
        {
            "manipulators": [
                {"type": "basic"},
                {},
                {"from": {"key_code": 5}, "description": None, "to": []},
                {"from": "k", "to": [{"key_code": "a"}]},
                {"from": {"key_code": "z"}, "to": {"shell_command": "ls"}},
                "not a manipulator",
            ]
        }
    )
    parsed = parse_sublayer_rule(text)

    assert parsed.sublayer_char == ""
    assert parsed.description == ""
    assert len(parsed.actions) == 5
    for action in parsed.actions[:-2]:
        assert action.key_code == ""
        assert action.description == ""
        assert action.command == ""
    # `to` must be a list for the command to be read
    assert parsed.actions[3].key_code == "z"
    assert parsed.actions[3].command == ""


def test_only_first_to_entry_is_read() -> None:
    text = json.dumps(
        {
            "description": "d",
            "manipulators": [
                {"from": {"key_code": "o"}},
                {
                    "from": {"key_code": "a"},
                    "to": [{"set_variable": {"name": "x", "value": 1}}, {"shell_command": "ls"}],
                },
            ],
        }
    )
    parsed = parse_sublayer_rule(text)

    assert parsed.actions[0].command == ""


def test_huge_integer_is_invalid() -> None:
    text = '{"description":"d","x":' + "1" * 5000 + ',"manipulators":[{"from":{"key_code":"o"}}]}'
    with pytest.raises(MalformedRuleError):
        parse_sublayer_rule(text)


def test_deep_nesting_is_invalid() -> None:
    with pytest.raises(MalformedRuleError):
        parse_sublayer_rule("[" * 200000)
