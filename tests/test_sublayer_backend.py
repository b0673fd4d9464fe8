from __future__ import annotations

from typing import Iterable

import pytest
from pydantic import ValidationError

from sublayer_builder.export import rule_to_dict
from sublayer_builder.karabiner.models.condition import ConditionType, VarCondition
from sublayer_builder.karabiner.models.modifier import Modifier
from sublayer_builder.karabiner.sublayer import SublayerBackend, generate_sublayer_rule
from sublayer_builder.sublayer.model import Action, SublayerConfig


def _find_var_condition(conditions: Iterable[VarCondition], name: str) -> VarCondition | None:
    for cond in conditions:
        if cond.name == name:
            return cond
    return None


def _has_set_variable(events, *, name: str, value: int) -> bool:
    for event in events:
        if event.set_variable is None:
            continue
        if event.set_variable.name == name and event.set_variable.value == value:
            return True
    return False


def _finder_config() -> SublayerConfig:
    return SublayerConfig(
        sublayer_char="o",
        description='Hyper Key sublayer "o"',
        actions=[Action(id="a1", key_code="f", description="Open Finder", command="open ~/")],
    )


def test_toggle_only_when_no_actions() -> None:
    config = SublayerConfig(sublayer_char="o", description="d")
    out = SublayerBackend().compile(config)

    assert out.description == "d"
    assert len(out.manipulators) == 1

    toggle = out.manipulators[0]
    assert toggle.type == "basic"
    assert toggle.description == "Toggle Hyper sublayer o"
    assert toggle.from_.key_code == "o"
    assert toggle.from_.modifiers is not None
    assert toggle.from_.modifiers.optional == [Modifier.ANY]

    layer = _find_var_condition(toggle.conditions, "hyper_sublayer_o")
    assert layer is not None
    assert layer.type == ConditionType.VARIABLE_IF
    assert layer.value == 0
    hyper = _find_var_condition(toggle.conditions, "hyper")
    assert hyper is not None
    assert hyper.value == 1

    assert _has_set_variable(toggle.to, name="hyper_sublayer_o", value=1)
    assert _has_set_variable(toggle.to_after_key_up, name="hyper_sublayer_o", value=0)


def test_toggle_document_shape() -> None:
    doc = rule_to_dict(generate_sublayer_rule(SublayerConfig(sublayer_char="o", description="d")))

    assert doc == {
        "description": "d",
        "manipulators": [
            {
                "conditions": [
                    {"name": "hyper_sublayer_o", "type": "variable_if", "value": 0},
                    {"name": "hyper", "type": "variable_if", "value": 1},
                ],
                "description": "Toggle Hyper sublayer o",
                "from": {"key_code": "o", "modifiers": {"optional": ["any"]}},
                "to": [{"set_variable": {"name": "hyper_sublayer_o", "value": 1}}],
                "to_after_key_up": [{"set_variable": {"name": "hyper_sublayer_o", "value": 0}}],
                "type": "basic",
            }
        ],
    }


def test_action_manipulator() -> None:
    doc = rule_to_dict(generate_sublayer_rule(_finder_config()))

    assert len(doc["manipulators"]) == 2
    action = doc["manipulators"][1]
    assert action == {
        "conditions": [{"name": "hyper_sublayer_o", "type": "variable_if", "value": 1}],
        "description": "Open Finder",
        "from": {"key_code": "f", "modifiers": {"optional": ["any"]}},
        "to": [{"shell_command": "open ~/"}],
        "type": "basic",
    }


def test_actions_keep_list_order() -> None:
    config = SublayerConfig(
        sublayer_char="w",
        description="d",
        actions=[
            Action(id="1", key_code="b", description="B", command="b"),
            Action(id="2", key_code="a", description="A", command="a"),
            Action(id="3", key_code="c", description="C", command="c"),
        ],
    )
    out = generate_sublayer_rule(config)

    assert [m.from_.key_code for m in out.manipulators] == ["w", "b", "a", "c"]
    for manip in out.manipulators[1:]:
        assert manip.to_after_key_up is None


def test_command_copied_verbatim() -> None:
    command = 'osascript -e \'tell app "Finder" to activate\' && echo "$HOME" > /tmp/x'
    config = SublayerConfig(
        sublayer_char="o",
        description="d",
        actions=[Action(id="1", key_code="x", description="weird", command=command)],
    )
    out = generate_sublayer_rule(config)

    assert out.manipulators[1].to[0].shell_command == command


def test_empty_fields_propagate() -> None:
    config = SublayerConfig(
        sublayer_char="",
        description="",
        actions=[Action(id="1")],
    )
    doc = rule_to_dict(generate_sublayer_rule(config))

    toggle, action = doc["manipulators"]
    assert toggle["from"]["key_code"] == ""
    assert toggle["conditions"][0]["name"] == "hyper_sublayer_"
    assert action["from"]["key_code"] == ""
    assert action["to"] == [{"shell_command": ""}]


def test_conditions_are_variable_if_only() -> None:
    assert [c.value for c in ConditionType] == ["variable_if"]
    with pytest.raises(ValidationError):
        VarCondition(type="variable_unless", name="hyper", value=1)
