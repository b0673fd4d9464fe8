from __future__ import annotations

import logging
import uuid
from typing import NamedTuple

from sublayer_builder.karabiner.importer import InvalidRuleError, parse_sublayer_rule

from .model import Action, SublayerConfig, default_description

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset({"key_code", "description", "command"})


class ImportResult(NamedTuple):
    config: SublayerConfig
    valid: bool


def last_char(value: str) -> str:
    """Keep only the last typed character of a single-key input."""

    return value[-1:]


def new_action_id() -> str:
    return f"action-{uuid.uuid4().hex}"


def default_config(sublayer_char: str = "o") -> SublayerConfig:
    return set_sublayer_char(SublayerConfig(), sublayer_char)


def set_sublayer_char(config: SublayerConfig, value: str) -> SublayerConfig:
    char = last_char(value)
    update: dict[str, object] = {"sublayer_char": char}
    if char:
        update["description"] = default_description(char)
    return config.model_copy(update=update)


def set_description(config: SublayerConfig, value: str) -> SublayerConfig:
    return config.model_copy(update={"description": value})


def add_action(config: SublayerConfig) -> SublayerConfig:
    action = Action(id=new_action_id())
    return config.model_copy(update={"actions": [*config.actions, action]})


def update_action(config: SublayerConfig, action_id: str, field: str, value: str) -> SublayerConfig:
    if field not in _EDITABLE_FIELDS:
        raise ValueError(f"action field is not editable: {field!r}")
    if field == "key_code":
        value = last_char(value)

    actions = [
        action.model_copy(update={field: value}) if action.id == action_id else action
        for action in config.actions
    ]
    return config.model_copy(update={"actions": actions})


def delete_action(config: SublayerConfig, action_id: str) -> SublayerConfig:
    actions = [action for action in config.actions if action.id != action_id]
    return config.model_copy(update={"actions": actions})


def clear_actions(config: SublayerConfig) -> SublayerConfig:
    return config.model_copy(update={"actions": []})


def apply_import(config: SublayerConfig, text: str) -> ImportResult:
    """Replace the whole config with one parsed from pasted rule JSON.

    Blank text counts as valid and leaves the config alone; text that does
    not parse leaves it alone and is reported as invalid.
    """

    if not text.strip():
        return ImportResult(config, True)

    try:
        imported = parse_sublayer_rule(text)
    except InvalidRuleError:
        return ImportResult(config, False)

    logger.info(
        "imported sublayer %r with %d actions", imported.sublayer_char, len(imported.actions)
    )
    return ImportResult(imported, True)
