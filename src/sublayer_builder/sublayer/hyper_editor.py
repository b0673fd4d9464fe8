from __future__ import annotations

from typing import Iterable, List, Sequence

from sublayer_builder.karabiner.models.modifier import Modifier

from .model import HyperKeyConfig

MAX_DESCRIPTION = 256
MAX_VARIABLE = 128

HYPER_KEYS: List[str] = [
    "caps_lock",
    "tab",
    "escape",
    "left_command",
    "left_control",
    "left_option",
    "left_shift",
    "right_command",
    "right_control",
    "right_option",
    "right_shift",
    "fn",
    "command",
    "control",
    "option",
    "shift",
]

MODIFIER_KEYS: List[str] = [
    Modifier.LEFT_SHIFT.value,
    Modifier.RIGHT_SHIFT.value,
    Modifier.SHIFT.value,
    Modifier.LEFT_COMMAND.value,
    Modifier.RIGHT_COMMAND.value,
    Modifier.COMMAND.value,
    Modifier.FN.value,
    Modifier.LEFT_CONTROL.value,
    Modifier.RIGHT_CONTROL.value,
    Modifier.CONTROL.value,
    Modifier.LEFT_OPTION.value,
    Modifier.RIGHT_OPTION.value,
    Modifier.OPTION.value,
]

# "either side" modifier -> its sided variants
_SIDED = {
    "shift": ("left_shift", "right_shift"),
    "command": ("left_command", "right_command"),
    "control": ("left_control", "right_control"),
    "option": ("left_option", "right_option"),
}
_EITHER = {side: either for either, sides in _SIDED.items() for side in sides}


def clean_description(value: str) -> str:
    return value[:MAX_DESCRIPTION]


def clean_variable(value: str) -> str:
    return _strip_quotes(value[:MAX_VARIABLE])


def clean_key_code(value: str) -> str:
    return _strip_quotes(value)


def _strip_quotes(value: str) -> str:
    return value.replace('"', "").replace("'", "")


def toggle_modifier(
    modifiers: Sequence[str], key: str, checked: bool, hyper_key: str
) -> List[str]:
    """Check or uncheck one modifier, keeping "either" and sided variants exclusive."""

    if not checked:
        return [mod for mod in modifiers if mod != key]
    if key == hyper_key:
        return list(modifiers)

    updated = [mod for mod in modifiers if mod != key] + [key]
    if key in _SIDED:
        updated = [mod for mod in updated if mod not in _SIDED[key]]
    elif key in _EITHER:
        updated = [mod for mod in updated if mod != _EITHER[key]]
    return updated


def apply_modifier_selection(
    previous: Sequence[str], selected: Iterable[str], hyper_key: str
) -> List[str]:
    """Fold a checkbox-group selection into the modifier list one change at a time."""

    selected = list(selected)
    modifiers = list(previous)
    for key in [mod for mod in previous if mod not in selected]:
        modifiers = toggle_modifier(modifiers, key, False, hyper_key)
    for key in [mod for mod in selected if mod not in previous]:
        modifiers = toggle_modifier(modifiers, key, True, hyper_key)
    return modifiers


def select_hyper_key(config: HyperKeyConfig, hyper_key: str) -> HyperKeyConfig:
    modifiers = [mod for mod in config.modifiers if mod != hyper_key]
    if hyper_key in _SIDED:
        modifiers = [mod for mod in modifiers if mod not in _SIDED[hyper_key]]
    return config.model_copy(update={"hyper_key": hyper_key, "modifiers": modifiers})


def is_modifier_disabled(key: str, hyper_key: str, modifiers: Sequence[str]) -> bool:
    if key == hyper_key:
        return True
    either = _EITHER.get(key)
    if either is None:
        return False
    return hyper_key == either or either in modifiers


def available_modifiers(hyper_key: str, modifiers: Sequence[str]) -> List[str]:
    return [key for key in MODIFIER_KEYS if not is_modifier_disabled(key, hyper_key, modifiers)]
