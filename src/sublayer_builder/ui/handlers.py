from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Sequence, Tuple

import gradio as gr

from sublayer_builder.export import (
    hyper_key_filename,
    render_json,
    size_label,
    sublayer_filename,
    write_export,
)
from sublayer_builder.karabiner.hyper_key import MissingHyperKeyFieldsError, generate_hyper_key_rule
from sublayer_builder.karabiner.sublayer import generate_sublayer_rule
from sublayer_builder.sublayer import editor
from sublayer_builder.sublayer import hyper_editor
from sublayer_builder.sublayer.model import Action, HyperKeyConfig, SublayerConfig

logger = logging.getLogger(__name__)

ACTION_HEADERS = ["Key", "Description", "Command"]

IMPORT_OK = "Configuration imported."
IMPORT_INVALID = "Invalid JSON: expected a Karabiner rule with a non-empty `manipulators` list."
HYPER_MISSING = "Missing required fields: provide both a description and a Hyper Key."

Rows = List[List[str]]


# --- sublayer ---


def preview(config: SublayerConfig) -> Tuple[str, str]:
    text = render_json(generate_sublayer_rule(config))
    return text, size_label(text)


def action_rows(config: SublayerConfig) -> Rows:
    return [[a.key_code, a.description, a.command] for a in config.actions]


def _refresh(config: SublayerConfig):
    text, size = preview(config)
    return config, action_rows(config), text, size


def on_sublayer_char(config: SublayerConfig, value: str):
    config = editor.set_sublayer_char(config, value or "")
    text, size = preview(config)
    return config, config.sublayer_char, config.description, text, size


def on_description(config: SublayerConfig, value: str):
    config = editor.set_description(config, value or "")
    text, size = preview(config)
    return config, text, size


def on_actions_table(config: SublayerConfig, rows: Sequence[Sequence[Any]] | None):
    """Sync an edited actions table back into the config, matching rows by position.

    Rows past the current action count that are entirely blank are the
    table's placeholder row, not new actions.
    """

    rows = [[_cell(row, i) for i in range(len(ACTION_HEADERS))] for row in (rows or [])]

    actions: List[Action] = []
    for index, (key_code, description, command) in enumerate(rows):
        if index < len(config.actions):
            action_id = config.actions[index].id
        elif key_code or description or command:
            action_id = editor.new_action_id()
        else:
            continue
        actions.append(
            Action(
                id=action_id,
                key_code=editor.last_char(key_code),
                description=description,
                command=command,
            )
        )

    return _refresh(config.model_copy(update={"actions": actions}))


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    value = row[index]
    # pandas hands back NaN for cells that were never filled in
    if isinstance(value, float) and value != value:
        return ""
    return str(value)


def on_add_action(config: SublayerConfig):
    return _refresh(editor.add_action(config))


def on_delete_action(config: SublayerConfig, row_number: float | int | None):
    if row_number is None:
        return _refresh(config)
    index = int(row_number) - 1
    if 0 <= index < len(config.actions):
        config = editor.delete_action(config, config.actions[index].id)
    return _refresh(config)


def on_clear_actions(config: SublayerConfig):
    return _refresh(editor.clear_actions(config))


def on_import(config: SublayerConfig, text: str):
    result = editor.apply_import(config, text or "")
    if not (text or "").strip():
        status = ""
    elif result.valid:
        status = IMPORT_OK
    else:
        status = IMPORT_INVALID

    config = result.config
    rule_text, size = preview(config)
    return (
        config,
        config.sublayer_char,
        config.description,
        action_rows(config),
        rule_text,
        size,
        status,
    )


def on_export(config: SublayerConfig, export_dir: str | Path) -> str:
    text, _ = preview(config)
    return str(write_export(text, export_dir, sublayer_filename(config)))


# --- hyper key ---


def hyper_preview(config: HyperKeyConfig) -> Tuple[str, str]:
    try:
        rule = generate_hyper_key_rule(config)
    except MissingHyperKeyFieldsError:
        return "", HYPER_MISSING
    except ValueError as exc:
        logger.warning("hyper key rule rejected: %s", exc)
        return "", f"Invalid Hyper Key settings: {exc}"
    return render_json(rule), ""


def modifier_choices(config: HyperKeyConfig):
    """Checkbox update offering only the modifiers that can still be combined with the selection."""

    return gr.update(
        choices=hyper_editor.available_modifiers(config.hyper_key, config.modifiers),
        value=config.modifiers,
    )


def on_hyper_description(config: HyperKeyConfig, value: str):
    config = config.model_copy(update={"description": hyper_editor.clean_description(value or "")})
    return (config, config.description, *hyper_preview(config))


def on_hyper_key(config: HyperKeyConfig, hyper_key: str | None):
    config = hyper_editor.select_hyper_key(config, hyper_key or "")
    return (config, modifier_choices(config), *hyper_preview(config))


def on_hyper_variable(config: HyperKeyConfig, value: str):
    config = config.model_copy(update={"variable": hyper_editor.clean_variable(value or "")})
    return (config, config.variable, *hyper_preview(config))


def on_hyper_modifiers(config: HyperKeyConfig, selected: Sequence[str] | None):
    modifiers = hyper_editor.apply_modifier_selection(
        config.modifiers, selected or [], config.hyper_key
    )
    config = config.model_copy(update={"modifiers": modifiers})
    return (config, modifier_choices(config), *hyper_preview(config))


def on_hyper_alone(config: HyperKeyConfig, value: str):
    config = config.model_copy(update={"alone_key_code": hyper_editor.clean_key_code(value or "")})
    return (config, config.alone_key_code, *hyper_preview(config))


def on_hyper_export(config: HyperKeyConfig, export_dir: str | Path):
    text, status = hyper_preview(config)
    if status:
        return None, status
    path = write_export(text, export_dir, hyper_key_filename())
    return str(path), f"Exported {path.name}"
