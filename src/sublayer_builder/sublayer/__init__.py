from __future__ import annotations

from .model import Action, CommandType, HyperKeyConfig, SublayerConfig, default_description
from .editor import (
    ImportResult,
    add_action,
    apply_import,
    clear_actions,
    default_config,
    delete_action,
    last_char,
    set_description,
    set_sublayer_char,
    update_action,
)
from .frontend import SublayerFrontend

__all__ = [
    "Action",
    "CommandType",
    "HyperKeyConfig",
    "ImportResult",
    "SublayerConfig",
    "SublayerFrontend",
    "add_action",
    "apply_import",
    "clear_actions",
    "default_config",
    "default_description",
    "delete_action",
    "last_char",
    "set_description",
    "set_sublayer_char",
    "update_action",
]
