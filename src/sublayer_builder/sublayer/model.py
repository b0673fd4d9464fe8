from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class CommandType(str, Enum):
    """What an action runs when its key is pressed."""

    SHELL_COMMAND = "shell_command"


class Action(BaseModel):
    """One key-triggered command inside the sublayer."""

    id: str
    key_code: str = ""
    description: str = ""
    command_type: CommandType = CommandType.SHELL_COMMAND
    command: str = ""


class SublayerConfig(BaseModel):
    """Editable state of one Hyper key sublayer.

    Treated as an immutable value: editor operations return a new instance
    instead of mutating this one.
    """

    sublayer_char: str = ""
    description: str = ""
    actions: List[Action] = Field(default_factory=list)


def default_description(sublayer_char: str) -> str:
    return f'Hyper Key sublayer "{sublayer_char}"'


class HyperKeyConfig(BaseModel):
    """Editable state of the Hyper key mapping itself."""

    description: str = ""
    hyper_key: str = ""
    variable: str = "hyper"
    modifiers: List[str] = Field(default_factory=list)
    alone_key_code: str = ""
