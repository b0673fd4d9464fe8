from __future__ import annotations

import json
import logging
from typing import Any, List

from sublayer_builder.sublayer.model import Action, CommandType, SublayerConfig

logger = logging.getLogger(__name__)


class InvalidRuleError(ValueError):
    """Text cannot be read back as a sublayer rule."""


class MalformedRuleError(InvalidRuleError):
    """Text is not valid JSON."""


class MissingManipulatorsError(InvalidRuleError):
    """JSON has no usable `manipulators` list."""


def parse_sublayer_rule(text: str) -> SublayerConfig:
    """
    Recover a sublayer config from Karabiner rule JSON.

    Only two things are checked: the text is JSON, and it carries a non-empty
    `manipulators` list. The first manipulator is taken as the sublayer toggle
    and only its `from.key_code` is read; every following manipulator becomes
    one action, by position. Anything else that is missing or of the wrong
    type reads as an empty string, so hand-edited files still load.

    Action ids are synthesized (`action-0`, `action-1`, ...); ids of a config
    that produced the text are not recoverable.
    """

    try:
        document = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, oversized integer literals, and nesting too deep to decode
        logger.warning("rule text is not valid JSON: %s", exc)
        raise MalformedRuleError(f"invalid JSON: {exc}") from exc

    manipulators = document.get("manipulators") if isinstance(document, dict) else None
    if not isinstance(manipulators, list) or not manipulators:
        logger.warning("rule JSON has no manipulators")
        raise MissingManipulatorsError("expected a non-empty 'manipulators' list")

    toggle, *rest = manipulators
    actions: List[Action] = [
        Action(
            id=f"action-{index}",
            key_code=_text(manipulator, "from", "key_code"),
            description=_text(manipulator, "description"),
            command_type=CommandType.SHELL_COMMAND,
            command=_text(manipulator, "to", 0, "shell_command"),
        )
        for index, manipulator in enumerate(rest)
    ]

    return SublayerConfig(
        sublayer_char=_text(toggle, "from", "key_code"),
        description=_text(document, "description"),
        actions=actions,
    )


def _text(node: Any, *path: str | int) -> str:
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return ""
        elif not isinstance(node, dict) or step not in node:
            return ""
        node = node[step]
    return node if isinstance(node, str) else ""
