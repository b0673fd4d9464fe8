from __future__ import annotations

import logging
from typing import List

from sublayer_builder.sublayer.model import HyperKeyConfig

from .models.from_event import FromEvent
from .models.manipulator import Manipulator
from .models.modifier import Modifier
from .models.rule import Rule
from .models.to_event import ToEvent, Variable

logger = logging.getLogger(__name__)


class MissingHyperKeyFieldsError(ValueError):
    """Description or hyper key is empty."""


class HyperKeyBackend:
    """Compile the Hyper key mapping into a single-manipulator Karabiner rule."""

    def compile(self, config: HyperKeyConfig) -> Rule:
        if not config.description or not config.hyper_key:
            raise MissingHyperKeyFieldsError("hyper key rule requires both a description and a hyper key")

        variable = config.variable.strip()
        alone = config.alone_key_code.strip()

        to: List[ToEvent] = []
        if variable:
            to.append(_set_var(variable, 1))
        if config.modifiers:
            # first modifier is sent as the key, the rest ride along as its modifiers
            first, *others = config.modifiers
            to.append(
                ToEvent(
                    key_code=first,
                    modifiers=[Modifier(mod) for mod in others] if others else None,
                )
            )

        manipulator = Manipulator(
            description=f"mapping {config.hyper_key} to hyper",
            from_=FromEvent(key_code=config.hyper_key),
            to=to or None,
            to_after_key_up=[_set_var(variable, 0)] if variable else None,
            to_if_alone=[ToEvent(key_code=alone)] if alone else None,
        )

        logger.debug("compiled hyper key rule for %r", config.hyper_key)
        return Rule(description=config.description, manipulators=[manipulator])


def generate_hyper_key_rule(config: HyperKeyConfig) -> Rule:
    return HyperKeyBackend().compile(config)


def _set_var(name: str, value: int) -> ToEvent:
    return ToEvent(set_variable=Variable(name=name, value=value))
