from __future__ import annotations

import logging
from typing import List

from sublayer_builder.sublayer.model import Action, SublayerConfig

from .models.condition import ConditionType, VarCondition
from .models.from_event import FromEvent
from .models.manipulator import Manipulator
from .models.modifier import Modifier
from .models.modifiers import FromModifiers
from .models.rule import Rule
from .models.to_event import ToEvent, Variable

logger = logging.getLogger(__name__)

HYPER_VAR = "hyper"


class SublayerBackend:
    """Compile a sublayer config into a Karabiner rule.

    The output always has the same two-tier shape: one toggle manipulator
    that arms ``hyper_sublayer_<char>`` while the sublayer key is held with
    Hyper down, then one manipulator per action gated on that variable.
    Field values are copied verbatim, nothing is escaped or validated.
    """

    def compile(self, config: SublayerConfig) -> Rule:
        layer_var = sublayer_variable(config.sublayer_char)

        manipulators: List[Manipulator] = [self._toggle(config.sublayer_char, layer_var)]
        for action in config.actions:
            manipulators.append(self._action(action, layer_var))

        logger.debug(
            "compiled sublayer %r into %d manipulators", config.sublayer_char, len(manipulators)
        )
        return Rule(description=config.description, manipulators=manipulators)

    @staticmethod
    def _toggle(sublayer_char: str, layer_var: str) -> Manipulator:
        return Manipulator(
            conditions=[_var_if(layer_var, 0), _var_if(HYPER_VAR, 1)],
            description=f"Toggle Hyper sublayer {sublayer_char}",
            from_=_any_modifiers_from(sublayer_char),
            to=[_set_var(layer_var, 1)],
            to_after_key_up=[_set_var(layer_var, 0)],
        )

    @staticmethod
    def _action(action: Action, layer_var: str) -> Manipulator:
        return Manipulator(
            conditions=[_var_if(layer_var, 1)],
            description=action.description,
            from_=_any_modifiers_from(action.key_code),
            to=[ToEvent(shell_command=action.command)],
        )


def generate_sublayer_rule(config: SublayerConfig) -> Rule:
    return SublayerBackend().compile(config)


def sublayer_variable(sublayer_char: str) -> str:
    return f"hyper_sublayer_{sublayer_char}"


def _var_if(name: str, value: int) -> VarCondition:
    return VarCondition(type=ConditionType.VARIABLE_IF, name=name, value=value)


def _set_var(name: str, value: int) -> ToEvent:
    return ToEvent(set_variable=Variable(name=name, value=value))


def _any_modifiers_from(key_code: str) -> FromEvent:
    return FromEvent(key_code=key_code, modifiers=FromModifiers(optional=[Modifier.ANY]))
