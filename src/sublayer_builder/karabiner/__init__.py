from __future__ import annotations

from .hyper_key import HyperKeyBackend, MissingHyperKeyFieldsError, generate_hyper_key_rule
from .importer import (
    InvalidRuleError,
    MalformedRuleError,
    MissingManipulatorsError,
    parse_sublayer_rule,
)
from .models.condition import ConditionType, VarCondition
from .models.from_event import FromEvent
from .models.key_code import KeyCode
from .models.manipulator import Manipulator
from .models.modifier import Modifier
from .models.rule import Rule
from .models.to_event import ToEvent, Variable
from .sublayer import SublayerBackend, generate_sublayer_rule, sublayer_variable

__all__ = [
    "ConditionType",
    "FromEvent",
    "HyperKeyBackend",
    "InvalidRuleError",
    "KeyCode",
    "MalformedRuleError",
    "Manipulator",
    "MissingHyperKeyFieldsError",
    "MissingManipulatorsError",
    "Modifier",
    "Rule",
    "SublayerBackend",
    "ToEvent",
    "VarCondition",
    "Variable",
    "generate_hyper_key_rule",
    "generate_sublayer_rule",
    "parse_sublayer_rule",
    "sublayer_variable",
]
