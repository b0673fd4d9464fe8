from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ConditionType(str, Enum):
    """Karabiner condition type."""

    VARIABLE_IF = "variable_if"


class VarCondition(BaseModel):
    """
    Karabiner variable condition.

    https://karabiner-elements.pqrs.org/docs/json/complex-modifications-manipulator-definition/conditions/variable/
    """

    name: str
    type: Literal[ConditionType.VARIABLE_IF] = ConditionType.VARIABLE_IF
    value: str | int | bool
