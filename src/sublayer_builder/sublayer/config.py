from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ActionFileConfig(BaseModel):
    key: str
    description: str = ""
    command: str = ""


class SublayerFileConfig(BaseModel):
    sublayer: str
    description: str | None = None
    action: List[ActionFileConfig] = Field(default_factory=list)
