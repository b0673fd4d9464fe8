from __future__ import annotations

from pathlib import Path
from typing import Any, Dict
import tomllib

from .config import SublayerFileConfig
from .editor import last_char, new_action_id
from .model import Action, SublayerConfig, default_description


class SublayerFrontend:
    """Parse a sublayer definition (TOML) into the editable config."""

    def load_toml(self, path: str | Path) -> Dict[str, Any]:
        """Load a TOML config file into a dict."""

        path = Path(path)
        return tomllib.loads(path.read_text(encoding="utf-8"))

    def parse_config(self, config: Dict[str, Any]) -> SublayerConfig:
        cfg = SublayerFileConfig.model_validate(config)

        sublayer_char = last_char(cfg.sublayer.strip())
        description = cfg.description
        if description is None:
            description = default_description(sublayer_char)

        actions = [
            Action(
                id=new_action_id(),
                key_code=last_char(action.key.strip()),
                description=action.description,
                command=action.command,
            )
            for action in cfg.action
        ]

        return SublayerConfig(sublayer_char=sublayer_char, description=description, actions=actions)
