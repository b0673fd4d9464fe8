from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict

from sublayer_builder.karabiner.models.rule import Rule
from sublayer_builder.sublayer.model import SublayerConfig

logger = logging.getLogger(__name__)

MEDIA_TYPE = "application/json"


def render_json(rule: Rule, *, indent: int | None = 2) -> str:
    """Pretty-print a rule the way Karabiner's own files look."""

    return rule.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


def rule_to_dict(rule: Rule) -> Dict[str, Any]:
    return rule.model_dump(mode="json", by_alias=True, exclude_none=True)


def sublayer_filename(config: SublayerConfig) -> str:
    return f"karabiner-sublayer-{config.sublayer_char}.json"


def hyper_key_filename(now: float | None = None) -> str:
    if now is None:
        now = time.time()
    return f"hyperkey-config-{int(now * 1000)}.json"


def size_label(text: str) -> str:
    size = len(text.encode("utf-8"))
    if size < 1024:
        return f"{size} B"
    return f"{size / 1024:.1f} KB"


def write_export(text: str, directory: str | Path, filename: str) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(text + "\n", encoding="utf-8")
    logger.info("exported %s (%s)", path, size_label(text))
    return path
