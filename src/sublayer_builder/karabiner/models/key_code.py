from __future__ import annotations

from typing import TypeAlias

# Karabiner key_code token, e.g. "o", "caps_lock", "left_command".
KeyCode: TypeAlias = str
