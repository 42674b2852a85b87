from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..common.validators import optional_text, require_enum, require_mapping
from ..core.enums import AchievementLevel, Medal


@dataclass(frozen=True)
class AchievementInput:
    level: AchievementLevel
    medal: Medal
    description: Optional[str] = None


def parse_achievement_input(payload: Any) -> AchievementInput:
    data = require_mapping(payload)
    return AchievementInput(
        level=require_enum(data.get("level"), "level", AchievementLevel),
        medal=require_enum(data.get("medal"), "medal", Medal),
        description=optional_text(data.get("description"), "description"),
    )
