# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Models - Immutable records parsed from SKILL.md files.

A SkillRecord is built once at load time and never mutated afterwards.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SkillRecord:
    """A loaded skill document."""
    skill_id: str  # directory name
    name: str
    description: str
    triggers: Tuple[str, ...]
    body: str
    version: str = "1.0.0"
    tags: Tuple[str, ...] = ()
    source_path: str = ""

    def __post_init__(self):
        if not self.skill_id:
            raise ValueError("skill_id must not be empty")
        # Lists from YAML are frozen into tuples
        object.__setattr__(self, "triggers", tuple(self.triggers))
        object.__setattr__(self, "tags", tuple(self.tags))
        for trigger in self.triggers:
            if not isinstance(trigger, str):
                raise ValueError(f"Trigger {trigger!r} is not a string")
            if not trigger.strip():
                raise ValueError("Empty trigger is not allowed")

    @property
    def is_matchable(self) -> bool:
        """Skills without triggers are loaded but can never activate."""
        return len(self.triggers) > 0

    def to_dict(self, include_body: bool = False) -> dict:
        data = {
            "skill_id": self.skill_id,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "tags": list(self.tags),
            "triggers": list(self.triggers),
            "source_path": self.source_path,
        }
        if include_body:
            data["body"] = self.body
        return data
