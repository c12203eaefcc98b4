# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Render activated skills as a block for an agent's working context."""

from typing import Iterable

from skillhub.core.skills.models import SkillRecord

SECTION_SEPARATOR = "\n\n---\n\n"


def build_skill_context(skills: Iterable[SkillRecord]) -> str:
    """
    Join skill bodies into one markdown block, preserving order.

    Each skill becomes a "## Skill: <name>" section; skills with an empty
    body still contribute their heading and description.
    """
    sections = []
    for skill in skills:
        parts = [f"## Skill: {skill.name}", skill.description]
        if skill.body:
            parts.append(skill.body)
        sections.append("\n\n".join(parts))
    return SECTION_SEPARATOR.join(sections)
