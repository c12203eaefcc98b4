# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skills System - Markdown skill documents activated by keyword triggers.

This module provides:
- SkillLoader: Parse and validate SKILL.md files into a SkillRegistry
- SkillRegistry: Immutable, ordered index of SkillRecord values
- Matcher / SubstringMatcher: Decide which skills a piece of text activates
"""

from skillhub.core.skills.models import SkillRecord
from skillhub.core.skills.registry import SkillRegistry
from skillhub.core.skills.loader import SkillLoader, LoadResult, SkillDirectoryStatus
from skillhub.core.skills.matcher import (
    Matcher,
    MatchResult,
    SubstringMatcher,
    TriggerKind,
    classify_trigger,
    match_skills,
)
from skillhub.core.skills.context import build_skill_context

__all__ = [
    "SkillRecord",
    "SkillRegistry",
    "SkillLoader",
    "LoadResult",
    "SkillDirectoryStatus",
    "Matcher",
    "MatchResult",
    "SubstringMatcher",
    "TriggerKind",
    "classify_trigger",
    "match_skills",
    "build_skill_context",
]
