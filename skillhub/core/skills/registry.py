# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Registry - Immutable, ordered index of loaded skills.

Responsible for:
- Holding the skills produced by one loader scan, in scan order
- Providing query APIs (by ID, by tags, text search)

The registry is a plain value: it is built explicitly (usually by
SkillLoader.load) and handed to whoever needs it. There is no global
instance, so independent registries can coexist, e.g. one per test.
Reloading means building a new registry and swapping the reference.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Set

from skillhub.core.exceptions import DuplicateSkillError
from skillhub.core.skills.models import SkillRecord

logger = logging.getLogger(__name__)


class SkillRegistry(Mapping):
    """
    Read-only mapping of skill_id -> SkillRecord.

    Iteration yields skill ids in the order the skills were loaded.

    Usage:
        registry = SkillRegistry([maven_record, docker_record])

        skill = registry.get_skill("maven")
        tagged = registry.find_by_tags(["java"])
    """

    def __init__(self, skills: Iterable[SkillRecord] = ()):
        by_id: Dict[str, SkillRecord] = {}
        by_tag: Dict[str, Set[str]] = {}

        for skill in skills:
            if skill.skill_id in by_id:
                raise DuplicateSkillError(skill.skill_id)
            by_id[skill.skill_id] = skill

            for tag in skill.tags:
                by_tag.setdefault(tag.lower(), set()).add(skill.skill_id)

        self._skills = MappingProxyType(by_id)
        self._order = tuple(by_id)
        self._by_tag = {tag: frozenset(ids) for tag, ids in by_tag.items()}

    # Mapping protocol

    def __getitem__(self, skill_id: str) -> SkillRecord:
        return self._skills[skill_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"SkillRegistry({list(self._order)!r})"

    # Queries

    def get_skill(self, skill_id: str) -> Optional[SkillRecord]:
        """Get skill by ID."""
        return self._skills.get(skill_id)

    def list_all(self) -> List[SkillRecord]:
        """List all registered skills in load order."""
        return [self._skills[sid] for sid in self._order]

    def find_by_tags(self, tags: List[str], match_all: bool = False) -> List[SkillRecord]:
        """
        Find skills matching tags.

        Args:
            tags: List of tags to match
            match_all: If True, skill must have all tags. If False, any tag matches.

        Returns:
            List of matching skills, in load order
        """
        if not tags:
            return []

        tag_sets = [self._by_tag.get(t.lower(), frozenset()) for t in tags]
        if match_all:
            matching_ids = frozenset.intersection(*tag_sets)
        else:
            matching_ids = frozenset.union(*tag_sets)

        return [self._skills[sid] for sid in self._order if sid in matching_ids]

    def search(self, query: str) -> List[SkillRecord]:
        """
        Simple text search across skill ids, names and descriptions.

        For trigger-based activation, use a Matcher instead.
        """
        query_lower = query.lower().strip()
        if not query_lower:
            return []
        results = []
        for skill in self.list_all():
            if (query_lower in skill.name.lower() or
                query_lower in skill.description.lower() or
                query_lower in skill.skill_id.lower()):
                results.append(skill)
        return results

    @property
    def skill_count(self) -> int:
        """Get number of registered skills."""
        return len(self._order)

    @property
    def tags(self) -> Dict[str, int]:
        """Tag -> number of skills carrying it."""
        return {tag: len(ids) for tag, ids in self._by_tag.items()}
