# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Matcher - Trigger-based skill activation.

Responsible for:
- Evaluating skill triggers against free-form user text
- Deciding which skills activate for that text

Trigger kinds:
1. Plain: case-insensitive substring, e.g. "pom.xml" or "docker compose".
   Surrounding whitespace is ignored and a run of whitespace inside the
   trigger matches any run of whitespace in the text.
2. Tag: wrapped in angle brackets, e.g. "<java>". Must appear in the text
   as one contiguous case-insensitive substring, delimiters included.

There is no relevance ranking. Activated skills come back in registry
(load) order, each at most once.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

from skillhub.core.exceptions import InvalidQueryError
from skillhub.core.skills.models import SkillRecord
from skillhub.core.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)

TAG_TRIGGER_PATTERN = re.compile(r"^<[^<>\s][^<>]*>$")


class TriggerKind(str, Enum):
    PLAIN = "plain"
    TAG = "tag"


@dataclass(frozen=True)
class MatchResult:
    """A skill activation and the trigger that caused it."""
    skill_id: str
    matched_trigger: str
    match_span: Tuple[int, int]  # offsets into the case-folded text


def classify_trigger(trigger: str) -> TriggerKind:
    """Tag triggers look like <token>; everything else is plain."""
    if TAG_TRIGGER_PATTERN.match(trigger.strip()):
        return TriggerKind.TAG
    return TriggerKind.PLAIN


@lru_cache(maxsize=4096)
def compile_trigger(trigger: str) -> re.Pattern:
    """Compile a trigger into a pattern to search case-folded text with."""
    folded = trigger.casefold().strip()
    if not folded:
        raise ValueError("Empty trigger is not allowed")

    if classify_trigger(trigger) is TriggerKind.TAG:
        return re.compile(re.escape(folded))

    return re.compile(r"\s+".join(re.escape(word) for word in folded.split()))


def normalize_text(text) -> str:
    """Validate and case-fold matcher input."""
    if not isinstance(text, str):
        raise InvalidQueryError(
            f"Query must be a string, got {type(text).__name__}",
            detail={"type": type(text).__name__}
        )
    return text.casefold()


class Matcher(ABC):
    """
    Capability interface for skill activation strategies.

    Implementations must be pure: the same registry and text always give
    the same ordered result, and the registry is never modified.
    """

    @abstractmethod
    def match(self, registry: SkillRegistry, text: str) -> List[MatchResult]:
        """Return one MatchResult per activated skill, in registry order."""

    def activate(self, registry: SkillRegistry, text: str) -> List[SkillRecord]:
        """Return the activated skill records, in registry order."""
        return [registry[m.skill_id] for m in self.match(registry, text)]


class SubstringMatcher(Matcher):
    """
    Default matcher: keyword triggers as case-insensitive substrings.

    Example usage:
        matcher = SubstringMatcher()
        for result in matcher.match(registry, "help me write a pom.xml"):
            print(f"{result.skill_id} via {result.matched_trigger!r}")
    """

    def match(self, registry: SkillRegistry, text: str) -> List[MatchResult]:
        normalized = normalize_text(text)
        if not normalized.strip():
            return []

        results = []
        for skill in registry.list_all():
            result = self._match_skill(skill, normalized)
            if result:
                results.append(result)

        logger.debug(f"Matched {len(results)} of {len(registry)} skills")
        return results

    def _match_skill(self, skill: SkillRecord, normalized: str) -> Optional[MatchResult]:
        for trigger in skill.triggers:
            found = compile_trigger(trigger).search(normalized)
            if found:
                return MatchResult(
                    skill_id=skill.skill_id,
                    matched_trigger=trigger,
                    match_span=found.span()
                )
        return None


_default_matcher = SubstringMatcher()


def match_skills(
    registry: SkillRegistry,
    text: str,
    matcher: Optional[Matcher] = None
) -> List[MatchResult]:
    """Match text against registry with the given (or default) matcher."""
    return (matcher or _default_matcher).match(registry, text)
