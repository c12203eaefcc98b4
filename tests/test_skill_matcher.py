# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for trigger-based skill activation."""
import pytest

from skillhub.core.exceptions import InvalidQueryError
from skillhub.core.skills import (
    Matcher,
    MatchResult,
    SkillRegistry,
    SubstringMatcher,
    TriggerKind,
    classify_trigger,
    match_skills,
)
from tests.conftest import make_record


@pytest.fixture
def matcher() -> SubstringMatcher:
    return SubstringMatcher()


def activated_ids(matcher, registry, text):
    return [r.skill_id for r in matcher.match(registry, text)]


class TestScenario:
    def test_pom_xml_activates_maven_only(self, matcher, registry):
        assert activated_ids(matcher, registry, "help me write a pom.xml") == ["maven"]

    def test_dockerfile_activates_docker_only(self, matcher, registry):
        assert activated_ids(matcher, registry, "deploy with dockerfile") == ["docker"]

    def test_unrelated_text_activates_nothing(self, matcher, registry):
        assert matcher.match(registry, "hello") == []


class TestMatchProperties:
    def test_only_registry_skills_are_returned(self, matcher, registry):
        results = matcher.match(registry, "docker and maven and pom.xml and kubernetes")
        assert {r.skill_id for r in results} <= set(registry)

    def test_idempotent(self, matcher, registry):
        text = "mvn? maven! Dockerfile"
        assert matcher.match(registry, text) == matcher.match(registry, text)

    def test_case_insensitive(self, matcher, registry):
        assert matcher.match(registry, "MAVEN") == matcher.match(registry, "maven")
        assert activated_ids(matcher, registry, "MAVEN") == ["maven"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_text_matches_nothing(self, matcher, registry, text):
        assert matcher.match(registry, text) == []

    def test_missing_triggers_do_not_match(self, matcher):
        registry = SkillRegistry([make_record("maven", ["maven", "mvn"])])
        assert matcher.match(registry, "gradle build") == []

    def test_results_follow_registry_order(self, matcher):
        registry = SkillRegistry([
            make_record("zeta", ["build"]),
            make_record("alpha", ["build"]),
        ])
        # No ranking: load order wins even though both match equally
        assert activated_ids(matcher, registry, "build it") == ["zeta", "alpha"]

    def test_each_skill_reported_once(self, matcher):
        registry = SkillRegistry([make_record("maven", ["maven", "mvn", "pom.xml"])])
        results = matcher.match(registry, "mvn install on the maven pom.xml")
        assert len(results) == 1

    def test_first_declared_trigger_is_reported(self, matcher):
        registry = SkillRegistry([make_record("maven", ["pom.xml", "mvn"])])
        result = matcher.match(registry, "run mvn on pom.xml")[0]
        assert result.matched_trigger == "pom.xml"
        assert result.match_span == (11, 18)

    def test_skill_without_triggers_never_matches(self, matcher):
        registry = SkillRegistry([make_record("notes")])
        assert matcher.match(registry, "notes about anything") == []

    def test_empty_registry(self, matcher):
        assert matcher.match(SkillRegistry(), "maven") == []

    def test_registry_is_not_modified(self, matcher, registry):
        before = registry.list_all()
        matcher.match(registry, "maven docker")
        assert registry.list_all() == before


class TestPlainTriggers:
    def test_substring_inside_word(self, matcher):
        registry = SkillRegistry([make_record("docker", ["docker"])])
        assert activated_ids(matcher, registry, "my Dockerfile is broken") == ["docker"]

    def test_match_span_points_into_text(self, matcher):
        registry = SkillRegistry([make_record("maven", ["pom.xml"])])
        text = "help me write a POM.XML"
        result = matcher.match(registry, text)[0]
        start, end = result.match_span
        assert text[start:end] == "POM.XML"

    def test_regex_characters_are_literal(self, matcher):
        registry = SkillRegistry([make_record("cpp", ["c++"]), make_record("maven", ["pom.xml"])])
        assert activated_ids(matcher, registry, "learning c++") == ["cpp"]
        assert activated_ids(matcher, registry, "pomXxml") == []

    def test_whitespace_inside_trigger_is_flexible(self, matcher):
        registry = SkillRegistry([make_record("compose", ["docker  compose"])])
        assert activated_ids(matcher, registry, "run docker\ncompose up") == ["compose"]
        assert activated_ids(matcher, registry, "run docker-compose up") == []

    def test_unicode_case_folding(self, matcher):
        registry = SkillRegistry([make_record("strasse", ["straße"])])
        assert activated_ids(matcher, registry, "STRASSE") == ["strasse"]


class TestTagTriggers:
    def test_classification(self):
        assert classify_trigger("<java>") is TriggerKind.TAG
        assert classify_trigger("java") is TriggerKind.PLAIN
        assert classify_trigger("<>") is TriggerKind.PLAIN
        assert classify_trigger("a < b > c") is TriggerKind.PLAIN

    def test_tag_requires_delimiters(self, matcher):
        registry = SkillRegistry([make_record("java", ["<java>"])])
        assert activated_ids(matcher, registry, "I love java") == []
        assert activated_ids(matcher, registry, "see <JAVA> block") == ["java"]

    def test_tag_is_contiguous(self, matcher):
        registry = SkillRegistry([make_record("java", ["<java>"])])
        assert activated_ids(matcher, registry, "< java >") == []
        assert activated_ids(matcher, registry, "<java >") == []

    def test_tag_span_includes_delimiters(self, matcher):
        registry = SkillRegistry([make_record("java", ["<java>"])])
        result = matcher.match(registry, "x <java> y")[0]
        assert result.match_span == (2, 8)


class TestInputValidation:
    @pytest.mark.parametrize("bad", [None, 42, b"maven", ["maven"]])
    def test_non_text_input_is_rejected(self, matcher, registry, bad):
        with pytest.raises(InvalidQueryError):
            matcher.match(registry, bad)


class TestMatcherInterface:
    def test_activate_returns_records_in_order(self, matcher, registry):
        skills = matcher.activate(registry, "maven in docker")
        assert [s.skill_id for s in skills] == ["docker", "maven"]

    def test_match_skills_uses_default_matcher(self, registry):
        results = match_skills(registry, "pom.xml")
        assert results == [MatchResult("maven", "pom.xml", (0, 7))]

    def test_alternate_strategy_can_be_swapped_in(self, registry):
        class ExactIdMatcher(Matcher):
            def match(self, registry, text):
                return [
                    MatchResult(sid, sid, (0, len(text)))
                    for sid in registry if sid == text
                ]

        assert [s.skill_id for s in ExactIdMatcher().activate(registry, "docker")] == ["docker"]
        assert match_skills(registry, "docker", matcher=ExactIdMatcher())[0].skill_id == "docker"
