# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for SkillRegistry and SkillRecord."""
import dataclasses

import pytest

from skillhub.core.exceptions import DuplicateSkillError
from skillhub.core.skills import SkillRegistry, build_skill_context
from tests.conftest import make_record


@pytest.fixture
def tagged_registry() -> SkillRegistry:
    return SkillRegistry([
        make_record("maven", ["maven"], tags=["java", "build"], description="Apache Maven builds"),
        make_record("gradle", ["gradle"], tags=["Java", "build"]),
        make_record("docker", ["docker"], tags=["devops"], name="Docker"),
    ])


class TestSkillRecord:
    def test_is_immutable(self):
        record = make_record("maven", ["maven"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.name = "other"

    def test_lists_are_frozen_to_tuples(self):
        record = make_record("maven", ["maven", "mvn"], tags=["java"])
        assert record.triggers == ("maven", "mvn")
        assert record.tags == ("java",)

    @pytest.mark.parametrize("triggers", [[""], ["maven", "  "], [None]])
    def test_invalid_triggers_rejected(self, triggers):
        with pytest.raises(ValueError):
            make_record("maven", triggers)

    def test_empty_skill_id_rejected(self):
        with pytest.raises(ValueError):
            make_record("")

    def test_to_dict(self):
        record = make_record("maven", ["maven"], body="## Instructions")
        assert "body" not in record.to_dict()
        assert record.to_dict(include_body=True)["body"] == "## Instructions"
        assert record.to_dict()["triggers"] == ["maven"]


class TestSkillRegistry:
    def test_mapping_protocol_preserves_order(self, tagged_registry):
        assert list(tagged_registry) == ["maven", "gradle", "docker"]
        assert len(tagged_registry) == 3
        assert tagged_registry.skill_count == 3
        assert "maven" in tagged_registry
        assert tagged_registry["docker"].name == "Docker"

    def test_unknown_id(self, tagged_registry):
        assert tagged_registry.get_skill("nope") is None
        with pytest.raises(KeyError):
            tagged_registry["nope"]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(DuplicateSkillError):
            SkillRegistry([make_record("maven"), make_record("maven")])

    def test_independent_instances(self):
        first = SkillRegistry([make_record("maven")])
        second = SkillRegistry([make_record("docker")])
        assert list(first) == ["maven"]
        assert list(second) == ["docker"]

    def test_find_by_tags_any(self, tagged_registry):
        skills = tagged_registry.find_by_tags(["JAVA", "devops"])
        assert [s.skill_id for s in skills] == ["maven", "gradle", "docker"]

    def test_find_by_tags_all(self, tagged_registry):
        skills = tagged_registry.find_by_tags(["java", "build"], match_all=True)
        assert [s.skill_id for s in skills] == ["maven", "gradle"]
        assert tagged_registry.find_by_tags(["java", "devops"], match_all=True) == []

    def test_find_by_tags_empty(self, tagged_registry):
        assert tagged_registry.find_by_tags([]) == []

    def test_search(self, tagged_registry):
        assert [s.skill_id for s in tagged_registry.search("apache")] == ["maven"]
        assert [s.skill_id for s in tagged_registry.search("DOCK")] == ["docker"]
        assert tagged_registry.search("  ") == []

    def test_tag_counts(self, tagged_registry):
        assert tagged_registry.tags == {"java": 2, "build": 2, "devops": 1}


class TestBuildSkillContext:
    def test_renders_sections_in_order(self):
        context = build_skill_context([
            make_record("maven", name="Maven", description="Builds", body="Use mvn -B"),
            make_record("docker", name="Docker", description="Containers"),
        ])
        assert context == (
            "## Skill: Maven\n\nBuilds\n\nUse mvn -B"
            "\n\n---\n\n"
            "## Skill: Docker\n\nContainers"
        )

    def test_empty(self):
        assert build_skill_context([]) == ""
