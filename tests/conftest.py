# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Pytest Configuration and Fixtures for SkillHub Tests.

Provides temporary skill roots built from small SKILL.md documents.
"""

from pathlib import Path
from typing import List, Optional

import pytest
import yaml

from skillhub.core.skills import SkillLoader, SkillRecord, SkillRegistry


def write_skill(
    root: Path,
    skill_id: str,
    triggers: Optional[List[str]] = None,
    description: Optional[str] = None,
    body: str = "## Instructions\nDo the thing.",
    filename: str = "SKILL.md",
    **extra
) -> Path:
    """Write a skill document with YAML frontmatter and return its directory."""
    skill_dir = root / skill_id
    skill_dir.mkdir(parents=True, exist_ok=True)

    frontmatter = {
        "name": skill_id,
        "description": description or f"Guidance for {skill_id}",
    }
    if triggers is not None:
        frontmatter["triggers"] = triggers
    frontmatter.update(extra)

    content = f"---\n{yaml.safe_dump(frontmatter, sort_keys=False)}---\n\n{body}\n"
    (skill_dir / filename).write_text(content, encoding="utf-8")
    return skill_dir


@pytest.fixture
def skill_root(tmp_path) -> Path:
    """Root with the maven and docker skills."""
    root = tmp_path / "skills"
    root.mkdir()
    write_skill(root, "maven", ["maven", "pom.xml"], tags=["java", "build"])
    write_skill(root, "docker", ["docker", "dockerfile"], tags=["devops"])
    return root


@pytest.fixture
def loader() -> SkillLoader:
    return SkillLoader()


@pytest.fixture
def registry(skill_root, loader) -> SkillRegistry:
    return loader.load(skill_root).registry


def make_record(skill_id: str, triggers=(), tags=(), **kwargs) -> SkillRecord:
    """Build a SkillRecord in memory without touching the filesystem."""
    return SkillRecord(
        skill_id=skill_id,
        name=kwargs.pop("name", skill_id),
        description=kwargs.pop("description", f"Guidance for {skill_id}"),
        triggers=tuple(triggers),
        body=kwargs.pop("body", ""),
        tags=tuple(tags),
        **kwargs
    )
