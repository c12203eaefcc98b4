# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Loader - Parses SKILL.md files and validates structure.

Responsible for:
- Discovering skill directories under a skill root
- Parsing YAML frontmatter + markdown content
- Validating required fields
- Building an immutable SkillRegistry of SkillRecord instances

Broken skill directories never abort a load: each one is reported as a
SkipWithWarning and excluded. Only a missing or unreadable root is fatal.

SKILL.md Format:
```markdown
---
name: maven
description: "Build and dependency management with Apache Maven"
version: 1.0.0
tags: [java, build]
triggers:
  - maven
  - pom.xml
  - "<mvn>"
---

## Instructions
[Guidance injected into the agent's working context]
```
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from skillhub.core.exceptions import ConfigurationError, SkipWithWarning
from skillhub.core.skills.models import SkillRecord
from skillhub.core.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)

DEFAULT_SKILL_FILENAMES = ("SKILL.md", "README.md")

# Maximum file size for skill documents (10MB)
MAX_SKILL_FILE_SIZE = 10 * 1024 * 1024

MAX_SKILL_DESCRIPTION_LENGTH = 1024

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
SKILL_ID_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


@dataclass
class LoadResult:
    """Outcome of scanning one skill root."""
    registry: SkillRegistry
    warnings: List[SkipWithWarning] = field(default_factory=list)

    @property
    def skipped_dirs(self) -> List[str]:
        return [w.skill_dir for w in self.warnings]


@dataclass
class SkillDirectoryStatus:
    """Presence check for a single skill directory."""
    skill_dir: str
    document: Optional[str]
    error: Optional[str] = None

    @property
    def name(self) -> str:
        return Path(self.skill_dir).name

    @property
    def has_document(self) -> bool:
        return self.document is not None


class SkillLoader:
    """
    Load and parse skill documents from a skill root.

    The root holds one subdirectory per skill; the directory name becomes
    the skill id. Subdirectories are visited in sorted order, which is the
    order skills appear in the resulting registry.

    Usage:
        loader = SkillLoader()
        result = loader.load("skills")

        for warning in result.warnings:
            print(warning.message)
        maven = result.registry["maven"]
    """

    def __init__(
        self,
        skill_filenames: Sequence[str] = DEFAULT_SKILL_FILENAMES,
        max_file_size: int = MAX_SKILL_FILE_SIZE
    ):
        """
        Initialize loader.

        Args:
            skill_filenames: Recognized document names, in order of preference
            max_file_size: Documents larger than this are skipped
        """
        if not skill_filenames:
            raise ConfigurationError("At least one skill document filename is required")
        self.skill_filenames = tuple(skill_filenames)
        self.max_file_size = max_file_size

    def _resolve_root(self, root: Union[str, Path]) -> Path:
        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise ConfigurationError(
                f"Skill root {root_path} does not exist",
                detail={"root": str(root_path)}
            )
        if not root_path.is_dir():
            raise ConfigurationError(
                f"Skill root {root_path} is not a directory",
                detail={"root": str(root_path)}
            )
        return root_path

    def discover(self, root: Union[str, Path]) -> List[Path]:
        """
        List candidate skill directories under root, in scan order.

        Hidden directories and plain files are ignored.

        Raises:
            ConfigurationError: root is missing, not a directory, or unreadable
        """
        root_path = self._resolve_root(root)
        try:
            entries = sorted(root_path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read skill root {root_path}: {e}",
                detail={"root": str(root_path)}
            ) from e

        return [p for p in entries if p.is_dir() and not p.name.startswith(".")]

    def find_document(self, skill_dir: Path) -> Optional[Path]:
        """
        Return the first recognized skill document in skill_dir, if any.

        Raises:
            SkipWithWarning: skill_dir cannot be searched (e.g. permission denied)
        """
        for filename in self.skill_filenames:
            candidate = skill_dir / filename
            try:
                if candidate.is_file():
                    return candidate
            except OSError as e:
                raise SkipWithWarning(skill_dir, f"cannot read {skill_dir.name}: {e}") from e
        return None

    def check(self, root: Union[str, Path]) -> List[SkillDirectoryStatus]:
        """Report, per skill directory, which document (if any) is present."""
        statuses = []
        for skill_dir in self.discover(root):
            try:
                document = self.find_document(skill_dir)
            except SkipWithWarning as w:
                logger.warning(w.message)
                statuses.append(SkillDirectoryStatus(str(skill_dir), None, error=w.reason))
                continue
            statuses.append(SkillDirectoryStatus(
                skill_dir=str(skill_dir),
                document=str(document) if document else None
            ))
        return statuses

    def load(self, root: Union[str, Path]) -> LoadResult:
        """
        Load every skill under root.

        Args:
            root: Directory containing one subdirectory per skill

        Returns:
            LoadResult with the registry and one warning per skipped directory

        Raises:
            ConfigurationError: root is missing, not a directory, or unreadable
        """
        skills: List[SkillRecord] = []
        warnings: List[SkipWithWarning] = []

        for skill_dir in self.discover(root):
            try:
                skills.append(self.load_skill(skill_dir))
            except SkipWithWarning as w:
                logger.warning(w.message)
                warnings.append(w)

        logger.info(
            f"Loaded {len(skills)} skills from {root} "
            f"({len(warnings)} skipped)"
        )
        return LoadResult(registry=SkillRegistry(skills), warnings=warnings)

    def load_skill(self, skill_dir: Union[str, Path]) -> SkillRecord:
        """
        Load and parse a single skill from its directory.

        Args:
            skill_dir: Path to skill directory containing SKILL.md

        Returns:
            The parsed SkillRecord

        Raises:
            SkipWithWarning: document missing, unreadable or malformed
        """
        skill_dir = Path(skill_dir)
        document = self.find_document(skill_dir)
        if document is None:
            raise SkipWithWarning(
                skill_dir, f"no skill document ({', '.join(self.skill_filenames)})"
            )

        content = self._read_document(skill_dir, document)
        frontmatter, body = self._parse_frontmatter(skill_dir, content)
        record = self._build_record(skill_dir, document, frontmatter, body)

        logger.debug(f"Parsed skill '{record.skill_id}' from {document}")
        return record

    def _read_document(self, skill_dir: Path, document: Path) -> str:
        try:
            file_size = document.stat().st_size
            if file_size > self.max_file_size:
                raise SkipWithWarning(skill_dir, f"file too large ({file_size} bytes)")
            return document.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise SkipWithWarning(skill_dir, f"cannot read {document.name}: {e}") from e

    def _parse_frontmatter(self, skill_dir: Path, content: str) -> Tuple[Dict[str, Any], str]:
        """
        Split a document into its YAML frontmatter and markdown body.

        Frontmatter is delimited by --- lines at the very start of the file.
        """
        match = FRONTMATTER_PATTERN.match(content)
        if not match:
            raise SkipWithWarning(skill_dir, "no valid YAML frontmatter found")

        try:
            frontmatter = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            raise SkipWithWarning(skill_dir, f"invalid YAML in frontmatter: {e}") from e

        if not isinstance(frontmatter, dict):
            raise SkipWithWarning(skill_dir, "frontmatter is not a mapping")

        body = content[match.end():].strip()
        return frontmatter, body

    def _build_record(
        self,
        skill_dir: Path,
        document: Path,
        frontmatter: Dict[str, Any],
        body: str
    ) -> SkillRecord:
        skill_id = skill_dir.name
        name = frontmatter.get("name")
        description = frontmatter.get("description")

        if not name or not description:
            raise SkipWithWarning(skill_dir, "missing required 'name' or 'description'")

        triggers = self._parse_string_list(skill_dir, frontmatter, "triggers")
        tags = self._parse_string_list(skill_dir, frontmatter, "tags")

        if any(not t.strip() for t in triggers):
            raise SkipWithWarning(skill_dir, "empty trigger is not allowed")

        if not self.validate_skill_id(skill_id):
            logger.warning(f"Skill id '{skill_id}' is not kebab-case")
        if str(name) != skill_id:
            logger.debug(f"Skill '{skill_id}' declares name '{name}'")
        if not triggers:
            logger.warning(f"Skill '{skill_id}' has no triggers and will never activate")

        description = str(description)
        if len(description) > MAX_SKILL_DESCRIPTION_LENGTH:
            logger.warning(
                f"Description of '{skill_id}' exceeds "
                f"{MAX_SKILL_DESCRIPTION_LENGTH} chars, truncating"
            )
            description = description[:MAX_SKILL_DESCRIPTION_LENGTH]

        try:
            return SkillRecord(
                skill_id=skill_id,
                name=str(name),
                description=description,
                triggers=tuple(triggers),
                body=body,
                version=str(frontmatter.get("version", "1.0.0")),
                tags=tuple(tags),
                source_path=str(document)
            )
        except ValueError as e:
            raise SkipWithWarning(skill_dir, str(e)) from e

    def _parse_string_list(self, skill_dir: Path, frontmatter: Dict[str, Any], key: str) -> List[str]:
        value = frontmatter.get(key)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise SkipWithWarning(skill_dir, f"'{key}' must be a list of strings")
        return value

    @staticmethod
    def validate_skill_id(skill_id: str) -> bool:
        """
        Validate skill ID format (kebab-case).

        Args:
            skill_id: The skill identifier to validate

        Returns:
            True if valid, False otherwise
        """
        if not skill_id:
            return False
        return bool(SKILL_ID_PATTERN.match(skill_id))
