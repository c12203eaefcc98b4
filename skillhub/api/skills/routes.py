# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skills API - discovery, lookup, and trigger matching endpoints.

Provides REST endpoints for agent runtimes that want the skills activated
by a piece of user text, plus read-only browsing of the loaded registry.
"""

from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional
from pydantic import BaseModel, Field
import logging

from skillhub.core.exceptions import ConfigurationError, ResourceNotFoundError
from skillhub.core.skills import (
    SkillRecord,
    SkillRegistry,
    Matcher,
    build_skill_context,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["skills"])


# =============================================================================
# Pydantic Models for Request/Response
# =============================================================================

class SkillResponse(BaseModel):
    """Skill data for API responses."""
    skill_id: str
    name: str
    description: str
    version: str
    tags: List[str]
    triggers: List[str]


class SkillDetailResponse(SkillResponse):
    """Detailed skill with its markdown body."""
    body: str
    source_path: str


class SkillMatchRequest(BaseModel):
    """Request to find the skills activated by a piece of text."""
    query: str = Field(..., description="User text to match against skill triggers")
    include_body: bool = Field(False, description="Include skill bodies and rendered context")


class SkillMatchItem(BaseModel):
    """One activated skill with the trigger that activated it."""
    skill: SkillResponse
    matched_trigger: str
    match_span: List[int]
    body: Optional[str] = None


class SkillMatchResponse(BaseModel):
    """Ordered activation result."""
    query: str
    matches: List[SkillMatchItem]
    context: Optional[str] = None


class SkillReloadResponse(BaseModel):
    """Result of re-scanning the skill root."""
    total_skills: int
    skipped: List[str]


# =============================================================================
# Dependencies
# =============================================================================

def get_registry(request: Request) -> SkillRegistry:
    """The registry currently installed on the application."""
    registry = request.app.state.registry
    if registry is None:
        raise ConfigurationError(
            "No skill registry is loaded; start the app with its lifespan or pass a registry"
        )
    return registry


def get_matcher(request: Request) -> Matcher:
    return request.app.state.matcher


# =============================================================================
# Helper Functions
# =============================================================================

def _skill_to_response(skill: SkillRecord) -> SkillResponse:
    """Convert SkillRecord to SkillResponse."""
    return SkillResponse(
        skill_id=skill.skill_id,
        name=skill.name,
        description=skill.description,
        version=skill.version,
        tags=list(skill.tags),
        triggers=list(skill.triggers)
    )


def _skill_to_detail_response(skill: SkillRecord) -> SkillDetailResponse:
    """Convert SkillRecord to SkillDetailResponse."""
    return SkillDetailResponse(
        skill_id=skill.skill_id,
        name=skill.name,
        description=skill.description,
        version=skill.version,
        tags=list(skill.tags),
        triggers=list(skill.triggers),
        body=skill.body,
        source_path=skill.source_path
    )


# =============================================================================
# Skill Endpoints
# =============================================================================

@router.get("", response_model=List[SkillResponse])
async def list_skills(
    tag: Optional[str] = Query(None, description="Filter by tag"),
    search: Optional[str] = Query(None, description="Search by id/name/description"),
    registry: SkillRegistry = Depends(get_registry)
):
    """
    List all loaded skills in load order, with optional filtering.

    Query parameters:
    - tag: Filter by a specific tag
    - search: Text search across ids, names and descriptions
    """
    if tag:
        skills = registry.find_by_tags([tag])
    elif search:
        skills = registry.search(search)
    else:
        skills = registry.list_all()

    return [_skill_to_response(s) for s in skills]


@router.get("/summary")
async def get_skills_summary(
    request: Request,
    registry: SkillRegistry = Depends(get_registry)
):
    """
    Get a summary of loaded skills.

    Returns counts, tag statistics and the directories skipped at load time.
    """
    top_tags = sorted(registry.tags.items(), key=lambda x: x[1], reverse=True)[:20]
    warnings = request.app.state.load_warnings

    return {
        "total_skills": len(registry),
        "matchable_skills": sum(1 for s in registry.list_all() if s.is_matchable),
        "top_tags": dict(top_tags),
        "skipped": [w.detail for w in warnings]
    }


@router.post("/match", response_model=SkillMatchResponse)
async def match_skills(
    request_data: SkillMatchRequest,
    registry: SkillRegistry = Depends(get_registry),
    matcher: Matcher = Depends(get_matcher)
):
    """
    Find the skills activated by the given text.

    Results are in load order; a skill appears at most once.
    """
    results = matcher.match(registry, request_data.query)
    logger.debug(f"Query activated {[r.skill_id for r in results]}")

    items = []
    for result in results:
        skill = registry[result.skill_id]
        items.append(SkillMatchItem(
            skill=_skill_to_response(skill),
            matched_trigger=result.matched_trigger,
            match_span=list(result.match_span),
            body=skill.body if request_data.include_body else None
        ))

    context = None
    if request_data.include_body:
        context = build_skill_context(registry[r.skill_id] for r in results)

    return SkillMatchResponse(query=request_data.query, matches=items, context=context)


@router.post("/reload", response_model=SkillReloadResponse)
async def reload_skills(request: Request):
    """
    Re-scan the skill root and install a fresh registry.

    The previous registry stays in place if the root has become unusable.
    """
    state = request.app.state
    result = state.loader.load(state.skills_root)

    state.registry = result.registry
    state.load_warnings = result.warnings
    logger.info(f"Reloaded {len(result.registry)} skills")

    return SkillReloadResponse(
        total_skills=len(result.registry),
        skipped=result.skipped_dirs
    )


@router.get("/{skill_id}", response_model=SkillDetailResponse)
async def get_skill(skill_id: str, registry: SkillRegistry = Depends(get_registry)):
    """Get detailed information for a specific skill."""
    skill = registry.get_skill(skill_id)

    if not skill:
        raise ResourceNotFoundError("Skill", skill_id)

    return _skill_to_detail_response(skill)
