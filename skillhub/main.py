# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
SkillHub - FastAPI Service
Serves trigger matching over a skill root loaded once at startup
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from skillhub import __version__
from skillhub.config import Settings, settings as default_settings, configure_logging
from skillhub.core.error_handlers import register_error_handlers
from skillhub.core.skills import SkillLoader, SkillRegistry, Matcher, SubstringMatcher

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[SkillRegistry] = None,
    matcher: Optional[Matcher] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use (defaults to the global settings)
        registry: Pre-built registry; when omitted the skill root is loaded
            at startup and a missing root aborts startup
        matcher: Matching strategy (defaults to SubstringMatcher)
    """
    settings = settings or default_settings
    loader = SkillLoader(
        skill_filenames=settings.skill_filenames,
        max_file_size=settings.max_skill_file_size
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events"""
        logger.info(f"Starting SkillHub API in {settings.environment} mode")

        if app.state.registry is None:
            # ConfigurationError propagates: the service cannot run without skills
            result = loader.load(settings.skills_root_path)
            app.state.registry = result.registry
            app.state.load_warnings = result.warnings
            if result.warnings:
                logger.warning(f"{len(result.warnings)} skill directories were skipped")

        logger.info(f"SkillHub API ready with {len(app.state.registry)} skills")

        yield  # Server is running

        logger.info("Shutdown complete")

    app = FastAPI(
        title="SkillHub API",
        description="Keyword-triggered markdown skills for agent runtimes",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.loader = loader
    app.state.skills_root = settings.skills_root_path
    app.state.registry = registry
    app.state.load_warnings = []
    app.state.matcher = matcher or SubstringMatcher()

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "skills": len(app.state.registry or ())}

    from skillhub.api.skills import routes as skills
    app.include_router(skills.router)

    return app


def run(settings: Optional[Settings] = None) -> None:
    """Run the service with uvicorn."""
    settings = settings or default_settings
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    run()
