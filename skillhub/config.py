# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
SkillHub Configuration
Reads environment variables and an optional .env file from the working directory
"""
import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file from the working directory
load_dotenv(os.path.join(os.getcwd(), ".env"))


class Settings(BaseSettings):
    """Application settings"""

    # Environment configuration
    environment: str = "development"  # development, production, or testing
    debug: bool = False
    log_level: str = "INFO"

    # Skill loading
    skills_root: str = "skills"
    skill_filenames: List[str] = ["SKILL.md", "README.md"]
    max_skill_file_size: int = 10 * 1024 * 1024  # 10MB

    # HTTP service
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: List[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"

    @property
    def skills_root_path(self) -> Path:
        return Path(self.skills_root).expanduser()

    @property
    def logging_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.INFO)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields from .env file


def configure_logging(settings: "Settings") -> None:
    """Configure root logging for an entry point."""
    logging.basicConfig(
        level=settings.logging_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Global settings instance
settings = Settings()
