"""Shelters library — per-region shelter dataset fetching.

Public API:
    - ShelterRepository: Category-ordered feature collection fetcher
    - create_shelter_repository: Build a repository from settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shelter_nav.lib.shelters.repository import DEFAULT_CATEGORIES, ShelterRepository

if TYPE_CHECKING:
    from shelter_nav.core.config import Settings


def create_shelter_repository(settings: Settings) -> ShelterRepository:
    """Build a ShelterRepository from application settings."""
    return ShelterRepository(
        settings.shelter_api_base_url,
        categories=settings.shelter_category_list or DEFAULT_CATEGORIES,
        timeout=settings.shelter_api_timeout,
        user_agent=settings.http_user_agent,
    )


__all__ = [
    "DEFAULT_CATEGORIES",
    "ShelterRepository",
    "create_shelter_repository",
]
