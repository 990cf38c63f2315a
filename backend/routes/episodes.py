"""Episode routes: list, featured, and lookup by id or episode number."""

import logging

from fastapi import APIRouter, Depends, Request

from errors import BadRequestError
from services.episodes import Episode, EpisodeDirectory, normalize_episode_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/episodes", tags=["episodes"])


def get_directory(request: Request) -> EpisodeDirectory:
    return request.app.state.episodes


@router.get("", response_model=list[Episode], response_model_exclude_none=True)
async def list_episodes(directory: EpisodeDirectory = Depends(get_directory)) -> list[Episode]:
    """All episodes, newest first."""
    return directory.list()


# Declared before /{episode_id} so "featured" is not treated as an id.
@router.get("/featured", response_model=Episode, response_model_exclude_none=True)
async def featured_episode(directory: EpisodeDirectory = Depends(get_directory)) -> Episode:
    return directory.featured()


@router.get("/{episode_id}", response_model=Episode, response_model_exclude_none=True)
async def get_episode(episode_id: str, directory: EpisodeDirectory = Depends(get_directory)) -> Episode:
    """Look up an episode by id ("ep007") or by bare number ("7")."""
    episode_id = episode_id.strip()
    if not episode_id:
        raise BadRequestError("Episode ID is required")
    return directory.get_by_id(normalize_episode_id(episode_id))
