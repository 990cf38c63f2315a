"""Episode directory: an immutable, in-memory list of podcast episodes.

Episodes are loaded once at startup from ``episodes.json``. If the file is
missing or malformed the directory falls back to a small built-in set, so the
service can always be constructed.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from errors import NotFoundError

logger = logging.getLogger(__name__)


class Episode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    number: int = Field(gt=0)
    title: str
    description: str
    duration: str
    publish_date: str = Field(alias="publishDate")
    artwork_url: str = Field(alias="artworkUrl")
    artwork_alt: str | None = Field(default=None, alias="artworkAlt")
    audio_url: str = Field(alias="audioUrl")
    tags: tuple[str, ...] = ()


_episode_list = TypeAdapter(list[Episode])


DEFAULT_EPISODES = (
    Episode(
        id="ep001",
        number=1,
        title="Welcome to Our Podcast",
        description=(
            "In our inaugural episode, we introduce ourselves and share what you "
            "can expect from this podcast."
        ),
        duration="25:30",
        publish_date="2025-01-01",
        artwork_url="/assets/images/ep001.svg",
        artwork_alt="Episode 1 artwork",
        audio_url="/assets/audio/mock.mp3",
        tags=("introduction", "welcome"),
    ),
    Episode(
        id="ep002",
        number=2,
        title="Getting Started",
        description="We dive into the basics and share some fundamental concepts.",
        duration="32:15",
        publish_date="2025-01-08",
        artwork_url="/assets/images/ep002.svg",
        artwork_alt="Episode 2 artwork",
        audio_url="/assets/audio/mock.mp3",
        tags=("basics", "fundamentals"),
    ),
)


class EpisodeDirectory:
    def __init__(self, episodes=()):
        self._episodes: tuple[Episode, ...] = tuple(episodes)

    @classmethod
    def load(cls, path: str | Path) -> "EpisodeDirectory":
        """Load episodes from a JSON array, falling back to the defaults on any failure."""
        try:
            raw = Path(path).read_text(encoding="utf-8")
            episodes = _episode_list.validate_python(json.loads(raw))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Could not load episodes from %s (%s); using built-in episodes", path, e)
            return cls(DEFAULT_EPISODES)

        logger.info("Loaded %d episodes from %s", len(episodes), path)
        return cls(episodes)

    def list(self) -> list[Episode]:
        """All episodes, newest (highest number) first."""
        return sorted(self._episodes, key=lambda ep: ep.number, reverse=True)

    def get_by_id(self, episode_id: str) -> Episode:
        for episode in self._episodes:
            if episode.id == episode_id:
                return episode
        raise NotFoundError(f"Episode {episode_id} not found")

    def featured(self) -> Episode:
        if not self._episodes:
            raise NotFoundError("No featured episode available")
        return max(self._episodes, key=lambda ep: ep.number)

    def __len__(self) -> int:
        return len(self._episodes)


def normalize_episode_id(raw: str) -> str:
    """Map a bare episode number to its canonical id ("7" -> "ep007")."""
    if not (raw.isascii() and raw.isdigit()):
        return raw
    try:
        return f"ep{int(raw):03d}"
    except ValueError:
        # Past the int string-conversion limit; cannot match any episode.
        return raw
