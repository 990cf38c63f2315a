"""Static page content (about page and FAQ).

Both records are loaded once at startup from the content directory:

- ``about.md``: a title heading, an intro paragraph and ``##`` sections
  for the mission, the team, the topics (as a bullet list) and the community.
- ``faq.json``: ``{"items": [{"question": ..., "answer": ...}]}`` or a bare list.

Anything missing or malformed falls back to built-in defaults.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class AboutContent(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    mission: str
    who_we_are: str = Field(alias="whoWeAre")
    what_we_cover: tuple[str, ...] = Field(alias="whatWeCover")
    join_community: str = Field(alias="joinCommunity")


class FAQItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class FAQContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[FAQItem, ...]


DEFAULT_ABOUT = AboutContent(
    title="About Our Podcast",
    description=(
        "Welcome to our podcast, a space where we explore the art, science, "
        "and business of audio storytelling."
    ),
    mission=(
        "We're dedicated to demystifying the podcasting world and providing actionable "
        "insights for creators at every stage of their journey. Whether you're just "
        "starting out or looking to scale your existing show, we've got you covered."
    ),
    who_we_are=(
        "Our team brings together years of experience in audio production, content "
        "creation, and digital media. We're passionate about the power of voice and "
        "the unique intimacy that podcasting offers."
    ),
    what_we_cover=(
        "Production techniques and sound design secrets",
        "Audience growth strategies that actually work",
        "Monetization approaches for sustainable podcasting",
        "Industry insights from leading voices in audio",
        "Technical know-how without the jargon",
    ),
    join_community=(
        "We believe podcasting is better together. Join thousands of creators who tune "
        "in each week to level up their craft. Subscribe on your favorite platform and "
        "never miss an episode."
    ),
)

DEFAULT_FAQ = FAQContent(
    items=(
        FAQItem(
            question="How often do you release new episodes?",
            answer=(
                "We release a new episode every week, typically on Sundays. Occasionally, "
                "we'll drop bonus episodes or special interviews between our regular schedule."
            ),
        ),
        FAQItem(
            question="Where can I listen to the podcast?",
            answer=(
                "Our podcast is available on all major platforms including Apple Podcasts, "
                "Spotify, and directly on this website."
            ),
        ),
        FAQItem(
            question="Can I suggest a topic or guest?",
            answer=(
                "Absolutely! Send us your topic ideas or guest suggestions through our "
                "contact form or social media channels. We read every message."
            ),
        ),
        FAQItem(
            question="Do you have transcripts available?",
            answer=(
                "Yes, we provide full transcripts for accessibility. You can find them on "
                "each episode's page, usually within 48 hours of release."
            ),
        ),
        FAQItem(
            question="How can I support the podcast?",
            answer=(
                "Subscribe, rate, and review on your podcast platform of choice. Sharing "
                "episodes with friends who might enjoy them also helps us grow."
            ),
        ),
        FAQItem(
            question="Do you take advertising or sponsorships?",
            answer=(
                "We work with select sponsors whose products align with our audience's "
                "interests. All sponsorships are clearly disclosed."
            ),
        ),
        FAQItem(
            question="Can I use clips from your podcast?",
            answer=(
                "Short clips for educational or commentary purposes are fine. For commercial "
                "use or longer excerpts, please contact us for permission."
            ),
        ),
        FAQItem(
            question="How do I contact the hosts?",
            answer=(
                "Reach us through our contact form, email (listed in episode show notes), "
                "or on social media. We try to respond within a few business days."
            ),
        ),
    )
)

# Section headings in about.md -> AboutContent field
_ABOUT_SECTIONS = {
    "mission": "mission",
    "our mission": "mission",
    "who we are": "who_we_are",
    "what we cover": "what_we_cover",
    "join our community": "join_community",
    "join the community": "join_community",
}

_BULLET = re.compile(r"^\s*[-*+]\s+(.*)$")


class ContentService:
    def __init__(self, about: AboutContent = DEFAULT_ABOUT, faq: FAQContent = DEFAULT_FAQ):
        self._about = about
        self._faq = faq

    @classmethod
    def load(cls, content_dir: str | Path) -> "ContentService":
        content_dir = Path(content_dir)
        return cls(
            about=load_about(content_dir / "about.md"),
            faq=load_faq(content_dir / "faq.json"),
        )

    def about(self) -> AboutContent:
        return self._about

    def faq(self) -> FAQContent:
        return self._faq


def load_about(path: Path) -> AboutContent:
    try:
        about = parse_about_markdown(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not load about content from %s (%s); using built-in content", path, e)
        return DEFAULT_ABOUT
    logger.info("Loaded about content from %s", path)
    return about


def load_faq(path: Path) -> FAQContent:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, list):
            data = {"items": data}
        faq = FAQContent.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Could not load FAQ from %s (%s); using built-in FAQ", path, e)
        return DEFAULT_FAQ
    if not faq.items:
        logger.warning("FAQ file %s has no items; using built-in FAQ", path)
        return DEFAULT_FAQ
    logger.info("Loaded %d FAQ items from %s", len(faq.items), path)
    return faq


def parse_about_markdown(text: str) -> AboutContent:
    """Parse the about page Markdown into an AboutContent.

    Raises ValueError when the title or a required section is missing.
    """
    title = None
    intro: list[str] = []
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("## "):
            field = _ABOUT_SECTIONS.get(stripped[3:].strip().lower())
            current = sections.setdefault(field, []) if field else None
        elif stripped.startswith("# ") and title is None:
            title = stripped[2:].strip()
            current = intro
        elif current is not None:
            current.append(line)

    if not title:
        raise ValueError("about page has no title heading")

    fields = {"title": title, "description": _paragraph(intro)}
    for field in ("mission", "who_we_are", "join_community"):
        fields[field] = _paragraph(sections.get(field, []))
    fields["what_we_cover"] = tuple(
        match.group(1).strip()
        for line in sections.get("what_we_cover", [])
        if (match := _BULLET.match(line))
    )

    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValueError(f"about page is missing sections: {', '.join(missing)}")
    return AboutContent(**fields)


def _paragraph(lines: list[str]) -> str:
    return " ".join(line.strip() for line in lines if line.strip())
