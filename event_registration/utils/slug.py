# event_registration/utils/slug.py
import re
import unicodedata
from sqlalchemy.orm import Session
from event_registration.models.event import Event


def slugify(name: str) -> str:
    """
    Turn a display name into a URL-friendly slug.

    "Tech Conference 2026" -> "tech-conference-2026"
    """
    # Transliterate unicode to ASCII (e.g., "Café" -> "Cafe")
    normalized = unicodedata.normalize("NFKD", name)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")

    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower())
    slug = re.sub(r"-+", "-", slug).strip("-")

    return slug or "event"


def generate_slug(name: str, db: Session) -> str:
    """
    Generate a unique event slug, appending -2, -3, ... on collision.
    """
    base_slug = slugify(name)
    slug = base_slug
    counter = 1
    while db.query(Event.id).filter(Event.slug == slug).first():
        counter += 1
        slug = f"{base_slug}-{counter}"
    return slug
