# feedback_api/services/links.py
from __future__ import annotations

import random
import string
import time
from typing import Optional
from urllib.parse import urlencode

DEFAULT_ORIGIN = "https://feedback.app"
DEFAULT_QR_SERVICE_URL = "https://chart.googleapis.com/chart"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def _random_suffix(length: int = 7) -> str:
    return "".join(random.choices(_ID_ALPHABET, k=length))


def generate_feedback_link(
    entity_id: str,
    origin: Optional[str] = None,
    fallback_origin: str = DEFAULT_ORIGIN,
) -> str:
    """
    Public URL where end users submit feedback for an entity:
    {origin}/feedback/{entity_id}. Falls back to `fallback_origin`
    when no origin is known for the current context.
    """
    base = (origin or fallback_origin).rstrip("/")
    return f"{base}/feedback/{entity_id}"


def generate_qr_code_url(
    feedback_url: str,
    size: int = 300,
    service_url: str = DEFAULT_QR_SERVICE_URL,
) -> str:
    """URL of a QR image encoding `feedback_url`, rendered by an external chart service."""
    query = urlencode(
        {
            "cht": "qr",
            "chs": f"{int(size)}x{int(size)}",
            "chl": feedback_url,
            "choe": "UTF-8",
        }
    )
    return f"{service_url}?{query}"


def generate_entity_id(prefix: str = "rest") -> str:
    # not cryptographically secure; callers needing strict uniqueness check the store
    return f"{prefix}_{time.time_ns() // 1_000_000}_{_random_suffix()}"


def generate_feedback_id() -> str:
    return generate_entity_id(prefix="feedback")


def generate_review_id() -> str:
    return generate_entity_id(prefix="extrev")
