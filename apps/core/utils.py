"""Shared utilities."""
import re
import unicodedata


def normalize_text(text: str) -> str:
    """Normalize text for comparison: casefold, strip accents, collapse spaces.

    Only combining marks are dropped, so non-Latin scripts survive intact.
    """
    text = unicodedata.normalize("NFKD", text or "")
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"\s+", " ", text).strip().casefold()
    return text


def truncate(text: str, max_len: int = 200) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
