# core/sanitizers.py
"""
Input sanitization for user-generated content.

Project titles/descriptions and profile text pass through these functions
before being stored or rendered.
"""
import html
import re
from typing import Optional

import bleach


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 10000


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def strip_markup(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Remove every HTML tag and keep the text as typed.

    bleach escapes what it leaves behind ("R&D" -> "R&amp;D"); stored text
    is unescaped again so it matches what the user submitted and can be
    searched. Output escaping is left to the client that renders it.
    """
    if text is None:
        return ""

    clean = html.unescape(bleach.clean(text.strip(), tags=[], attributes={}, strip=True))
    clean = sanitize_text(clean)

    if max_length and len(clean) > max_length:
        clean = clean[:max_length]

    return clean


def sanitize_title(title: Optional[str]) -> str:
    """
    Sanitize project titles.

    - Max 200 characters
    - Single line (no newlines)
    """
    text = sanitize_text(title, max_length=TITLE_MAX_LENGTH)
    # Replace newlines with spaces
    text = re.sub(r'[\r\n]+', ' ', text)
    # Collapse multiple spaces
    text = re.sub(r'\s+', ' ', text)
    return text


def sanitize_description(description: Optional[str]) -> str:
    """
    Sanitize project descriptions and bios.

    - Max 10000 characters
    - Markup removed, entities kept as typed
    """
    return strip_markup(description, max_length=DESCRIPTION_MAX_LENGTH)
