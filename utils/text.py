"""
Text Processing Utilities
Handles inbound message cleaning and command detection
"""

import re
import emoji

from config import NEXT_COMMAND

def shorten(text, max_length=50):
    """
    Shorten text for logging

    Args:
        text: Text to shorten
        max_length: Maximum length

    Returns:
        Shortened text with ellipsis if needed
    """
    if not isinstance(text, str):
        text = str(text)
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def clean_text(text):
    """
    Remove emoji and collapse runs of whitespace

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    if not text:
        return ""
    text = emoji.replace_emoji(text, replace=" ")
    text = re.sub(r"\s+", " ", text).strip()
    return text


def normalize_command(text):
    """Lowercase and trim a message body for command comparison"""
    return (text or "").lower().strip()


def is_next_command(text) -> bool:
    """True when the message asks for the next page of results"""
    return normalize_command(text) == NEXT_COMMAND
