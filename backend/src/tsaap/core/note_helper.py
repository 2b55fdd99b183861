"""
Tag and mention extraction from note content.

A token is introduced by '#' (tag) or '@' (mention) at the start of the text
or after a character that cannot be part of a word, and runs over word
characters, allowing inner hyphens. ``foo@example.com`` is not a mention.
"""

import re
from typing import Iterable, List, Optional

TAG_PATTERN = re.compile(r"(?<![\w#@])#(\w+(?:-\w+)*)")
MENTION_PATTERN = re.compile(r"(?<![\w#@])@(\w+(?:[.-]\w+)*)")


def _distinct(tokens: Iterable[str]) -> List[str]:
    # keeps first-appearance order
    return list(dict.fromkeys(tokens))


def tags_from_content(content: Optional[str]) -> List[str]:
    """Distinct lowercased tag names found in content."""
    if not content:
        return []
    return _distinct(match.lower() for match in TAG_PATTERN.findall(content))


def mentions_from_content(content: Optional[str]) -> List[str]:
    """Distinct usernames mentioned in content, case preserved."""
    if not content:
        return []
    return _distinct(MENTION_PATTERN.findall(content))
