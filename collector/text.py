import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&[^;]+;")
_SPACE_RE = re.compile(r"\s+")


def extract_text(fragment: Optional[str]) -> str:
    """
    Turns a raw HTML fragment into plain text.
    Tags are dropped, entities become a single space, whitespace is collapsed.
    """
    if not fragment:
        return ""
    text = _TAG_RE.sub("", fragment)
    text = _ENTITY_RE.sub(" ", text)
    text = _SPACE_RE.sub(" ", text)
    return text.strip()
