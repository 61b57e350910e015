"""Search snippet builder with keyword highlighting"""

import re

HIGHLIGHT = "**"


def highlight_terms(text: str, query: str) -> str:
    """Wrap case-insensitive whole-word matches of each query word in ** markers"""
    seen = set()
    for word in query.lower().split():
        if word in seen:
            continue
        seen.add(word)
        pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
        text = pattern.sub(lambda match: f"{HIGHLIGHT}{match.group(0)}{HIGHLIGHT}", text)
    return text


def build_snippet(text: str, query: str, max_length: int = 240, left_context: int = 50) -> str:
    """
    Highlight query words in text and truncate around the first match.

    The window is ``max_length`` characters long and starts ``left_context``
    characters before the first highlight (or at the start when nothing
    matched). Ellipses mark cut edges.
    """
    snippet = highlight_terms(text, query)

    if len(snippet) > max_length:
        start = max(0, snippet.find(HIGHLIGHT) - left_context)
        prefix = "..." if start > 0 else ""
        suffix = "..." if start + max_length < len(snippet) else ""
        snippet = prefix + snippet[start:start + max_length] + suffix

    return snippet
