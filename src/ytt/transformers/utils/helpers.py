import re
from typing import Any

# --- GLOBAL REGEX COMPILERS ---
_compile = re.compile
_search_transcript = _compile(
    r"<transcript>(.*?)</transcript>", re.DOTALL
).search


def extract_transcript(response: str) -> str:
    """
    Returns the stripped text of the first <transcript> block in a reply,
    or an empty string when the reply has none.
    """
    match = _search_transcript(response)
    if match is None:
        return ""
    return match.group(1).strip()


def message_text(content: str | list[Any]) -> str:
    """Flattens a chat message's content into plain text."""
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
