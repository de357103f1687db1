"""Response normalizers — pull the generated text out of each provider's payload.

Every extractor is total: a missing or oddly-typed field yields "" rather than
an exception.
"""

from typing import Any


def dig(payload: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None as soon as a step is missing."""
    node = payload
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or not -len(node) <= key < len(node):
                return None
        elif not isinstance(node, dict):
            return None
        node = node[key] if isinstance(key, int) else node.get(key)
        if node is None:
            return None
    return node


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def extract_chat_completion(payload: Any) -> str:
    """OpenAI-compatible shape: ``choices[0].message.content``."""
    return _text(dig(payload, "choices", 0, "message", "content"))


def extract_bytez(payload: Any) -> str:
    """Bytez answers with ``output.content``; older models return ``message`` or ``choices``."""
    for path in (("output", "content"), ("message", "content"), ("choices", 0, "message", "content")):
        value = dig(payload, *path)
        if isinstance(value, str):
            return value.strip()
    output = dig(payload, "output")
    return _text(output)


def extract_anthropic(payload: Any) -> str:
    """Anthropic Messages shape: concatenated ``content[*].text`` blocks."""
    blocks = dig(payload, "content")
    if not isinstance(blocks, list):
        return ""
    parts = [b.get("text") for b in blocks if isinstance(b, dict) and b.get("type", "text") == "text"]
    return "".join(p for p in parts if isinstance(p, str)).strip()
