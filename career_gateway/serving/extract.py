"""
Response-shape normalization.

The generateContent response differs between API versions and model
families. We probe the known shapes in order and fall back to the whole
body serialized as JSON so the caller always gets some text back.
"""

import json

# Each probe is a path of dict keys / list indexes into the response body
TEXT_PATHS: list[tuple] = [
    ("candidates", 0, "content", "parts", 0, "text"),
    ("candidates", 0, "content", "text"),
    ("response", "text"),
    ("output", 0, "content", 0, "text"),
]


def _dig(data, path: tuple):
    node = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return None
        elif not isinstance(node, dict):
            return None
        node = node[step] if isinstance(step, int) else node.get(step)
        if node is None:
            return None
    return node


def extract_text(body: dict | None) -> str:
    body = body or {}
    for path in TEXT_PATHS:
        value = _dig(body, path)
        if isinstance(value, str) and value:
            return value
    return json.dumps(body)
