"""Prompt construction for career suggestions."""

PROMPT_TEMPLATE = """Suggest 5 suitable career options for a person with these details:
Skills/Interests: {preferences}

Provide a short title and a 1-2 sentence reason for each suggestion."""

# Field name -> label, for the structured career form
FORM_FIELDS = {
    "skills": "Skills",
    "interests": "Interests",
    "workStyle": "Work style",
}


def _text(value) -> str:
    # Only strings count as preference text; booleans, numbers, lists etc. are rejected
    return value.strip() if isinstance(value, str) else ""


def preferences_from_body(body) -> str:
    """
    Pull the free-text preferences out of a request body.

    Prefers the "preferences" field; otherwise joins whichever of the
    structured form fields are filled in. Returns "" when nothing usable is
    present.
    """
    if not isinstance(body, dict):
        return ""

    if "preferences" in body:
        return _text(body["preferences"])

    parts = []
    for key, label in FORM_FIELDS.items():
        value = _text(body.get(key))
        if value:
            parts.append(f"{label}: {value}")
    return "; ".join(parts)


def build_prompt(preferences: str) -> str:
    return PROMPT_TEMPLATE.format(preferences=preferences.strip())
