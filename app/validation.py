# app/validation.py
from __future__ import annotations
from typing import Any, Dict, Mapping
import re
import unicodedata

from app.errors import ValidationError

DIFFICULTIES = ("easy", "medium", "hard")
TEXT_FIELDS = ("title", "text", "category", "difficulty", "language")
_REQUIRED = ("title", "text", "category", "language")


def validate_text_fields(fields: Mapping[str, Any], partial: bool = False) -> Dict[str, str]:
    """
    Clean a practice-text payload coming from the admin form.
    Unknown keys are dropped. With partial=True only the given keys are checked
    (used for updates).
    """
    clean: Dict[str, str] = {}
    for key in TEXT_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ValidationError(f"{key} must be a string", field=key)
        # practice text keeps inner whitespace as typed; only the ends are trimmed
        clean[key] = value.strip()

    if not partial:
        clean.setdefault("difficulty", "easy")
        for key in _REQUIRED:
            if not clean.get(key):
                raise ValidationError(f"{key} is required", field=key)
    else:
        for key in _REQUIRED:
            if key in clean and not clean[key]:
                raise ValidationError(f"{key} cannot be empty", field=key)

    if "difficulty" in clean:
        clean["difficulty"] = clean["difficulty"].lower()
        if clean["difficulty"] not in DIFFICULTIES:
            raise ValidationError(
                f"difficulty must be one of {', '.join(DIFFICULTIES)}", field="difficulty"
            )
    if "language" in clean:
        clean["language"] = clean["language"].lower()
    return clean


def slugify(title: str) -> str:
    norm = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", norm.lower()).strip("-")
    return slug[:48] or "text"
