from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

DEFAULT_KEY_PREFIX = "sharex"
KEY_NAMESPACE = "screenshots"


def extract_extension(filename: str) -> str:
    """Return the extension of the last path component, leading dot included.

    Follows the usual ``extname`` rules: ``"shot.PNG"`` -> ``".PNG"``,
    ``".bashrc"`` -> ``""``, ``"..png"`` -> ``".png"``, ``"shot."`` -> ``"."``,
    ``".."`` -> ``""``, ``"noext"`` -> ``""``.
    Both ``/`` and ``\\`` are treated as separators so nothing before the
    final component can leak into the result.
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    dot = name.rfind(".")
    # A dot at position 0 only marks a hidden file, and ".." is a directory reference
    if dot <= 0 or name == "..":
        return ""
    return name[dot:]


def generate_object_key(
    original_filename: str,
    *,
    prefix: str = DEFAULT_KEY_PREFIX,
    now: datetime | None = None,
) -> str:
    """Build ``<prefix>/screenshots/<YYYY>/<MM>/<uuid4><ext>``.

    Only the extension of ``original_filename`` is used; the rest of the key
    comes from the clock and a random UUID, so user input cannot inject path
    segments into it.
    """
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    ext = extract_extension(original_filename)
    return f"{prefix}/{KEY_NAMESPACE}/{moment.year:04d}/{moment.month:02d}/{uuid4()}{ext}"
