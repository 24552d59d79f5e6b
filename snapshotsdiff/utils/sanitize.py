"""Path component sanitization."""

import re

_UNSAFE_COMPONENT = re.compile(r"[^\w\- ]")


def safe_component(name: str) -> str:
    """Make ``name`` usable as a single directory name.

    ``+``, ``.``, path separators and any other punctuation become ``_``.
    """
    cleaned = _UNSAFE_COMPONENT.sub("_", name.strip())
    return cleaned or "_"
