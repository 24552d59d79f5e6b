"""Reference lookup for failed snapshots.

References live in marker directories (``__Snapshots__`` by default) nested
anywhere under the tests tree. A failed snapshot is paired with the first
reference whose clean key contains, or is contained in, its own clean key.
There is no scoring: when several references qualify, the first one in
sorted path order wins.
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from snapshotsdiff.config.settings import SNAPSHOT_MARKER

logger = structlog.get_logger(__name__)

PNG_SUFFIX = ".png"

_VARIANT_SUFFIX = re.compile(r"\.\d+$")


def clean_key(file_name: str) -> str:
    """Strip the extension and one trailing ``.<digits>`` variant suffix.

    >>> clean_key("Login.1.png")
    'Login'
    """
    stem = Path(file_name).stem
    return _VARIANT_SUFFIX.sub("", stem)


def keys_match(key_a: str, key_b: str) -> bool:
    """Bidirectional substring containment; empty keys never match."""
    if not key_a or not key_b:
        return False
    return key_a in key_b or key_b in key_a


def is_png(path: Path) -> bool:
    return path.name.endswith(PNG_SUFFIX) and path.is_file()


def find_marker_dirs(references_dir: Path, marker: str = SNAPSHOT_MARKER) -> list[Path]:
    """Every directory named ``marker`` under ``references_dir``, sorted."""
    if not references_dir.is_dir():
        return []
    return sorted(p for p in references_dir.rglob(marker) if p.is_dir())


class ReferenceIndex:
    """Ordered reference candidates collected from all marker directories."""

    def __init__(self, candidates: list[tuple[str, Path]]) -> None:
        self._candidates = candidates

    @classmethod
    def build(cls, references_dir: Path, marker: str = SNAPSHOT_MARKER) -> ReferenceIndex:
        markers = find_marker_dirs(references_dir, marker)
        candidates: list[tuple[str, Path]] = []
        seen: set[Path] = set()
        for marker_dir in markers:
            for path in sorted(marker_dir.rglob(f"*{PNG_SUFFIX}")):
                # nested marker directories would otherwise list files twice
                if path in seen or not is_png(path):
                    continue
                seen.add(path)
                candidates.append((clean_key(path.name), path))
        logger.info(
            "reference_index_built",
            references_dir=str(references_dir),
            marker_dirs=len(markers),
            candidates=len(candidates),
        )
        return cls(candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def find(self, failed_name: str) -> Path | None:
        """Return the first reference matching ``failed_name``, if any."""
        key = clean_key(failed_name)
        for candidate_key, path in self._candidates:
            if keys_match(key, candidate_key):
                return path
        return None
