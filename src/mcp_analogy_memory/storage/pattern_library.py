# Copyright 2024 Heinrich Krupp
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Pattern library storage.

Keeps structural patterns in memory, keyed by id, and mirrors them to a
single JSON file ``{"patterns": [...], "lastUpdated": <ts>}``.  Every
mutation rewrites the whole file atomically (temp file + ``os.replace``).
Durability is best effort: read failures fall back to the seed set, write
failures are logged and swallowed.
"""

import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any

from ..models.pattern import Pattern, PatternDraft, PatternStore
from ..utils.slugs import slugify
from .seed_patterns import seed_patterns

logger = logging.getLogger(__name__)

MOST_USED_LIMIT = 5


class PatternLibrary:
    """File-backed collection of structural patterns."""

    def __init__(self, storage_path: str | Path):
        """
        Initialize the library (call load() before use).

        Args:
            storage_path: Path to the JSON pattern file
        """
        self.storage_path = Path(storage_path)
        self._patterns: dict[str, Pattern] = {}
        self._loaded = False

    def load(self) -> "PatternLibrary":
        """
        Load patterns from disk, seeding defaults if the file is missing or unusable.

        Never raises.  When seeding, the defaults are persisted immediately so
        the next load is a plain reload.

        Returns:
            self, for chaining
        """
        try:
            raw = self.storage_path.read_text(encoding="utf-8")
            store = PatternStore.model_validate_json(raw)
        except (OSError, ValueError) as e:  # ValidationError is a ValueError
            logger.warning(f"Pattern store unavailable at {self.storage_path} ({e}); seeding defaults")
            self._patterns = {p.id: p for p in seed_patterns()}
            self._loaded = True
            self.save()
            return self

        self._patterns = {p.id: p for p in store.patterns}
        self._loaded = True
        logger.info(f"Loaded {len(self._patterns)} patterns from {self.storage_path}")
        return self

    @property
    def loaded(self) -> bool:
        return self._loaded

    def save(self) -> bool:
        """
        Persist every pattern with whole-file overwrite semantics.

        Returns:
            True on success, False if the write failed (already logged)
        """
        tmp_path: str | None = None
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            store = PatternStore(patterns=list(self._patterns.values()), lastUpdated=time.time())

            fd, tmp_path = tempfile.mkstemp(dir=self.storage_path.parent, prefix=".patterns-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(store.model_dump_json(indent=2))
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.storage_path)
            tmp_path = None
            return True
        except OSError as e:
            logger.error(f"Failed to save patterns to {self.storage_path}: {e}")
            return False
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError as e:
                    logger.warning(f"Could not remove temp pattern file {tmp_path}: {e}")

    # ── Reads ───────────────────────────────────────────────────────────

    def get_all(self) -> list[Pattern]:
        return list(self._patterns.values())

    def get(self, pattern_id: str) -> Pattern | None:
        return self._patterns.get(pattern_id)

    def get_by_domain(self, domain: str) -> list[Pattern]:
        """Patterns whose source domain contains *domain* (case-insensitive)."""
        needle = domain.lower()
        return [p for p in self._patterns.values() if needle in p.source_domain.lower()]

    def search(self, keyword: str) -> list[Pattern]:
        """
        Case-insensitive substring search.

        Covers source domain, abstract structure, key features and common
        problems.  Results keep library order; there is no ranking.
        """
        needle = keyword.lower()
        return [p for p in self._patterns.values() if any(needle in text.lower() for text in p.searchable_text())]

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._patterns

    # ── Writes ──────────────────────────────────────────────────────────

    def _new_id(self, source_domain: str, created: float) -> str:
        base = f"{slugify(source_domain)}_{int(created * 1000)}"
        candidate, n = base, 1
        while candidate in self._patterns:
            n += 1
            candidate = f"{base}_{n}"
        return candidate

    def add(self, draft: PatternDraft | dict[str, Any]) -> Pattern:
        """
        Add a new pattern and persist the library.

        The id is derived from the source domain and creation time; the
        usage counter starts at zero.
        """
        if isinstance(draft, dict):
            draft = PatternDraft.model_validate(draft)

        created = time.time()
        pattern = Pattern(
            **draft.model_dump(),
            id=self._new_id(draft.source_domain, created),
            created=created,
            usage_count=0,
        )
        self._patterns[pattern.id] = pattern
        self.save()
        logger.info(f"Added pattern {pattern.id}")
        return pattern

    def strengthen(self, pattern_id: str) -> bool:
        """
        Record a successful use of a pattern.

        Returns:
            True if the pattern exists and was bumped, False for unknown ids (no-op)
        """
        pattern = self._patterns.get(pattern_id)
        if pattern is None:
            return False

        pattern.usage_count += 1
        self.save()
        logger.debug(f"Strengthened pattern {pattern_id} (usage_count={pattern.usage_count})")
        return True

    # ── Statistics ──────────────────────────────────────────────────────

    def stats(self) -> dict[str, Any]:
        patterns = list(self._patterns.values())
        most_used = sorted(patterns, key=lambda p: p.usage_count, reverse=True)[:MOST_USED_LIMIT]
        return {
            "total": len(patterns),
            "most_used": [
                {"id": p.id, "source_domain": p.source_domain, "usage_count": p.usage_count} for p in most_used
            ],
            "domains": list(dict.fromkeys(p.source_domain for p in patterns)),
        }
