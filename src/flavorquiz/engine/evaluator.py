"""Evaluator facade: settings-aware grading with an optional taxonomy."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from flavorquiz.config.settings import Settings
from flavorquiz.engine.comparator import (
    ComparisonResult,
    compare,
    compare_with_hierarchical_category,
)
from flavorquiz.engine.taxonomy import ProductCategoryEntry
from flavorquiz.engine.taxonomy_loader import load_taxonomy

logger = logging.getLogger(__name__)


class Evaluator:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        database: Optional[Sequence[ProductCategoryEntry]] = None,
    ):
        self.settings = settings or Settings.load()
        self._database = list(database) if database is not None else None
        self._database_loaded = database is not None

    @property
    def database(self) -> Optional[list[ProductCategoryEntry]]:
        """Taxonomy entries, loaded from the configured path on first use."""
        if not self._database_loaded:
            path = self.settings.get_taxonomy_path()
            if path is not None:
                self._database = load_taxonomy(path)
            self._database_loaded = True
        return self._database

    def load_taxonomy(self, path: Path) -> list[ProductCategoryEntry]:
        self._database = load_taxonomy(path)
        self._database_loaded = True
        return self._database

    def check_answer(self, user_answer: str, correct_answer: str) -> ComparisonResult:
        """Grade a forward question (prompt -> flavor name)."""
        return compare(user_answer, correct_answer, self.settings.comparison)

    def check_reverse(
        self, user_answer: str, expected_answer: str, question: str = ""
    ) -> ComparisonResult:
        """Grade a reverse question, falling back to taxonomy agreement."""
        database = self.database
        if database is None:
            logger.debug("No taxonomy configured; reverse grading uses direct match only")
        return compare_with_hierarchical_category(
            user_answer, expected_answer, question, database, self.settings.comparison
        )
