"""
Category Detector

Maps a raw query to one of the pre-authored categories by keyword containment.
Categories are checked in declaration order and the first hit wins, so a query
mentioning both "horario" and "evento" resolves to `horarios`. Anything
without a hit is `general` and goes to similarity search.
"""

from typing import Mapping, Optional, Tuple

from faq_assistant.engines.intent_config import (
    CATEGORY_KEYWORDS,
    GENERAL_CATEGORY,
    KeywordTable,
    first_matching_label,
    freeze_table,
)


class CategoryDetector:
    def __init__(self, keywords: Optional[Mapping[str, Tuple[str, ...]]] = None):
        self.keywords: KeywordTable = (
            CATEGORY_KEYWORDS if keywords is None else freeze_table(keywords)
        )

    @property
    def labels(self) -> Tuple[str, ...]:
        """Every label this detector can return, sentinel last."""
        return tuple(self.keywords.keys()) + (GENERAL_CATEGORY,)

    def detect(self, query: str) -> str:
        if not isinstance(query, str):
            raise TypeError(f"query must be str, got {type(query).__name__}")
        return first_matching_label(query, self.keywords, GENERAL_CATEGORY)


# Singleton instance
category_detector = CategoryDetector()


def detect_category(query: str) -> str:
    return category_detector.detect(query)
