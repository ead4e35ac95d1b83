"""Topic buckets for diversifying similarity results."""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from faq_assistant.engines.intent_config import (
    DEFAULT_TOPIC,
    TOPIC_KEYWORDS,
    KeywordTable,
    first_matching_label,
    freeze_table,
)

T = TypeVar("T")


class TopicGrouper:
    def __init__(self, keywords: Optional[Mapping[str, Tuple[str, ...]]] = None):
        self.keywords: KeywordTable = (
            TOPIC_KEYWORDS if keywords is None else freeze_table(keywords)
        )

    def detect(self, text: str) -> str:
        """Main topic of a question text; `otros` when nothing matches."""
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}")
        return first_matching_label(text, self.keywords, DEFAULT_TOPIC)

    def group(self, items: Iterable[T], text_of: Callable[[T], str]) -> Dict[str, List[T]]:
        """Partition items by topic. Buckets and their members keep input order."""
        groups: Dict[str, List[T]] = {}
        for item in items:
            groups.setdefault(self.detect(text_of(item)), []).append(item)
        return groups


topic_grouper = TopicGrouper()


def detect_main_topic(text: str) -> str:
    return topic_grouper.detect(text)
