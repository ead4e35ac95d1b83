"""
Candidate Ranker

Selection policy for the similarity fallback:
1. score every question against the query
2. bucket by topic, keep the best `per_topic` of each bucket
3. merge, sort by score, drop scores <= `min_similarity`
4. keep the first `max_results`

The per-bucket cut happens before the threshold and the final cut, so a strong
candidate in a crowded bucket can lose to a weaker one from another bucket.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Protocol, Sequence, Tuple

from faq_assistant.config import Config
from faq_assistant.engines.similarity import question_similarity
from faq_assistant.engines.topic_grouper import TopicGrouper, topic_grouper
from faq_assistant.exceptions import DataAccessError
from faq_assistant.schemas import Question
from faq_assistant.utils.logging_utils import get_logger

logger = get_logger("ranker")


class QuestionBank(Protocol):
    async def fetch_all_questions(self) -> List[Question]:
        ...


@dataclass(frozen=True)
class ScoredQuestion:
    question: Question
    similarity: float


def _by_similarity(items: Sequence[ScoredQuestion]) -> List[ScoredQuestion]:
    # sorted() is stable with reverse=True, ties keep input order
    return sorted(items, key=lambda item: item.similarity, reverse=True)


class CandidateRanker:
    def __init__(
        self,
        min_similarity: float = 0.2,
        per_topic: int = 2,
        max_results: int = 5,
        grouper: Optional[TopicGrouper] = None,
        thematic: Optional[Mapping[str, Tuple[str, ...]]] = None,
    ):
        self.min_similarity = min_similarity
        self.per_topic = per_topic
        self.max_results = max_results
        self.grouper = grouper or topic_grouper
        self.thematic = thematic

    def score(self, query: str, questions: Sequence[Question]) -> List[ScoredQuestion]:
        return [
            ScoredQuestion(q, question_similarity(query, q, self.thematic))
            for q in questions
        ]

    def rank_scored(self, query: str, questions: Sequence[Question]) -> List[ScoredQuestion]:
        scored = self.score(query, questions)
        groups = self.grouper.group(scored, lambda item: item.question.question)

        pool: List[ScoredQuestion] = []
        for members in groups.values():
            pool.extend(_by_similarity(members)[: self.per_topic])

        ranked = [
            item for item in _by_similarity(pool)
            if item.similarity > self.min_similarity
        ]
        return ranked[: self.max_results]

    def rank(self, query: str, questions: Sequence[Question]) -> List[Question]:
        return [item.question for item in self.rank_scored(query, questions)]

    async def find_similar_questions(self, query: str, bank: QuestionBank) -> List[Question]:
        """Fetch a fresh snapshot of the bank and rank it. Fetch errors give []."""
        try:
            questions = await bank.fetch_all_questions()
        except DataAccessError as e:
            logger.error(f"Error fetching questions: {e}")
            return []

        results = self.rank(query, questions)
        logger.debug(f"Ranked {len(questions)} questions, {len(results)} candidates kept")
        return results


# Singleton instance
candidate_ranker = CandidateRanker(
    min_similarity=Config.RANKER_MIN_SIMILARITY,
    per_topic=Config.RANKER_PER_TOPIC,
    max_results=Config.RANKER_MAX_RESULTS,
)
