"""
Chat Engine

Query flow:
1. Category Detector picks a category by keyword
2. Known category -> pre-authored content from the catalog, verbatim
3. `general` -> similarity search over the question bank
"""

from typing import Optional, Tuple

from faq_assistant.config import Config
from faq_assistant.engines.category_detector import CategoryDetector, category_detector
from faq_assistant.engines.intent_config import GENERAL_CATEGORY
from faq_assistant.engines.ranker import CandidateRanker, candidate_ranker
from faq_assistant.exceptions import DataAccessError
from faq_assistant.schemas import BotResponse, Subject
from faq_assistant.utils.logging_utils import get_logger

logger = get_logger("chat")


class ChatEngine:
    def __init__(
        self,
        db,
        detector: Optional[CategoryDetector] = None,
        ranker: Optional[CandidateRanker] = None,
    ):
        self.db = db
        self.detector = detector or category_detector
        self.ranker = ranker or candidate_ranker

    async def similar_questions_response(self, query: str) -> BotResponse:
        questions = await self.ranker.find_similar_questions(query, self.db)

        if not questions:
            return BotResponse(
                response=Config.NO_MATCHES_MESSAGE,
                description=Config.NO_MATCHES_DESCRIPTION,
                category=GENERAL_CATEGORY,
            )

        return BotResponse(
            response=Config.SIMILAR_FOUND_MESSAGE,
            description=Config.SIMILAR_FOUND_DESCRIPTION,
            category=GENERAL_CATEGORY,
            subjects=[Subject(title=Config.SIMILAR_SUBJECT_TITLE, questions=questions)],
        )

    async def get_category_response(self, slug: str, query: Optional[str] = None) -> Optional[BotResponse]:
        """Response for a category slug; None when the category has no content."""
        if slug == GENERAL_CATEGORY and query:
            return await self.similar_questions_response(query)

        try:
            category = await self.db.fetch_category_by_slug(slug)
        except DataAccessError as e:
            logger.error(f"Error fetching category '{slug}': {e}")
            return None

        if category is None:
            logger.warning(f"Category '{slug}' has no catalog entry")
            return None

        return BotResponse(
            response=category.description,
            description=category.description,
            category=category.slug,
            documents=category.documents,
            subjects=category.subjects,
        )

    async def respond(self, query: str) -> Tuple[str, Optional[BotResponse]]:
        """Detected category and the response for it (None if unavailable)."""
        slug = self.detector.detect(query)
        logger.debug(f"Query classified as '{slug}'")
        return slug, await self.get_category_response(slug, query)
