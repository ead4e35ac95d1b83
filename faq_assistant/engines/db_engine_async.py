"""
Async Database Engine - MongoDB connection manager

Collections:
- questions:   question bank for similarity search ({question, answer})
- categories:  pre-authored category content ({slug, description, documents, subjects})
- consultas:   log of every chat exchange, read by the admin analytics
- admin_users: dashboard accounts ({email, password})
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import motor.motor_asyncio
from bson.errors import InvalidDocument
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from faq_assistant.config import Config
from faq_assistant.exceptions import DataAccessError
from faq_assistant.schemas import CategoryContent, Question
from faq_assistant.utils.logging_utils import get_logger

logger = get_logger("db")


def _row_to_question(row: Dict[str, Any]) -> Question:
    question = row.get("question")
    answer = row.get("answer")
    if not isinstance(question, str) or not isinstance(answer, str):
        raise DataAccessError(
            f"malformed question row {row.get('_id', '?')}",
            operation="fetch_all_questions",
        )
    return Question(question=question, answer=answer)


class AsyncDatabaseEngine:
    def __init__(self, client=None, db_name: Optional[str] = None):
        self.client = client
        self.db = client[db_name or Config.MONGO_DB_NAME] if client is not None else None

    @property
    def connected(self) -> bool:
        return self.db is not None

    async def connect(self):
        """Establish connection to MongoDB"""
        uri = Config.MONGO_URI
        if not uri:
            logger.error("MONGO_URI not found in .env")
            return

        try:
            self.client = motor.motor_asyncio.AsyncIOMotorClient(
                uri, serverSelectionTimeoutMS=Config.MONGO_TIMEOUT_MS
            )
            # Verify connection
            await self.client.admin.command('ping')
            self.db = self.client[Config.MONGO_DB_NAME]
            logger.info(f"Successfully connected to MongoDB: {Config.MONGO_DB_NAME}")
            await self._ensure_runtime_indexes()
        except PyMongoError as e:
            logger.error(f"Database connection failed: {e}")
            self.db = None

    def close(self):
        if self.client is not None:
            self.client.close()
        self.client = None
        self.db = None

    async def ping(self) -> bool:
        if self.client is None or self.db is None:
            return False
        try:
            await self.client.admin.command('ping')
            return True
        except PyMongoError:
            return False

    async def _ensure_runtime_indexes(self) -> None:
        """Create frequently used indexes for stable runtime latency."""
        if self.db is None:
            return
        try:
            await self.db[Config.CATEGORIES_COLLECTION].create_index(
                [("slug", 1)], name="categories_slug", unique=True
            )
            await self.db[Config.CONSULTAS_COLLECTION].create_index(
                [("created_at", -1)], name="consultas_created_desc"
            )
            await self.db[Config.ADMIN_USERS_COLLECTION].create_index(
                [("email", 1)], name="admin_users_email", unique=True
            )
        except PyMongoError as e:
            logger.warning(f"Index ensure error: {e}")

    def _require_db(self, operation: str):
        if self.db is None:
            raise DataAccessError("database not connected", operation=operation)
        return self.db

    # ===========================================
    # QUESTION BANK & CATEGORIES
    # ===========================================

    async def fetch_all_questions(self) -> List[Question]:
        """Current snapshot of the question bank, in store order."""
        db = self._require_db("fetch_all_questions")
        try:
            rows = await db[Config.QUESTIONS_COLLECTION].find(
                {}, {"_id": 1, "question": 1, "answer": 1}
            ).to_list(length=None)
        except PyMongoError as e:
            raise DataAccessError(str(e), operation="fetch_all_questions") from e
        return [_row_to_question(row) for row in rows]

    async def fetch_category_by_slug(self, slug: str) -> Optional[CategoryContent]:
        db = self._require_db("fetch_category_by_slug")
        try:
            doc = await db[Config.CATEGORIES_COLLECTION].find_one({"slug": slug}, {"_id": 0})
        except PyMongoError as e:
            raise DataAccessError(str(e), operation="fetch_category_by_slug") from e
        if not doc:
            return None
        try:
            return CategoryContent.model_validate(doc)
        except ValidationError as e:
            raise DataAccessError(
                f"malformed category '{slug}': {e.error_count()} errors",
                operation="fetch_category_by_slug",
            ) from e

    # ===========================================
    # CONSULTAS (interaction log)
    # ===========================================

    async def record_interaction(
        self,
        query: str,
        category: str,
        response: str,
        session_id: Optional[str] = None,
        response_time: Optional[float] = None,
        status: str = "ok",
    ) -> bool:
        """Append one exchange to the log. Never raises."""
        if self.db is None:
            logger.warning("Consulta not recorded: database not connected")
            return False
        doc = {
            "query": query,
            "category": category,
            "response": response,
            "session_id": session_id,
            "response_time": response_time,
            "status": status,
            "created_at": datetime.now(timezone.utc),
        }
        try:
            await self.db[Config.CONSULTAS_COLLECTION].insert_one(doc)
            return True
        except (PyMongoError, InvalidDocument, UnicodeEncodeError) as e:
            logger.error(f"Error recording consulta: {e}")
            return False

    async def fetch_consultations(
        self,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Logged consultas, newest first."""
        db = self._require_db("fetch_consultations")
        criteria: Dict[str, Any] = {}
        if since is not None:
            criteria["created_at"] = {"$gte": since}
        try:
            cursor = db[Config.CONSULTAS_COLLECTION].find(criteria, {"_id": 0}).sort("created_at", -1)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise DataAccessError(str(e), operation="fetch_consultations") from e

    # ===========================================
    # ADMIN USERS
    # ===========================================

    async def find_admin_user(self, email: str) -> Optional[Dict[str, Any]]:
        db = self._require_db("find_admin_user")
        try:
            return await db[Config.ADMIN_USERS_COLLECTION].find_one(
                {"email": str(email or "").strip().lower()}, {"_id": 0}
            )
        except PyMongoError as e:
            raise DataAccessError(str(e), operation="find_admin_user") from e


# Singleton instance
db_engine_async = AsyncDatabaseEngine()
