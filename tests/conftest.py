import os
from datetime import datetime, timezone

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")

from faq_assistant.exceptions import DataAccessError  # noqa: E402
from faq_assistant.schemas import CategoryContent, Question  # noqa: E402

SAMPLE_CATEGORIES = {
    "horarios": {
        "slug": "horarios",
        "title": "Horarios",
        "description": "Consulta el calendario escolar y los horarios de clases.",
        "documents": [{"text": "Calendario escolar", "url": "https://example.edu/calendario.pdf"}],
        "subjects": [
            {
                "title": "Inicio de clases",
                "questions": [
                    {"question": "¿Cuándo inician las clases?", "answer": "En agosto."}
                ],
            }
        ],
    },
    "eventos": {
        "slug": "eventos",
        "title": "Eventos",
        "description": "Conferencias y talleres del departamento.",
        "documents": [],
        "subjects": [],
    },
}


class FakeDatabase:
    """In-memory stand-in for AsyncDatabaseEngine."""

    def __init__(self, questions=None, categories=None, admin_users=None, fail_questions=False):
        self.questions = list(questions or [])
        self.categories = dict(SAMPLE_CATEGORIES if categories is None else categories)
        self.admin_users = {u["email"]: u for u in (admin_users or [])}
        self.fail_questions = fail_questions
        self.consultas = []
        self.fetch_calls = 0

    async def fetch_all_questions(self):
        self.fetch_calls += 1
        if self.fail_questions:
            raise DataAccessError("connection refused", operation="fetch_all_questions")
        return list(self.questions)

    async def fetch_category_by_slug(self, slug):
        doc = self.categories.get(slug)
        return CategoryContent.model_validate(doc) if doc else None

    async def record_interaction(
        self, query, category, response, session_id=None, response_time=None, status="ok"
    ):
        self.consultas.append({
            "query": query,
            "category": category,
            "response": response,
            "session_id": session_id,
            "response_time": response_time,
            "status": status,
            "created_at": datetime.now(timezone.utc),
        })
        return True

    async def fetch_consultations(self, since=None, limit=None):
        rows = [c for c in reversed(self.consultas) if since is None or c["created_at"] >= since]
        rows.sort(key=lambda c: c["created_at"], reverse=True)
        return rows[:limit] if limit else rows

    async def find_admin_user(self, email):
        return self.admin_users.get(str(email or "").strip().lower())

    async def ping(self):
        return True


@pytest.fixture
def exam_question():
    return Question(question="¿Cuándo es el examen final?", answer="El 15 de diciembre.")


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def make_db():
    return FakeDatabase
