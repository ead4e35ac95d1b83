import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _db_name_from_uri(uri: str) -> str:
    if not uri:
        return ""
    return uri.split("/")[-1].split("?")[0]


class Config:
    # Security
    SECRET_KEY = os.getenv("SECRET_KEY")
    if not SECRET_KEY:
        raise ValueError("No SECRET_KEY set. Please set SECRET_KEY in .env file for JWT security.")

    ADMIN_TOKEN_EXPIRE_HOURS = min(max(_env_int("ADMIN_TOKEN_EXPIRE_HOURS", 12), 1), 72)

    # Database
    MONGO_URI = os.getenv("MONGO_URI")
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME") or _db_name_from_uri(MONGO_URI or "") or "faq_assistant"
    MONGO_TIMEOUT_MS = _env_int("MONGO_TIMEOUT_MS", 5000)

    QUESTIONS_COLLECTION = "questions"
    CATEGORIES_COLLECTION = "categories"
    CONSULTAS_COLLECTION = "consultas"
    ADMIN_USERS_COLLECTION = "admin_users"

    # Ranker tuning
    RANKER_MIN_SIMILARITY = _env_float("RANKER_MIN_SIMILARITY", 0.2)
    RANKER_PER_TOPIC = max(1, _env_int("RANKER_PER_TOPIC", 2))
    RANKER_MAX_RESULTS = max(1, _env_int("RANKER_MAX_RESULTS", 5))

    # Admin analytics
    METRICS_WINDOW_MINUTES = max(1, _env_int("METRICS_WINDOW_MINUTES", 5))
    FREQUENT_QUERIES_LIMIT = max(1, _env_int("FREQUENT_QUERIES_LIMIT", 10))

    # Canned responses
    SIMILAR_FOUND_MESSAGE = "Encontré estas preguntas relacionadas:"
    SIMILAR_FOUND_DESCRIPTION = "Resultados de búsqueda"
    SIMILAR_SUBJECT_TITLE = "Preguntas sugeridas"
    NO_MATCHES_MESSAGE = "No encontré preguntas similares. ¿Podrías reformular tu consulta?"
    NO_MATCHES_DESCRIPTION = "Sin resultados"
    CATEGORY_NOT_FOUND_MESSAGE = "Lo siento, no encontré información relacionada con tu consulta."
