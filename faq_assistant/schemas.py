from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional


class Question(BaseModel):
    question: str
    answer: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class Document(BaseModel):
    text: str
    url: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class Subject(BaseModel):
    title: str
    questions: List[Question] = []

    model_config = ConfigDict(extra="ignore")


class CategoryContent(BaseModel):
    slug: str
    title: Optional[str] = None
    description: str = ""
    documents: List[Document] = []
    subjects: List[Subject] = []

    model_config = ConfigDict(extra="ignore")


class ChatRequest(BaseModel):
    query: str
    session_id: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("query", mode="before")
    @classmethod
    def _require_text(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("query must be a non-empty string")
        return value


class BotResponse(BaseModel):
    response: str
    category: str
    description: Optional[str] = None
    documents: Optional[List[Document]] = None
    subjects: Optional[List[Subject]] = None


class AdminLoginRequest(BaseModel):
    email: str
    password: str

    model_config = ConfigDict(extra="ignore")


class TokenResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    expires_in_seconds: int
