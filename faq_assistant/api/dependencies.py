from fastapi import Depends, HTTPException, Request, status

from faq_assistant.engines.chat_engine import ChatEngine
from faq_assistant.engines.db_engine_async import db_engine_async
from faq_assistant.utils.auth_utils import decode_access_token


async def get_db():
    return db_engine_async


async def get_chat_engine(db=Depends(get_db)) -> ChatEngine:
    return ChatEngine(db)


async def require_admin(request: Request) -> dict:
    auth_header = str(request.headers.get("Authorization") or "").strip()
    if not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No autorizado",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = auth_header.split(" ", 1)[1].strip()
    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    role = str(payload.get("role") or "").strip().lower()
    if role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return payload
