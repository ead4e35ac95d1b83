"""
Chat API

POST /api/chat  {query, session_id?}
  -> {response, category, documents?, subjects?}

Every answered exchange is written to the consulta log after the response is
sent; logging failures never reach the user.
"""

import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from faq_assistant.api.dependencies import get_chat_engine, get_db
from faq_assistant.config import Config
from faq_assistant.engines.chat_engine import ChatEngine
from faq_assistant.schemas import BotResponse, ChatRequest
from faq_assistant.utils.logging_utils import anonymize_text, get_logger

logger = get_logger("api.chat")

router = APIRouter()


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def _public_payload(category: str, result: BotResponse) -> Dict[str, Any]:
    payload = {
        "response": result.response,
        "category": category,
        "documents": result.documents,
        "subjects": result.subjects,
    }
    return {
        k: ([item.model_dump() for item in v] if isinstance(v, list) else v)
        for k, v in payload.items()
        if v is not None
    }


async def _record(
    db,
    query: str,
    category: str,
    response: str,
    session_id: Optional[str],
    response_time: float,
    status: str,
) -> None:
    ok = await db.record_interaction(
        query,
        category,
        response,
        session_id=session_id,
        response_time=response_time,
        status=status,
    )
    if not ok:
        logger.warning(f"Consulta not stored: '{anonymize_text(query)[:80]}'")


@router.post("/chat")
async def chat(
    background_tasks: BackgroundTasks,
    body: Any = Body(default=None),
    engine: ChatEngine = Depends(get_chat_engine),
    db=Depends(get_db),
):
    try:
        request = ChatRequest.model_validate(body if isinstance(body, dict) else {})
    except ValidationError:
        return JSONResponse(
            status_code=400,
            content={"error": "La consulta es requerida y debe ser un texto"},
        )

    start = time.perf_counter()
    try:
        category, result = await engine.respond(request.query)
    except Exception as e:
        logger.exception(f"Error en API: {e}")
        background_tasks.add_task(
            _record, db, request.query, "", "", request.session_id, _elapsed_ms(start), "error"
        )
        return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})

    if result is None:
        background_tasks.add_task(
            _record, db, request.query, category, Config.CATEGORY_NOT_FOUND_MESSAGE,
            request.session_id, _elapsed_ms(start), "not_found",
        )
        return JSONResponse(
            status_code=404,
            content={"response": Config.CATEGORY_NOT_FOUND_MESSAGE},
        )

    background_tasks.add_task(
        _record, db, request.query, category, result.response,
        request.session_id, _elapsed_ms(start), "ok",
    )
    return _public_payload(category, result)
