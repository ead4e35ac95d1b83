from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from faq_assistant.api.dependencies import get_db, require_admin
from faq_assistant.config import Config
from faq_assistant.engines.analytics import get_consulta_stats, get_system_metrics
from faq_assistant.exceptions import DataAccessError
from faq_assistant.schemas import AdminLoginRequest, TokenResponse
from faq_assistant.utils.auth_utils import create_access_token, verify_password
from faq_assistant.utils.logging_utils import get_logger, log_audit

logger = get_logger("api.admin")

router = APIRouter()

INVALID_CREDENTIALS = "Usuario o contraseña incorrectos."


def _serialize_dates(row: dict) -> dict:
    return {
        k: (v.isoformat() if isinstance(v, datetime) else v)
        for k, v in row.items()
    }


@router.post("/login", response_model=TokenResponse)
async def admin_login(request: AdminLoginRequest, db=Depends(get_db)):
    try:
        user = await db.find_admin_user(request.email)
    except DataAccessError as e:
        logger.error(f"Admin lookup failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"success": False, "error": "Servicio no disponible"},
        )

    if not user or not verify_password(request.password, user.get("password")):
        log_audit("admin_login_failed", request.email)
        return JSONResponse(status_code=401, content={"error": INVALID_CREDENTIALS})

    expires = timedelta(hours=Config.ADMIN_TOKEN_EXPIRE_HOURS)
    token = create_access_token(
        data={"sub": user.get("email") or request.email, "role": "admin"},
        expires_delta=expires,
    )
    log_audit("admin_login", request.email)
    return TokenResponse(
        access_token=token,
        expires_in_seconds=int(expires.total_seconds()),
    )


@router.post("/logout")
async def admin_logout(_: dict = Depends(require_admin)):
    # Stateless JWT logout: client should discard the token.
    return {"success": True, "message": "Logged out"}


@router.get("/consultas")
async def list_consultas(limit: int = 0, db=Depends(get_db), _: dict = Depends(require_admin)):
    try:
        rows = await db.fetch_consultations(limit=max(limit, 0) or None)
    except DataAccessError as e:
        logger.error(f"Error al obtener consultas: {e}")
        return JSONResponse(status_code=500, content={"error": "Error al obtener datos"})
    return {"consultas": [_serialize_dates(row) for row in rows]}


@router.get("/stats")
async def get_stats(db=Depends(get_db), _: dict = Depends(require_admin)):
    try:
        return await get_consulta_stats(db)
    except DataAccessError as e:
        logger.error(f"Error al obtener estadísticas: {e}")
        return JSONResponse(status_code=500, content={"error": "Error al obtener estadísticas"})


@router.get("/metrics")
async def get_metrics(db=Depends(get_db), _: dict = Depends(require_admin)):
    try:
        return await get_system_metrics(db)
    except DataAccessError as e:
        logger.error(f"Error fetching metrics: {e}")
        return JSONResponse(status_code=500, content={"error": "Error al obtener métricas"})


# =============================================================================
# HEALTH CHECK (PUBLIC)
# =============================================================================

@router.get("/health")
async def health_check(db=Depends(get_db)):
    """Public health check endpoint."""
    db_connected = await db.ping()
    return {
        "status": "healthy" if db_connected else "degraded",
        "db_connected": db_connected,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
