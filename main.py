"""
Department FAQ Assistant - API Server (FastAPI)
Features:
- Keyword category detection with pre-authored answers
- Similarity search over the question bank as fallback
- Consulta logging for the admin dashboard
- JWT-protected admin analytics and metrics
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from faq_assistant.api import admin, chat
from faq_assistant.engines.db_engine_async import db_engine_async
from faq_assistant.utils import logging_utils

# Setup Logging
logger = logging_utils.get_logger()

# Suppress noisy external libraries
logging.getLogger("pymongo").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting FAQ Assistant API server...")
    await db_engine_async.connect()
    if not db_engine_async.connected:
        logger.warning("Running without database connection")
    yield
    logger.info("Shutting down FAQ Assistant API server...")
    db_engine_async.close()


app = FastAPI(
    title="FAQ Assistant API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} "
        f"Status={response.status_code} Time={process_time:.2f}ms"
    )
    return response


# Routers
app.include_router(chat.router, prefix="/api")
app.include_router(admin.router, prefix="/api/admin")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=5000, reload=True)
