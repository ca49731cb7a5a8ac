"""
Slice Converter - FastAPI para conversão de markdown em slices de CMS.

Endpoints:
    POST /slices/parse         - Converte markdown em slices
    GET  /slices/types         - Tipos suportados e habilitados
    GET  /slices/instructions  - Instruções de marcadores para o gerador
    GET  /health               - Health check

Uso:
    uvicorn src.main:app --host 0.0.0.0 --port 8000
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import config
from .conversion import conversion_router

# Logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Response do health check."""

    status: str
    enabled_slices: list[str]
    uptime_seconds: float


# Tempo de início
_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle do app."""
    logger.info("=== Slice Converter iniciando ===")
    logger.info(f"Slices habilitados: {config.slices.enabled_slices()}")
    logger.info(f"Limite de markdown: {config.max_markdown_length} chars")

    yield

    logger.info("=== Slice Converter encerrando ===")


app = FastAPI(
    title="Slice Converter",
    description="Conversão de markdown com marcadores :::tipo em slices de CMS",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(conversion_router)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check."""
    return HealthResponse(
        status="healthy",
        enabled_slices=config.slices.enabled_slices(),
        uptime_seconds=round(time.time() - _start_time, 1),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host=config.host, port=config.port)
