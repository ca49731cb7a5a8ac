"""
Router FastAPI para conversão markdown → slices.

Endpoints:
    POST /slices/parse         - Converte markdown em slices
    GET  /slices/types         - Tipos suportados e habilitados
    GET  /slices/instructions  - Instruções de marcadores para o gerador
"""

import logging
import time

from fastapi import APIRouter, HTTPException

from ..config import config
from ..parsing import SliceParser, SliceType
from ..prompts import build_slice_instructions
from .models import InstructionsResponse, ParseRequest, ParseResponse, SliceTypesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slices", tags=["Slices"])

# Sem estado entre chamadas: uma instância serve todos os requests
_parser = SliceParser()


@router.post("/parse", response_model=ParseResponse)
async def parse_markdown(request: ParseRequest):
    """
    Converte markdown em slices.

    Marcadores desconhecidos não falham o request: aparecem em `warnings`.
    """
    if len(request.markdown) > config.max_markdown_length:
        raise HTTPException(
            status_code=413,
            detail=f"Markdown excede {config.max_markdown_length} caracteres",
        )

    start = time.perf_counter()
    try:
        result = _parser.parse(request.markdown)
    except Exception as e:
        logger.error(f"Erro na conversão ({request.external_id}): {e}")
        raise HTTPException(status_code=500, detail=str(e))

    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Conversão {request.external_id or '-'}: "
        f"{len(result.slices)} slices em {latency_ms:.1f}ms"
    )

    return ParseResponse(
        external_id=request.external_id,
        slices=result.to_slice_dicts(),
        warnings=result.warnings,
        slice_count=len(result.slices),
        latency_ms=round(latency_ms, 2),
    )


@router.get("/types", response_model=SliceTypesResponse)
async def slice_types():
    """Tipos aceitos pelo parser e flags de habilitação da geração."""
    return SliceTypesResponse(
        supported=[slice_type.value for slice_type in SliceType],
        enabled=config.slices.enabled_slices(),
        flags=config.slices.as_dict(),
    )


@router.get("/instructions", response_model=InstructionsResponse)
async def slice_instructions():
    """Instruções de marcadores montadas a partir do SliceConfig."""
    return InstructionsResponse(
        instructions=build_slice_instructions(config.slices),
        enabled=config.slices.enabled_slices(),
    )
