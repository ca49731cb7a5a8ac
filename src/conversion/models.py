"""
Modelos Pydantic para a API de conversão.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Request para conversão de markdown em slices."""

    markdown: str = Field(..., description="Markdown gerado (com marcadores :::tipo)")
    external_id: Optional[str] = Field(
        None, description="Identificador externo do documento (repassado na resposta)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "markdown": "Intro.\n\n:::notification:orange\n**Let op:** tekst\n:::",
                "external_id": "blog-123",
            }
        }


class ParseResponse(BaseModel):
    """Slices no formato do CMS."""

    external_id: Optional[str] = None
    slices: list[dict] = Field(default_factory=list, description="{sliceType, variation, fields}")
    warnings: list[str] = Field(default_factory=list, description="Blocos descartados/degradados")
    slice_count: int = 0
    latency_ms: float = 0.0


class SliceTypesResponse(BaseModel):
    """Tipos de slice e habilitação nas instruções de geração."""

    supported: list[str]
    enabled: list[str]
    flags: dict[str, bool]


class InstructionsResponse(BaseModel):
    instructions: str
    enabled: list[str]
