"""
Instruções de geração para o modelo de texto.
"""

from .slice_prompts import (
    SLICE_EXAMPLES,
    build_slice_instructions,
    enabled_slices_for_prompt,
)

__all__ = [
    "SLICE_EXAMPLES",
    "build_slice_instructions",
    "enabled_slices_for_prompt",
]
