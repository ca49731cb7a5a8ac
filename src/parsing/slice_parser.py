"""
SliceParser - Conversão Determinística de Markdown em Slices.

Converte o markdown gerado pelo modelo de texto (markdown comum +
blocos `:::tipo[:variação]`) em uma lista ordenada de Slices tipados,
prontos para publicação no CMS.

Arquitetura:
===========

    Markdown (gerador de texto)
           │
           ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                      MarkdownSanitizer                              │
    │   \\r\\n → \\n  |  :::blog-link → [label](url)  |  remove "---"        │
    └─────────────────────────────────────────────────────────────────────┘
           │
           ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                      Block Segmenter                                │
    │   Markdown ──► [plain, marked(notification), plain, marked(...)]    │
    └─────────────────────────────────────────────────────────────────────┘
           │
           ├── plain  ──► to_rich_text() ──► Slice(typography)
           │
           └── marked ──► SliceType.from_marker()
                              │
                              ├── suportado   ──► extrator ──► Slice
                              └── desconhecido ──► warning, sem Slice
           │
           ▼
    ParsedContent (slices na ordem do texto + warnings)

Tolerância a Erros:
==================

| Situação                    | Política                                    |
|-----------------------------|---------------------------------------------|
| Marcador desconhecido       | Log + warning, bloco descartado             |
| Fence sem fechamento        | Texto literal vira parte do typography      |
| Campo malformado            | Slice emitido com "" / [] nos campos        |
| Entrada vazia               | Lista vazia de slices                       |

O parser nunca lança exceção para entrada string. É uma função pura:
sem I/O, sem estado compartilhado entre chamadas; chamadas concorrentes
não precisam de coordenação.

Exemplo de Uso:
==============

    ```python
    from src.parsing import SliceParser

    parser = SliceParser()
    result = parser.parse(markdown_text)

    for item in result.slices:
        print(f"{item.slice_type.value}:{item.variation}")

    payload = result.to_slice_dicts()   # formato do CMS
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .block_segmenter import split_blocks
from .markdown_sanitizer import MarkdownSanitizer, SanitizationReport
from .slice_extractors import extract_slice, extract_slice_from_marker
from .slice_models import FIELDS_BY_TYPE, Block, Slice, SliceType

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """Configuração do parser."""

    normalize_line_endings: bool = True
    fold_blog_links: bool = True        # :::blog-link → link markdown
    strip_horizontal_rules: bool = True


@dataclass
class ParsedContent:
    """
    Resultado de um parse.

    Attributes:
        slices: Slices na ordem do texto fonte
        blocks: Blocos intermediários (para diagnóstico)
        warnings: Diagnósticos de blocos descartados/degradados
        report: Relatório do sanitizador
        source_text: Markdown original
    """

    slices: list[Slice] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    report: Optional[SanitizationReport] = None
    source_text: str = ""

    @property
    def slice_types(self) -> list[str]:
        return [item.slice_type.value for item in self.slices]

    def to_slice_dicts(self) -> list[dict]:
        """Lista de slices no formato do CMS."""
        return [item.to_dict() for item in self.slices]

    def to_dict(self) -> dict:
        return {
            "slices": self.to_slice_dicts(),
            "warnings": list(self.warnings),
        }


class SliceParser:
    """
    Parser markdown → slices.

    Usage:
        parser = SliceParser()
        result = parser.parse(markdown_text)
        slices = result.slices
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """Inicializa o parser."""
        self.config = config or ParserConfig()
        self.sanitizer = MarkdownSanitizer(
            normalize_line_endings=self.config.normalize_line_endings,
            fold_blog_links=self.config.fold_blog_links,
            strip_horizontal_rules=self.config.strip_horizontal_rules,
        )

    def parse(self, markdown: str) -> ParsedContent:
        """
        Parseia markdown e retorna os slices.

        Args:
            markdown: Texto gerado (markdown + marcadores de slice)

        Returns:
            ParsedContent com slices e diagnósticos
        """
        result = ParsedContent(source_text=markdown or "")
        if not markdown or not markdown.strip():
            return result

        # 1. Normalizações
        sanitized, result.report = self.sanitizer.sanitize(markdown)

        # 2. Segmentação
        result.blocks = split_blocks(sanitized)

        # 3. Blocos → slices
        for block in result.blocks:
            item = self._block_to_slice(block, result)
            if item is not None:
                result.slices.append(item)

        logger.info(
            f"Parsed markdown: {len(result.blocks)} blocks, "
            f"{len(result.slices)} slices, "
            f"{len(result.warnings)} warnings"
        )
        return result

    def _block_to_slice(self, block: Block, result: ParsedContent) -> Optional[Slice]:
        try:
            if not block.is_marked:
                return extract_slice(SliceType.TYPOGRAPHY, block.variation, block.content)
            item = extract_slice_from_marker(block.slice_tag, block.variation, block.content)
        except (ValueError, IndexError, KeyError) as e:
            return self._degraded_slice(block, e, result)

        if item is None:
            result.warnings.append(f"Tipo de slice não suportado: '{block.slice_tag}'")
        return item

    def _degraded_slice(self, block: Block, error: Exception, result: ParsedContent) -> Slice:
        """Erro inesperado na extração: slice com campos vazios."""
        if block.is_marked:
            slice_type = SliceType.from_marker(block.slice_tag)
        else:
            slice_type = SliceType.TYPOGRAPHY

        message = f"Falha ao extrair {slice_type.value}: {error}"
        logger.error(message)
        result.warnings.append(message)
        return Slice(
            slice_type=slice_type,
            fields=FIELDS_BY_TYPE[slice_type](),
            variation=block.variation,
        )


def parse_markdown_to_slices(markdown: str, config: Optional[ParserConfig] = None) -> list[Slice]:
    """Atalho: parse e retorna apenas a lista de slices."""
    return SliceParser(config).parse(markdown).slices
