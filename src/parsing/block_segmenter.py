"""
Block Segmenter - Divide o markdown em blocos plain e marcados.

Gramática aceita:

    <markdown>*
    ( ":::" tipo [ ":" variação ] "\\n" <conteúdo> "\\n" ":::" <markdown>* )*

| Elemento   | Pattern                  | Exemplo                     |
|------------|--------------------------|-----------------------------|
| Abertura   | `^:::([\\w-]+)(:…)?$`      | ":::notification:orange"    |
| Fechamento | `^:::[ \\t]*$`             | ":::"                       |

Regras:
- Sem aninhamento: um `:::` em linha própria fecha a abertura mais
  próxima; aberturas anteriores sem fechamento ficam como texto plain.
- Abertura sem fechamento não forma bloco; o texto fica no markdown plain.
- Fechamento sem abertura também fica no markdown plain.
- Runs plain vazios (só whitespace) são descartados.

A varredura visita cada linha de fence uma única vez (tempo linear no
tamanho do markdown, mesmo com muitas aberturas sem fechamento).
"""

import re
import logging
from typing import Optional

from .markdown_sanitizer import MarkdownSanitizer
from .slice_models import Block, BlockKind

logger = logging.getLogger(__name__)


# Linha de fence: abertura (com tag) ou fechamento (sem tag)
FENCE_LINE = re.compile(
    r'^:::(?:(?P<tag>[\w-]+)(?::(?P<variation>[^\n]*))?)?[ \t]*$',
    re.MULTILINE
)


def _plain_block(text: str) -> Optional[Block]:
    content = text.strip()
    if not content:
        return None
    return Block(kind=BlockKind.PLAIN, content=content)


def split_blocks(markdown: str) -> list[Block]:
    """Segmenta markdown já sanitizado, sem pré-processamento."""
    blocks: list[Block] = []
    last_index = 0
    opening = None

    for match in FENCE_LINE.finditer(markdown):
        if match.group("tag"):
            opening = match
            continue
        if opening is None:
            continue

        plain = _plain_block(markdown[last_index:opening.start()])
        if plain:
            blocks.append(plain)

        marker = opening.group("tag")
        variation = (opening.group("variation") or "").strip()
        if variation:
            marker = f"{marker}:{variation}"

        blocks.append(Block(
            kind=BlockKind.MARKED,
            content=markdown[opening.end():match.start()].strip(),
            marker=marker,
        ))
        last_index = match.end()
        opening = None

    plain = _plain_block(markdown[last_index:])
    if plain:
        blocks.append(plain)

    return blocks


def segment(markdown: str, sanitizer: Optional[MarkdownSanitizer] = None) -> list[Block]:
    """
    Divide o markdown em blocos, na ordem do texto.

    Args:
        markdown: Markdown bruto (saída do gerador de texto)
        sanitizer: Sanitizador a aplicar antes (default: todas as normalizações)

    Returns:
        Lista de Blocks (plain | marked)
    """
    if not markdown:
        return []

    sanitizer = sanitizer or MarkdownSanitizer()
    sanitized, _ = sanitizer.sanitize(markdown)
    blocks = split_blocks(sanitized)

    logger.debug(
        f"Segmentação: {len(blocks)} blocos "
        f"({sum(1 for b in blocks if b.is_marked)} marcados)"
    )
    return blocks
