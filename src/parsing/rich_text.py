"""
Rich Text - Conversão de Markdown em Nós de Rich Text com Spans.

Converte markdown comum em uma lista de RichTextNode (parágrafos,
headings, itens de lista), cada um com texto limpo e spans posicionais
de formatação (strong, em, hyperlink).

Arquitetura:
===========

    Markdown
       │
       ├── split em linhas em branco ──► chunks
       │
       └── Para cada chunk:
               │
               ├── "# " ... "###### "   → heading1..heading6
               ├── linhas "- "           → list-item (+ paragraph intercalado)
               ├── linhas "1. "          → ordered-list-item (+ paragraph)
               └── resto                 → paragraph
                       │
                       ▼
               tokenize_inline(texto)    (1 passada, esquerda → direita)
                       │
                       ├── PLAIN   "texto comum"
                       ├── STRONG  **texto**
                       ├── EM      *texto*
                       └── LINK    [texto](url)
                       │
                       ▼
               texto limpo + TextSpans (offsets calculados 1x)

Tokenização Inline:
==================

    Os offsets são calculados sobre o texto VISÍVEL durante a própria
    tokenização, sem offset acumulado compartilhado entre tipos de
    formatação. Marcação aninhada é tokenizada recursivamente:

    | Entrada                    | Texto        | Spans                         |
    |----------------------------|--------------|-------------------------------|
    | "a **b** c"                | "a b c"      | strong 2:3                    |
    | "**[site](https://x.nl)**" | "site"       | strong 0:4, hyperlink 0:4     |
    | "[*veel* meer](/p)"        | "veel meer"  | hyperlink 0:9, em 0:4         |
    | "a ** b"                   | "a ** b"     | (marcador sem par fica literal)|

    Garantia: text[span.start:span.end] é exatamente o trecho visível
    formatado, para todo span emitido.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .slice_models import NodeKind, RichTextNode, SpanType, TextSpan

logger = logging.getLogger(__name__)


class InlineKind(str, Enum):
    PLAIN = "plain"
    STRONG = "strong"
    EM = "em"
    LINK = "hyperlink"


@dataclass(frozen=True)
class InlineToken:
    """
    Run inline com posição no texto visível.

    Attributes:
        kind: plain, strong, em ou hyperlink
        text: Texto visível do run (já sem sintaxe markdown)
        start: Offset inicial no texto visível do nó
        end: Offset final (exclusivo)
        url: Destino do link (apenas hyperlink)
        children: Tokens internos (marcação aninhada)
    """

    kind: InlineKind
    text: str
    start: int
    end: int
    url: Optional[str] = None
    children: tuple = ()


# Ordem das alternativas = precedência: bold antes de italic
INLINE_PATTERN = re.compile(
    r'\*\*(?P<strong>.*?)\*\*'
    r'|(?<!\*)\*(?P<em>[^*]+)\*(?!\*)'
    # Link contido em uma única linha, sem colchetes internos
    r'|(?<!!)\[(?P<link_text>[^\[\]\n]+)\]\((?P<link_url>[^()\n]+)\)'
)

# Blocos separados por linha em branco
CHUNK_SEPARATOR = re.compile(r'\n\s*\n')

HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.*)$')
BULLET_PATTERN = re.compile(r'^- ')
ORDERED_PATTERN = re.compile(r'^\d+\.\s')


def _link_destination(raw: str) -> Optional[str]:
    """Extrai a URL de '(url "título")', descartando o título."""
    parts = raw.strip().split()
    return parts[0] if parts else None


def tokenize_inline(source: str, offset: int = 0) -> list[InlineToken]:
    """
    Tokeniza texto inline em runs plain/strong/em/hyperlink.

    Args:
        source: Texto com marcação markdown inline
        offset: Posição visível onde source começa (usado na recursão)

    Returns:
        Lista de tokens de nível superior, em ordem
    """
    tokens: list[InlineToken] = []
    cursor = 0
    position = offset

    for match in INLINE_PATTERN.finditer(source):
        if match.start() > cursor:
            plain = source[cursor:match.start()]
            tokens.append(InlineToken(InlineKind.PLAIN, plain, position, position + len(plain)))
            position += len(plain)

        url = None
        if match.group("strong") is not None:
            kind, inner = InlineKind.STRONG, match.group("strong")
        elif match.group("em") is not None:
            kind, inner = InlineKind.EM, match.group("em")
        else:
            kind, inner = InlineKind.LINK, match.group("link_text")
            url = _link_destination(match.group("link_url"))

        children = tuple(tokenize_inline(inner, position))
        visible = "".join(child.text for child in children)
        tokens.append(
            InlineToken(kind, visible, position, position + len(visible), url, children)
        )
        position += len(visible)
        cursor = match.end()

    if cursor < len(source):
        plain = source[cursor:]
        tokens.append(InlineToken(InlineKind.PLAIN, plain, position, position + len(plain)))

    return tokens


def _collect_spans(tokens, spans: list[TextSpan]):
    for token in tokens:
        if token.kind != InlineKind.PLAIN and token.end > token.start:
            if token.kind == InlineKind.LINK:
                if token.url:
                    spans.append(TextSpan(token.start, token.end, SpanType.HYPERLINK, token.url))
            else:
                spans.append(TextSpan(token.start, token.end, SpanType(token.kind.value)))
        _collect_spans(token.children, spans)


def extract_inline(text: str) -> tuple[str, list[TextSpan]]:
    """
    Remove a sintaxe inline e retorna (texto_limpo, spans).

    Spans ordenados por start; spans empilhados no mesmo range
    (ex: bold + link) mantêm o mais externo primeiro.
    """
    tokens = tokenize_inline(text)
    clean = "".join(token.text for token in tokens)
    spans: list[TextSpan] = []
    _collect_spans(tokens, spans)
    spans.sort(key=lambda span: (span.start, -span.end))
    return clean, spans


def clean_text(text: str) -> str:
    """Remove marcação bold/italic/link preservando o texto visível."""
    return "".join(token.text for token in tokenize_inline(text))


def _build_node(kind: NodeKind, source: str) -> Optional[RichTextNode]:
    text, spans = extract_inline(source)
    if not text.strip():
        return None
    return RichTextNode(kind=kind, text=text, spans=tuple(spans))


def _convert_lines(lines: list[str], item_pattern: re.Pattern, item_kind: NodeKind, nodes: list):
    """Converte chunk de lista: cada linha vira item ou parágrafo."""
    for line in lines:
        if not line:
            continue
        if item_pattern.match(line):
            node = _build_node(item_kind, item_pattern.sub("", line, count=1).strip())
        else:
            node = _build_node(NodeKind.PARAGRAPH, line)
        if node:
            nodes.append(node)


def _convert_chunk(chunk: str, nodes: list[RichTextNode]):
    if not chunk:
        return

    first_line, _, rest = chunk.partition("\n")
    heading = HEADING_PATTERN.match(first_line.strip())
    if heading:
        level = len(heading.group(1))
        node = _build_node(NodeKind.heading(level), heading.group(2).strip())
        if node:
            nodes.append(node)
        # Linhas seguintes do mesmo chunk são convertidas normalmente
        _convert_chunk(rest.strip(), nodes)
        return

    lines = [line.strip() for line in chunk.split("\n")]

    if any(BULLET_PATTERN.match(line) for line in lines):
        _convert_lines(lines, BULLET_PATTERN, NodeKind.LIST_ITEM, nodes)
        return

    if any(ORDERED_PATTERN.match(line) for line in lines):
        _convert_lines(lines, ORDERED_PATTERN, NodeKind.ORDERED_LIST_ITEM, nodes)
        return

    node = _build_node(NodeKind.PARAGRAPH, chunk)
    if node:
        nodes.append(node)


def to_rich_text(markdown: str) -> list[RichTextNode]:
    """
    Converte markdown em lista de nós de rich text.

    Args:
        markdown: Markdown comum (sem marcadores de slice)

    Returns:
        Lista de RichTextNode na ordem do texto; vazia para entrada vazia
    """
    if not markdown or not markdown.strip():
        return []

    nodes: list[RichTextNode] = []
    for chunk in CHUNK_SEPARATOR.split(markdown):
        _convert_chunk(chunk.strip(), nodes)

    logger.debug(f"Rich text: {len(nodes)} nós de {len(markdown)} chars")
    return nodes
