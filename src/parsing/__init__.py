"""
Módulo de Parsing de Markdown em Slices.

Este módulo converte o markdown produzido pelo gerador de texto (markdown
comum + blocos `:::tipo[:variação]`) em slices tipados para o CMS.
A conversão é determinística, sem I/O e tolerante a entrada malformada:
nunca lança exceção para entrada string.

Arquitetura do Parsing:
======================

    Markdown (gerador de texto)
         │
         ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                       Block Segmenter                               │
    │                                                                     │
    │  :::blog-link → [label](url)    (sanitizador)                       │
    │  "---" soltos removidos         (sanitizador)                       │
    │  Markdown ──► [plain | marked(tipo, variação)] na ordem do texto    │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                 ┌──────────────────┴──────────────────┐
                 ▼                                     ▼
    ┌────────────────────────────┐       ┌────────────────────────────────┐
    │     Slice Extractors       │       │        Rich Text               │
    │  1 extrator por SliceType  │──────▶│  chunks → nós + TextSpans      │
    │  (tabela fechada)          │       │  (tokenização em 1 passada)    │
    └────────────────────────────┘       └────────────────────────────────┘
                 │
                 ▼
    list[Slice]  →  {sliceType, variation, fields}

Tipos de Slice:
==============

| Marcador         | SliceType       | Campos principais                  |
|------------------|-----------------|------------------------------------|
| (texto comum)    | typography      | content                            |
| :::notification  | notification    | boldText, content                  |
| :::accordion     | accordion       | items[title, content]              |
| :::pros-cons     | pros_cons       | prosTitle, pros, consTitle, cons   |
| :::checklist     | checklist       | title, description, items          |
| :::tips          | tips            | title, tips[tipTitle, tipContent]  |
| :::table         | table           | title, headers, rows               |
| :::dos-donts     | dos_donts       | dosTitle, dos, dontsTitle, donts   |
| :::quote         | quote           | quote, author                      |
| :::call-to-action| call_to_action  | linkText, url, title               |
| :::image         | image           | altText, url, title                |
| :::divider       | divider         | -                                  |

Exemplo de Uso:
==============

    ```python
    from src.parsing import SliceParser, to_rich_text

    result = SliceParser().parse(markdown_text)
    for item in result.slices:
        print(item.to_dict())

    nodes = to_rich_text("This is **bold** text.")
    # [RichTextNode(kind=paragraph, text="This is bold text.", spans=(strong 8:12,))]
    ```
"""

from .slice_models import (
    SliceType,
    NodeKind,
    SpanType,
    BlockKind,
    TextSpan,
    RichTextNode,
    Block,
    Slice,
    FIELDS_BY_TYPE,
)
from .markdown_sanitizer import MarkdownSanitizer, SanitizationReport
from .block_segmenter import segment, split_blocks
from .rich_text import (
    InlineKind,
    InlineToken,
    tokenize_inline,
    extract_inline,
    clean_text,
    to_rich_text,
)
from .slice_extractors import (
    EXTRACTORS,
    extract_slice,
    extract_slice_from_marker,
)
from .slice_parser import (
    SliceParser,
    ParserConfig,
    ParsedContent,
    parse_markdown_to_slices,
)

__all__ = [
    # Models
    "SliceType",
    "NodeKind",
    "SpanType",
    "BlockKind",
    "TextSpan",
    "RichTextNode",
    "Block",
    "Slice",
    "FIELDS_BY_TYPE",
    # Sanitizer
    "MarkdownSanitizer",
    "SanitizationReport",
    # Segmenter
    "segment",
    "split_blocks",
    # Rich text
    "InlineKind",
    "InlineToken",
    "tokenize_inline",
    "extract_inline",
    "clean_text",
    "to_rich_text",
    # Extractors
    "EXTRACTORS",
    "extract_slice",
    "extract_slice_from_marker",
    # Parser
    "SliceParser",
    "ParserConfig",
    "ParsedContent",
    "parse_markdown_to_slices",
]
