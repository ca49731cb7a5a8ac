"""
Slice Models - Estruturas de Dados para Slices e Rich Text.

Este módulo define as estruturas de dados do conversor markdown → slices:
SliceType, TextSpan, RichTextNode, Block e Slice, além de um record de
campos tipado para cada tipo de slice.

Fluxo de Dados:
==============

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        FLUXO DE DADOS                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │  Markdown ──► Block[] ──► (Extractor | RichText) ──► Slice[]        │
    │                                                                     │
    │  Block        : unidade intermediária (plain | marked)              │
    │  Slice        : unidade de saída (slice_type, variation, fields)    │
    │  RichTextNode : parágrafo/heading/lista com TextSpans               │
    │  TextSpan     : formatação posicional (strong, em, hyperlink)       │
    └─────────────────────────────────────────────────────────────────────┘

Formato de Saída (contrato com o CMS):
=====================================

    {
        "sliceType": "pros_cons",
        "variation": "default",
        "fields": {
            "prosTitle": "Voordelen van X",
            "pros": ["A", "B"],
            "consTitle": "Nadelen van X",
            "cons": ["C"]
        }
    }

    Os nomes dos campos são camelCase e DEVEM coincidir exatamente com os
    nomes esperados pelo CMS (binding por nome).

Módulos Relacionados:
====================

    - parsing/block_segmenter.py: Gera Blocks
    - parsing/slice_extractors.py: Block marcado → Slice
    - parsing/rich_text.py: Markdown → RichTextNode[]
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SliceType(str, Enum):
    """Vocabulário fechado de tipos de slice."""

    TYPOGRAPHY = "typography"           # Markdown comum (blocos plain)
    NOTIFICATION = "notification"
    ACCORDION = "accordion"
    PROS_CONS = "pros_cons"
    CHECKLIST = "checklist"
    TIPS = "tips"
    TABLE = "table"
    DOS_DONTS = "dos_donts"
    QUOTE = "quote"
    CALL_TO_ACTION = "call_to_action"
    IMAGE = "image"
    DIVIDER = "divider"

    @classmethod
    def from_marker(cls, tag: str) -> Optional["SliceType"]:
        """
        Resolve a tag de um marcador (ex: "pros-cons") para o SliceType.

        Aceita hífen ou underscore. Retorna None para tags desconhecidas
        e para "typography", que não é um marcador válido.
        """
        normalized = (tag or "").strip().lower().replace("-", "_")
        if normalized == cls.TYPOGRAPHY.value:
            return None
        try:
            return cls(normalized)
        except ValueError:
            return None


class NodeKind(str, Enum):
    """Tipos de nós de rich text."""

    PARAGRAPH = "paragraph"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    HEADING4 = "heading4"
    HEADING5 = "heading5"
    HEADING6 = "heading6"
    LIST_ITEM = "list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"

    @classmethod
    def heading(cls, level: int) -> "NodeKind":
        if not 1 <= level <= 6:
            raise ValueError(f"Nível de heading inválido: {level}")
        return cls(f"heading{level}")


class SpanType(str, Enum):
    """Tipos de formatação inline."""

    STRONG = "strong"
    EM = "em"
    HYPERLINK = "hyperlink"


class BlockKind(str, Enum):
    PLAIN = "plain"
    MARKED = "marked"


DEFAULT_VARIATION = "default"
LINK_TARGET = "_self"


@dataclass(frozen=True)
class TextSpan:
    """
    Anotação de formatação sobre o texto de um RichTextNode.

    Attributes:
        start: Offset inicial (inclusivo) no texto limpo do nó
        end: Offset final (exclusivo)
        type: strong, em ou hyperlink
        url: URL do hyperlink (None para strong/em)
    """

    start: int
    end: int
    type: SpanType
    url: Optional[str] = None

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Span inválido: start={self.start}, end={self.end}")
        if self.type == SpanType.HYPERLINK and not self.url:
            raise ValueError("Span hyperlink exige url")

    @property
    def data(self) -> Optional[dict]:
        """Dados do link no formato do CMS."""
        if self.type != SpanType.HYPERLINK:
            return None
        return {"linkType": "Web", "url": self.url, "target": LINK_TARGET}

    def to_dict(self) -> dict:
        result = {"start": self.start, "end": self.end, "type": self.type.value}
        if self.type == SpanType.HYPERLINK:
            result["data"] = self.data
        return result


@dataclass(frozen=True)
class RichTextNode:
    """
    Uma unidade de prosa (parágrafo, heading ou item de lista).

    Invariante: spans ordenados por start e contidos em text.
    """

    kind: NodeKind
    text: str
    spans: tuple[TextSpan, ...] = ()
    direction: str = "ltr"

    def __post_init__(self):
        object.__setattr__(self, "spans", tuple(self.spans))
        previous_start = 0
        for span in self.spans:
            if span.end > len(self.text):
                raise ValueError(
                    f"Span {span.start}:{span.end} excede texto de {len(self.text)} chars"
                )
            if span.start < previous_start:
                raise ValueError("Spans devem estar ordenados por start")
            previous_start = span.start

    def span_text(self, span: TextSpan) -> str:
        """Retorna o trecho formatado por um span."""
        return self.text[span.start:span.end]

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "text": self.text,
            "spans": [span.to_dict() for span in self.spans],
            "direction": self.direction,
        }


RichText = list[RichTextNode]


def rich_text_to_dicts(nodes: RichText) -> list[dict]:
    return [node.to_dict() for node in nodes]


@dataclass(frozen=True)
class Block:
    """
    Unidade intermediária produzida pelo segmentador.

    Attributes:
        kind: plain (markdown comum) ou marked (bloco :::tipo)
        content: Conteúdo interno já sem espaços nas bordas
        marker: "tipo" ou "tipo:variação" (apenas para marked)
    """

    kind: BlockKind
    content: str
    marker: Optional[str] = None

    @property
    def is_marked(self) -> bool:
        return self.kind == BlockKind.MARKED

    @property
    def slice_tag(self) -> Optional[str]:
        if not self.marker:
            return None
        return self.marker.split(":", 1)[0]

    @property
    def variation(self) -> str:
        if not self.marker or ":" not in self.marker:
            return DEFAULT_VARIATION
        return self.marker.split(":", 1)[1].strip() or DEFAULT_VARIATION


# =============================================================================
# CAMPOS POR TIPO DE SLICE
# =============================================================================


@dataclass(frozen=True)
class TypographyFields:
    content: RichText = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"content": rich_text_to_dicts(self.content)}


@dataclass(frozen=True)
class NotificationFields:
    bold_text: str = ""
    content: RichText = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "boldText": self.bold_text,
            "content": rich_text_to_dicts(self.content),
        }


@dataclass(frozen=True)
class AccordionItem:
    title: str
    content: RichText

    def to_dict(self) -> dict:
        return {"title": self.title, "content": rich_text_to_dicts(self.content)}


@dataclass(frozen=True)
class AccordionFields:
    items: list[AccordionItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class ProsConsFields:
    pros_title: str = ""
    pros: list[str] = field(default_factory=list)
    cons_title: str = ""
    cons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "prosTitle": self.pros_title,
            "pros": list(self.pros),
            "consTitle": self.cons_title,
            "cons": list(self.cons),
        }


@dataclass(frozen=True)
class ChecklistFields:
    title: str = ""
    description: RichText = field(default_factory=list)
    items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": rich_text_to_dicts(self.description),
            "items": list(self.items),
        }


@dataclass(frozen=True)
class TipItem:
    tip_title: str
    tip_content: RichText

    def to_dict(self) -> dict:
        return {
            "tipTitle": self.tip_title,
            "tipContent": rich_text_to_dicts(self.tip_content),
        }


@dataclass(frozen=True)
class TipsFields:
    title: str = ""
    tips: list[TipItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"title": self.title, "tips": [tip.to_dict() for tip in self.tips]}


@dataclass(frozen=True)
class TableFields:
    title: str = ""
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
        }


@dataclass(frozen=True)
class DosDontsFields:
    dos_title: str = ""
    dos: list[str] = field(default_factory=list)
    donts_title: str = ""
    donts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "dosTitle": self.dos_title,
            "dos": list(self.dos),
            "dontsTitle": self.donts_title,
            "donts": list(self.donts),
        }


@dataclass(frozen=True)
class QuoteFields:
    quote: str = ""
    author: RichText = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"quote": self.quote, "author": rich_text_to_dicts(self.author)}


@dataclass(frozen=True)
class CallToActionFields:
    link_text: str = ""
    url: str = ""
    title: str = ""

    def to_dict(self) -> dict:
        return {"linkText": self.link_text, "url": self.url, "title": self.title}


@dataclass(frozen=True)
class ImageFields:
    alt_text: str = ""
    url: str = ""
    title: str = ""

    def to_dict(self) -> dict:
        return {"altText": self.alt_text, "url": self.url, "title": self.title}


@dataclass(frozen=True)
class DividerFields:
    def to_dict(self) -> dict:
        return {}


SliceFields = Union[
    TypographyFields,
    NotificationFields,
    AccordionFields,
    ProsConsFields,
    ChecklistFields,
    TipsFields,
    TableFields,
    DosDontsFields,
    QuoteFields,
    CallToActionFields,
    ImageFields,
    DividerFields,
]

# Record de campos esperado para cada tipo
FIELDS_BY_TYPE: dict[SliceType, type] = {
    SliceType.TYPOGRAPHY: TypographyFields,
    SliceType.NOTIFICATION: NotificationFields,
    SliceType.ACCORDION: AccordionFields,
    SliceType.PROS_CONS: ProsConsFields,
    SliceType.CHECKLIST: ChecklistFields,
    SliceType.TIPS: TipsFields,
    SliceType.TABLE: TableFields,
    SliceType.DOS_DONTS: DosDontsFields,
    SliceType.QUOTE: QuoteFields,
    SliceType.CALL_TO_ACTION: CallToActionFields,
    SliceType.IMAGE: ImageFields,
    SliceType.DIVIDER: DividerFields,
}


@dataclass(frozen=True)
class Slice:
    """
    Bloco de conteúdo tipado, unidade de saída do parser.

    Attributes:
        slice_type: Tipo do slice (vocabulário fechado)
        fields: Record de campos correspondente ao tipo
        variation: Subtipo de apresentação (default: "default")
    """

    slice_type: SliceType
    fields: SliceFields
    variation: str = DEFAULT_VARIATION

    def __post_init__(self):
        expected = FIELDS_BY_TYPE[self.slice_type]
        if not isinstance(self.fields, expected):
            raise ValueError(
                f"Slice {self.slice_type.value} exige {expected.__name__}, "
                f"recebeu {type(self.fields).__name__}"
            )
        if not self.variation:
            object.__setattr__(self, "variation", DEFAULT_VARIATION)

    def to_dict(self) -> dict:
        """Converte para o formato consumido pelo CMS."""
        return {
            "sliceType": self.slice_type.value,
            "variation": self.variation,
            "fields": self.fields.to_dict(),
        }
