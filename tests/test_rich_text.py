# -*- coding: utf-8 -*-
"""
Testes do conversor de rich text (to_rich_text + tokenização inline).

Critérios:
1. text[span.start:span.end] é SEMPRE o trecho visível formatado
2. Parágrafo sem marcação volta idêntico, sem spans
3. Marcação aninhada gera spans empilhados com offsets corretos
"""

import time

import pytest

from src.parsing.rich_text import (
    InlineKind,
    clean_text,
    extract_inline,
    to_rich_text,
    tokenize_inline,
)
from src.parsing.slice_models import NodeKind, RichTextNode, SpanType, TextSpan


class TestPlainParagraph:
    """Texto sem marcação não é alterado."""

    def test_plain_text_is_single_paragraph_without_spans(self):
        text = "Gewoon een zin zonder opmaak."
        nodes = to_rich_text(text)

        assert len(nodes) == 1
        assert nodes[0].kind == NodeKind.PARAGRAPH
        assert nodes[0].text == text
        assert nodes[0].spans == ()

    def test_empty_input_returns_no_nodes(self):
        assert to_rich_text("") == []
        assert to_rich_text("   \n\n  ") == []

    def test_paragraph_keeps_internal_line_breaks(self):
        nodes = to_rich_text("regel een\nregel twee")
        assert len(nodes) == 1
        assert nodes[0].text == "regel een\nregel twee"

    def test_blank_lines_split_paragraphs(self):
        nodes = to_rich_text("Alinea een.\n\n\nAlinea twee.")
        assert [n.text for n in nodes] == ["Alinea een.", "Alinea twee."]
        assert all(n.kind == NodeKind.PARAGRAPH for n in nodes)


class TestInlineSpans:
    """Spans strong/em/hyperlink sobre o texto limpo."""

    def test_bold_span(self):
        nodes = to_rich_text("This is **bold** text.")

        assert len(nodes) == 1
        node = nodes[0]
        assert node.text == "This is bold text."
        assert len(node.spans) == 1
        span = node.spans[0]
        assert span.type == SpanType.STRONG
        assert node.text[span.start:span.end] == "bold"

    def test_italic_span(self):
        node = to_rich_text("Een *schuin* woord")[0]
        assert node.text == "Een schuin woord"
        assert [(s.type, s.start, s.end) for s in node.spans] == [(SpanType.EM, 4, 10)]

    def test_hyperlink_span_carries_link_data(self):
        node = to_rich_text("Lees [de gids](https://x.nl/gids) nu")[0]

        assert node.text == "Lees de gids nu"
        span = node.spans[0]
        assert span.type == SpanType.HYPERLINK
        assert node.text[span.start:span.end] == "de gids"
        assert span.data == {"linkType": "Web", "url": "https://x.nl/gids", "target": "_self"}

    def test_link_title_is_not_part_of_url(self):
        node = to_rich_text('Zie [tekst](https://x.nl "Titel")')[0]
        assert node.spans[0].url == "https://x.nl"

    def test_mixed_formatting_offsets(self):
        node = to_rich_text("**Let op:** lees [dit](/a) en *dat*")[0]

        assert node.text == "Let op: lees dit en dat"
        assert [(s.type, s.start, s.end) for s in node.spans] == [
            (SpanType.STRONG, 0, 7),
            (SpanType.HYPERLINK, 13, 16),
            (SpanType.EM, 20, 23),
        ]
        for span in node.spans:
            assert node.span_text(span) in ("Let op:", "dit", "dat")

    def test_bold_wrapping_link_gives_stacked_spans(self):
        node = to_rich_text("**[site](https://x.nl)**")[0]

        assert node.text == "site"
        assert [(s.type, s.start, s.end) for s in node.spans] == [
            (SpanType.STRONG, 0, 4),
            (SpanType.HYPERLINK, 0, 4),
        ]

    def test_link_inside_bold_run(self):
        node = to_rich_text("Zie **de [gids](/g)** hier")[0]

        assert node.text == "Zie de gids hier"
        strong = [s for s in node.spans if s.type == SpanType.STRONG][0]
        link = [s for s in node.spans if s.type == SpanType.HYPERLINK][0]
        assert node.span_text(strong) == "de gids"
        assert node.span_text(link) == "gids"

    def test_italic_inside_link_text(self):
        node = to_rich_text("[*veel* meer](/p)")[0]

        assert node.text == "veel meer"
        assert [(s.type, s.start, s.end) for s in node.spans] == [
            (SpanType.HYPERLINK, 0, 9),
            (SpanType.EM, 0, 4),
        ]

    def test_unmatched_marker_stays_literal(self):
        node = to_rich_text("a ** b")[0]
        assert node.text == "a ** b"
        assert node.spans == ()

    def test_empty_bold_is_removed_without_span(self):
        text, spans = extract_inline("voor****na")
        assert text == "voorna"
        assert spans == []

    def test_image_syntax_is_not_a_link(self):
        node = to_rich_text("![alt](/img.png)")[0]
        assert node.text == "![alt](/img.png)"
        assert node.spans == ()

    def test_link_with_blank_url_keeps_text_without_span(self):
        text, spans = extract_inline("[a](   )")
        assert text == "a"
        assert spans == []


class TestBlockKinds:
    """Headings, listas e listas numeradas."""

    def test_heading_levels(self):
        nodes = to_rich_text("# Een\n\n### Drie\n\n###### Zes")
        assert [n.kind for n in nodes] == [NodeKind.HEADING1, NodeKind.HEADING3, NodeKind.HEADING6]
        assert [n.text for n in nodes] == ["Een", "Drie", "Zes"]

    def test_heading_with_spans(self):
        node = to_rich_text("## Titel met **nadruk**")[0]
        assert node.kind == NodeKind.HEADING2
        assert node.text == "Titel met nadruk"
        assert (node.spans[0].start, node.spans[0].end) == (10, 16)

    def test_heading_followed_by_text_in_same_chunk(self):
        nodes = to_rich_text("# Kop\nTekst eronder")
        assert [(n.kind, n.text) for n in nodes] == [
            (NodeKind.HEADING1, "Kop"),
            (NodeKind.PARAGRAPH, "Tekst eronder"),
        ]

    def test_seven_hashes_is_not_a_heading(self):
        node = to_rich_text("####### Te diep")[0]
        assert node.kind == NodeKind.PARAGRAPH

    def test_bullet_list_with_intro_paragraph(self):
        nodes = to_rich_text("Intro:\n- een\n- **twee**")

        assert [(n.kind, n.text) for n in nodes] == [
            (NodeKind.PARAGRAPH, "Intro:"),
            (NodeKind.LIST_ITEM, "een"),
            (NodeKind.LIST_ITEM, "twee"),
        ]
        assert nodes[2].spans[0].type == SpanType.STRONG

    def test_single_bullet_line_is_list_item(self):
        nodes = to_rich_text("- alleen")
        assert [(n.kind, n.text) for n in nodes] == [(NodeKind.LIST_ITEM, "alleen")]

    def test_ordered_list(self):
        nodes = to_rich_text("Stappen:\n1. Eerst\n2. Dan *snel*")

        assert [n.kind for n in nodes] == [
            NodeKind.PARAGRAPH,
            NodeKind.ORDERED_LIST_ITEM,
            NodeKind.ORDERED_LIST_ITEM,
        ]
        assert nodes[2].text == "Dan snel"
        assert nodes[2].spans[0].type == SpanType.EM

    def test_node_to_dict(self):
        node = to_rich_text("Een [link](/x)")[0]
        assert node.to_dict() == {
            "type": "paragraph",
            "text": "Een link",
            "spans": [{
                "start": 4,
                "end": 8,
                "type": "hyperlink",
                "data": {"linkType": "Web", "url": "/x", "target": "_self"},
            }],
            "direction": "ltr",
        }


class TestSpanBounds:
    """Invariante 0 <= start < end <= len(text) para entradas variadas."""

    @pytest.mark.parametrize("markdown", [
        "**a** *b* [c](d) **[e](f)** *[g](h)*",
        "***x***",
        "**open [link](/x) and *it* close**",
        "- **a** [b](c)\n- *d*\n1. e",
        "# **Kop** [x](/y)\n\n* niet lijst *",
        "[**vet in link**](/z) en ** los",
        "*a **b** c*",
    ])
    def test_spans_within_text(self, markdown, span_bounds):
        nodes = to_rich_text(markdown)
        span_bounds(nodes)
        for node in nodes:
            for span in node.spans:
                assert node.text[span.start:span.end].strip()


class TestTokenizer:
    """tokenize_inline / clean_text."""

    def test_tokens_carry_visible_positions(self):
        tokens = tokenize_inline("a **b**")

        assert [(t.kind, t.text, t.start, t.end) for t in tokens] == [
            (InlineKind.PLAIN, "a ", 0, 2),
            (InlineKind.STRONG, "b", 2, 3),
        ]
        assert tokens[1].children[0].kind == InlineKind.PLAIN

    def test_clean_text(self):
        assert clean_text("**a** *b* [c](d)") == "a b c"
        assert clean_text("geen opmaak") == "geen opmaak"


class TestRichTextNodeInvariants:
    """Construção inválida de nós é erro de programação."""

    def test_span_past_end_raises(self):
        with pytest.raises(ValueError):
            RichTextNode(NodeKind.PARAGRAPH, "abc", (TextSpan(0, 5, SpanType.STRONG),))

    def test_unsorted_spans_raise(self):
        with pytest.raises(ValueError):
            RichTextNode(
                NodeKind.PARAGRAPH,
                "abcdef",
                (TextSpan(3, 4, SpanType.EM), TextSpan(0, 1, SpanType.EM)),
            )

    def test_empty_span_raises(self):
        with pytest.raises(ValueError):
            TextSpan(2, 2, SpanType.STRONG)


class TestUnmatchedBrackets:
    """Colchetes sem par não degradam o tempo de conversão."""

    @pytest.mark.parametrize("markdown", [
        "[" * 40000,
        "[a](" * 20000,
        "[a]" * 20000 + "\n(/x)",
    ])
    def test_bracket_runs_convert_quickly(self, markdown):
        start = time.perf_counter()
        nodes = to_rich_text(markdown)
        elapsed = time.perf_counter() - start

        assert all(node.spans == () for node in nodes)
        assert elapsed < 2.0, f"Conversão lenta: {elapsed:.2f}s"

    def test_link_does_not_span_lines(self):
        text, spans = extract_inline("[a\nb](/x)")
        assert text == "[a\nb](/x)"
        assert spans == []
