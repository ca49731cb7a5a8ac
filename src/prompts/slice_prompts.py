"""
Instruções de marcadores de slice para o gerador de texto.

Monta o bloco de instruções que ensina o gerador a emitir os marcadores
`:::tipo[:variação]` reconhecidos pelo parser. Apenas os tipos
habilitados no SliceConfig recebido entram nas instruções.

O SliceConfig é sempre passado explicitamente: o parser nunca consulta
esta configuração.

Os exemplos estão em holandês, o idioma do conteúdo gerado (os títulos
"Voordelen"/"Nadelen" são os gatilhos do extrator pros_cons).
"""

from typing import Optional

from ..config import SliceConfig

SLICE_INSTRUCTIONS_HEADER = "**Beschikbare Slice Markers:**"

# Ordem de apresentação nas instruções
SLICE_EXAMPLES: dict[str, tuple[str, str]] = {
    "notification": (
        "Notification Slices (belangrijke informatie, tips, waarschuwingen)",
        """\
:::notification:default
**Belangrijke Tip:** [korte krachtige titel]

[Content in markdown met paragrafen en lijsten]
:::

Variaties: ":default" (grijs), ":base100" (huisstijl), ":purple" (paars), ":orange" (oranje)""",
    ),
    "accordion": (
        "Accordion/FAQ Slices",
        """\
:::accordion
## [Vraag of titel 1]
[Antwoord content in markdown]

## [Vraag of titel 2]
[Antwoord content in markdown]
:::""",
    ),
    "pros_cons": (
        "Pros/Cons Slices (voor alle voor-/nadeel content)",
        """\
:::pros-cons
**Voordelen van [onderwerp]:**
- [Voordeel 1]
- [Voordeel 2]

**Nadelen van [onderwerp]:**
- [Nadeel 1]
- [Nadeel 2]
:::""",
    ),
    "checklist": (
        "Checklist Slices (voor praktische stappen en overzichten)",
        """\
:::checklist
**[Titel van checklist]**

[Optionele beschrijving]

- [Checklist item 1]
- [Checklist item 2]
:::""",
    ),
    "tips": (
        "Tips Slices (voor praktische tips en adviezen)",
        """\
:::tips:numbered
**[Titel van tips sectie]**

## [Tip titel 1]
[Tip uitleg]

## [Tip titel 2]
[Tip uitleg]
:::""",
    ),
    "dos_donts": (
        "Do's & Don'ts Slices",
        """\
:::dos-donts
**[Onderwerp] Do's:**
- [Do item 1]
- [Do item 2]

**[Onderwerp] Don'ts:**
- [Don't item 1]
- [Don't item 2]
:::""",
    ),
    "table": (
        "Table Slices (voor vergelijkingen en data)",
        """\
:::table
**[Tabel titel]**

| Header 1 | Header 2 | Header 3 |
|----------|----------|----------|
| Cel 1    | Cel 2    | Cel 3    |
:::""",
    ),
    "quote": (
        "Quote Slices",
        """\
:::quote:highlight
> [Quote tekst hier]

**[Auteur naam]**, [Functie/titel]
:::

Variaties: ":default", ":highlight", ":testimonial\"""",
    ),
    "call_to_action": (
        "Call-to-Action Slices",
        """\
:::call-to-action:primary
[Button tekst](/link "Titel")
:::

Variaties: ":default", ":primary", ":secondary\"""",
    ),
    "image": (
        "Image Slices",
        """\
:::image
![Alt tekst](https://voorbeeld.nl/afbeelding.jpg "Titel")
:::""",
    ),
    "blog_link": (
        "Interne blog links",
        """\
:::blog-link:/blog/[slug]
[Linktekst]
:::""",
    ),
    "divider": (
        "Divider (visuele scheiding tussen secties)",
        """\
:::divider
:::""",
    ),
}


def enabled_slices_for_prompt(slice_config: SliceConfig) -> str:
    """Lista de slices habilitados, um por linha ("- tipo")."""
    return "\n".join(f"- {name}" for name in slice_config.enabled_slices())


def build_slice_instructions(slice_config: Optional[SliceConfig] = None) -> str:
    """
    Monta as instruções de marcadores para o gerador de texto.

    Args:
        slice_config: Flags de habilitação (default: SliceConfig())

    Returns:
        Texto das instruções, numerado na ordem de SLICE_EXAMPLES
    """
    slice_config = slice_config or SliceConfig()

    sections = [SLICE_INSTRUCTIONS_HEADER]
    number = 1
    for name, (title, example) in SLICE_EXAMPLES.items():
        if not slice_config.is_enabled(name):
            continue
        sections.append(f'**{number}. {title}:**\n"""\n{example}\n"""')
        number += 1

    sections.append(
        "Gebruik alleen de bovenstaande markers. Elke marker opent met ':::type' "
        "op een eigen regel en sluit met ':::' op een eigen regel."
    )
    return "\n\n".join(sections)
