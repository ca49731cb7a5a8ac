"""
Slice Extractors - Conteúdo de bloco marcado → campos tipados.

Cada SliceType tem exatamente um extrator. A tabela de despacho é
verificada na importação: um SliceType sem extrator é erro de programação.

Micro-gramáticas por tipo:
=========================

| Tipo           | Regra                                                      |
|----------------|------------------------------------------------------------|
| notification   | 1º **bold** → boldText; resto → content (rich text)        |
| accordion      | seções "## "; 1ª linha → title; resto → content            |
| pros_cons      | "**Voordelen…:**" / "**Nadelen…:**" abrem seção; "- " itens |
| checklist      | linha **bold** → title; 1ª linha comum → description        |
| tips           | 1º **bold** → title; seções "## " sem ** → tips             |
| table          | 1º **bold** → title; linhas |…|; 1ª = header; --- ignorado  |
| dos_donts      | "**…Do's:**" / "**…Don'ts:**" abrem seção; "- " itens       |
| quote          | 1ª linha "> " → quote; resto → author (rich text)           |
| call_to_action | [texto](url "título") ou [Button: texto|url]                |
| image          | ![alt](url "título")                                        |
| divider        | sem campos                                                  |

Campos ausentes ou malformados viram "" / [] - nunca exceção.

Marcadores de lista aceitos nos extratores: "- ", "* " e "+ ".
"""

import re
import logging
from typing import Callable, Optional

from .rich_text import clean_text, to_rich_text
from .slice_models import (
    DEFAULT_VARIATION,
    AccordionFields,
    AccordionItem,
    CallToActionFields,
    ChecklistFields,
    DividerFields,
    DosDontsFields,
    ImageFields,
    NotificationFields,
    ProsConsFields,
    QuoteFields,
    Slice,
    SliceFields,
    SliceType,
    TableFields,
    TipItem,
    TipsFields,
    TypographyFields,
)

logger = logging.getLogger(__name__)


# =============================================================================
# REGEX PATTERNS
# =============================================================================

BOLD_PATTERN = re.compile(r'\*\*(.*?)\*\*')

# Primeiro bold + espaços seguintes (removido do conteúdo da notification)
BOLD_WITH_TRAILING_SPACE = re.compile(r'\*\*(.*?)\*\*\s*')

# "## " no início de linha separa seções de accordion/tips
SECTION_SPLIT = re.compile(r'^## ', re.MULTILINE)

BULLET_LINE = re.compile(r'^[-*+]\s+(.*)$')

# "**Voordelen van X:**" → "Voordelen van X"
SECTION_TITLE = re.compile(r'\*\*(.*?):\*\*')

SECTION_KEYWORDS = {
    "voordel": "pros",
    "pro": "pros",
    "nadel": "cons",
    "con": "cons",
}

DOS_MARKER = re.compile(r"Do['’]s:\*\*")
DONTS_MARKER = re.compile(r"Don['’]t(?:['’]s|s):\*\*")

QUOTE_LINE = re.compile(r'^[ \t]*>[ \t]*(.*?)[ \t]*$', re.MULTILINE)

# [texto](url "título") - não casa imagens ![...]
LINK_PATTERN = re.compile(r'(?<!!)\[([^\[\]\n]*)\]\(\s*([^()\s]*)(?:\s+"([^"]*)")?\s*\)')

# Formato usado nas instruções de geração: [Button: Tekst|/link]
BUTTON_PATTERN = re.compile(r'\[Button:\s*([^|\[\]\n]*?)\s*\|\s*([^\[\]\n]*?)\s*\]', re.IGNORECASE)

IMAGE_PATTERN = re.compile(r'!\[([^\[\]\n]*)\]\(\s*([^()\s]*)(?:\s+"([^"]*)")?\s*\)')


def _first_bold(content: str) -> str:
    match = BOLD_PATTERN.search(content)
    return match.group(1).strip() if match else ""


def _bullet_text(line: str) -> Optional[str]:
    match = BULLET_LINE.match(line)
    return match.group(1).strip() if match else None


def _classify_section(title: str) -> Optional[str]:
    """Seção (pros/cons) da palavra-chave que aparece primeiro no título."""
    lowered = title.lower()
    best = None
    best_position = len(lowered) + 1
    for keyword, section in SECTION_KEYWORDS.items():
        position = lowered.find(keyword)
        if position != -1 and position < best_position:
            best, best_position = section, position
    return best


def _split_sections(content: str) -> list[tuple[str, str]]:
    """Divide em seções "## " → [(primeira_linha, resto)]."""
    sections = []
    for section in SECTION_SPLIT.split(content):
        if not section.strip():
            continue
        first_line, _, rest = section.partition("\n")
        sections.append((first_line.strip(), rest.strip()))
    return sections


# =============================================================================
# EXTRATORES
# =============================================================================


def extract_typography(content: str) -> TypographyFields:
    return TypographyFields(content=to_rich_text(content))


def extract_notification(content: str) -> NotificationFields:
    """1º bold → bold_text; restante (sem esse bold) → rich text."""
    rest = BOLD_WITH_TRAILING_SPACE.sub("", content, count=1).strip()
    return NotificationFields(
        bold_text=_first_bold(content),
        content=to_rich_text(rest),
    )


def extract_accordion(content: str) -> AccordionFields:
    items = []
    for title, body in _split_sections(content):
        title = clean_text(title).strip()
        if title and body:
            items.append(AccordionItem(title=title, content=to_rich_text(body)))
    return AccordionFields(items=items)


def extract_pros_cons(content: str) -> ProsConsFields:
    """
    Máquina de estados por linha.

    Uma linha "**...:**" abre a seção pros (voordel/pro) ou cons
    (nadel/con); itens de lista vão para a seção aberta.
    """
    pros_title = ""
    cons_title = ""
    pros: list[str] = []
    cons: list[str] = []
    current = None

    for line in content.split("\n"):
        trimmed = line.strip()

        if trimmed.startswith("**") and ":**" in trimmed:
            title = SECTION_TITLE.sub(r"\1", trimmed).strip()
            section = _classify_section(title)
            if section == "pros":
                pros_title = title
                current = "pros"
            elif section == "cons":
                cons_title = title
                current = "cons"
            continue

        item = _bullet_text(trimmed)
        if item is None:
            continue
        item = clean_text(item)
        if current == "pros":
            pros.append(item)
        elif current == "cons":
            cons.append(item)

    return ProsConsFields(pros_title=pros_title, pros=pros, cons_title=cons_title, cons=cons)


def extract_checklist(content: str) -> ChecklistFields:
    title = ""
    description = ""
    items: list[str] = []
    found_title = False

    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        item = _bullet_text(trimmed)
        if item is not None:
            items.append(clean_text(item))
        elif not found_title and trimmed.startswith("**") and trimmed.endswith("**") and len(trimmed) > 4:
            title = clean_text(trimmed).strip()
            found_title = True
        elif found_title and not description and not trimmed.startswith("**"):
            description = trimmed

    return ChecklistFields(
        title=title,
        description=to_rich_text(description),
        items=items,
    )


def extract_tips(content: str) -> TipsFields:
    tips = []
    for tip_title, body in _split_sections(content):
        # Seção com ** é o cabeçalho (título do bloco)
        if "**" in tip_title or "**" in body:
            continue
        tip_title = clean_text(tip_title).strip()
        if tip_title and body:
            tips.append(TipItem(tip_title=tip_title, tip_content=to_rich_text(body)))
    return TipsFields(title=_first_bold(content), tips=tips)


def extract_table(content: str) -> TableFields:
    headers: list[str] = []
    rows: list[list[str]] = []
    has_header = False

    for line in content.split("\n"):
        trimmed = line.strip()
        if len(trimmed) < 2 or not (trimmed.startswith("|") and trimmed.endswith("|")):
            continue
        # Linha separadora |---|---|
        if "---" in trimmed:
            continue

        cells = [clean_text(cell.strip()) for cell in trimmed.split("|")]
        cells = [cell for cell in cells if cell]

        if not has_header:
            headers = cells
            has_header = True
        elif cells:
            rows.append(cells)

    return TableFields(title=_first_bold(content), headers=headers, rows=rows)


def extract_dos_donts(content: str) -> DosDontsFields:
    """Mesma estrutura de pros_cons, com gatilhos Do's: / Don'ts:."""
    dos_title = ""
    donts_title = ""
    dos: list[str] = []
    donts: list[str] = []
    current = None

    for line in content.split("\n"):
        trimmed = line.strip()

        if trimmed.startswith("**"):
            if DONTS_MARKER.search(trimmed):
                donts_title = SECTION_TITLE.sub(r"\1", trimmed).strip()
                current = "donts"
                continue
            if DOS_MARKER.search(trimmed):
                dos_title = SECTION_TITLE.sub(r"\1", trimmed).strip()
                current = "dos"
                continue

        item = _bullet_text(trimmed)
        if item is None:
            continue
        item = clean_text(item)
        if current == "dos":
            dos.append(item)
        elif current == "donts":
            donts.append(item)

    return DosDontsFields(dos_title=dos_title, dos=dos, donts_title=donts_title, donts=donts)


def extract_quote(content: str) -> QuoteFields:
    match = QUOTE_LINE.search(content)
    if not match:
        return QuoteFields(quote="", author=to_rich_text(content))

    rest = QUOTE_LINE.sub("", content, count=1).strip()
    return QuoteFields(
        quote=clean_text(match.group(1)),
        author=to_rich_text(rest),
    )


def extract_call_to_action(content: str) -> CallToActionFields:
    match = LINK_PATTERN.search(content)
    if match:
        return CallToActionFields(
            link_text=clean_text(match.group(1)).strip(),
            url=match.group(2),
            title=match.group(3) or "",
        )

    button = BUTTON_PATTERN.search(content)
    if button:
        return CallToActionFields(
            link_text=button.group(1),
            url=button.group(2),
            title=_first_bold(content),
        )

    return CallToActionFields()


def extract_image(content: str) -> ImageFields:
    match = IMAGE_PATTERN.search(content)
    if not match:
        return ImageFields()
    return ImageFields(
        alt_text=match.group(1).strip(),
        url=match.group(2),
        title=match.group(3) or "",
    )


def extract_divider(content: str) -> DividerFields:
    return DividerFields()


# =============================================================================
# DESPACHO
# =============================================================================

EXTRACTORS: dict[SliceType, Callable[[str], SliceFields]] = {
    SliceType.TYPOGRAPHY: extract_typography,
    SliceType.NOTIFICATION: extract_notification,
    SliceType.ACCORDION: extract_accordion,
    SliceType.PROS_CONS: extract_pros_cons,
    SliceType.CHECKLIST: extract_checklist,
    SliceType.TIPS: extract_tips,
    SliceType.TABLE: extract_table,
    SliceType.DOS_DONTS: extract_dos_donts,
    SliceType.QUOTE: extract_quote,
    SliceType.CALL_TO_ACTION: extract_call_to_action,
    SliceType.IMAGE: extract_image,
    SliceType.DIVIDER: extract_divider,
}

_missing = set(SliceType) - set(EXTRACTORS)
if _missing:
    raise RuntimeError(f"SliceTypes sem extrator: {sorted(t.value for t in _missing)}")


def extract_slice(slice_type: SliceType, variation: str, content: str) -> Slice:
    """
    Converte o conteúdo de um bloco no Slice do tipo dado.

    Args:
        slice_type: Tipo do slice
        variation: Variação ("default" se vazia)
        content: Conteúdo interno do bloco, já sem espaços nas bordas

    Returns:
        Slice com campos extraídos (defaults vazios se malformado)
    """
    fields = EXTRACTORS[slice_type](content or "")
    return Slice(
        slice_type=slice_type,
        fields=fields,
        variation=variation or DEFAULT_VARIATION,
    )


def extract_slice_from_marker(tag: str, variation: str, content: str) -> Optional[Slice]:
    """
    Resolve a tag do marcador e extrai o slice.

    Returns:
        Slice, ou None para tags não suportadas (logado como warning)
    """
    slice_type = SliceType.from_marker(tag)
    if slice_type is None:
        logger.warning(f"Tipo de slice não suportado: '{tag}' (bloco ignorado)")
        return None
    return extract_slice(slice_type, variation, content)
