"""
Sanitizador do markdown gerado pelo modelo de texto.

Normalizações aplicadas antes da segmentação em blocos:
- Quebras de linha `\\r\\n` / `\\r` → `\\n`
- Blocos `:::blog-link:<url>` → link markdown `[label](url)`
- Linhas `---` soltas (redundantes com o slice divider)
"""

import re
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)


@dataclass
class SanitizationReport:
    """Relatório de sanitização do markdown."""
    original_length: int
    sanitized_length: int
    anomalies_removed: int
    anomalies_found: List[Tuple[str, int]] = field(default_factory=list)  # (tipo, contagem)
    changes_made: List[str] = field(default_factory=list)


class MarkdownSanitizer:
    """
    Normaliza o markdown antes da segmentação.

    Cada normalização pode ser desligada individualmente (ver ParserConfig).
    """

    LINE_ENDINGS = re.compile(r'\r\n?')

    # :::blog-link:/blog/slug
    # Texto do link
    # :::
    # O label não atravessa outra linha ":::"; sem fechamento, o bloco fica literal.
    BLOG_LINK_PATTERN = re.compile(
        r'^:::blog-link:[ \t]*([^\n]*?)[ \t]*\n'
        r'((?:(?!:::)[^\n]*\n)*?)'
        r':::[ \t]*$',
        re.MULTILINE
    )

    HORIZONTAL_RULE = re.compile(r'^-{3,}[ \t]*$', re.MULTILINE)

    def __init__(
        self,
        normalize_line_endings: bool = True,
        fold_blog_links: bool = True,
        strip_horizontal_rules: bool = True,
    ):
        self.normalize_line_endings = normalize_line_endings
        self.fold_blog_links = fold_blog_links
        self.strip_horizontal_rules = strip_horizontal_rules

    @staticmethod
    def _blog_link_to_markdown(match: re.Match) -> str:
        url = match.group(1).strip()
        label = " ".join(match.group(2).split()) or url
        return f"[{label}]({url})"

    def sanitize(self, markdown: str) -> Tuple[str, SanitizationReport]:
        """
        Sanitiza o markdown.

        Args:
            markdown: Texto markdown bruto

        Returns:
            Tuple (markdown_sanitizado, relatório)
        """
        if not markdown:
            return "", SanitizationReport(
                original_length=0,
                sanitized_length=0,
                anomalies_removed=0,
            )

        sanitized = markdown
        anomalies_found = []
        changes_made = []
        total = 0

        if self.normalize_line_endings:
            count = len(self.LINE_ENDINGS.findall(sanitized))
            if count:
                sanitized = self.LINE_ENDINGS.sub("\n", sanitized)
                anomalies_found.append(("line_endings", count))
                changes_made.append(f"Normalizado {count} quebras de linha")
                total += count

        if self.fold_blog_links:
            sanitized, count = self.BLOG_LINK_PATTERN.subn(self._blog_link_to_markdown, sanitized)
            if count:
                anomalies_found.append(("blog_link", count))
                changes_made.append(f"Convertido {count}x blog-link em link markdown")
                total += count

        if self.strip_horizontal_rules:
            sanitized, count = self.HORIZONTAL_RULE.subn("", sanitized)
            if count:
                anomalies_found.append(("horizontal_rule", count))
                changes_made.append(f"Removido {count}x '---'")
                total += count

        for name, count in anomalies_found:
            logger.debug(f"Sanitização: {name} x{count}")

        return sanitized, SanitizationReport(
            original_length=len(markdown),
            sanitized_length=len(sanitized),
            anomalies_removed=total,
            anomalies_found=anomalies_found,
            changes_made=changes_made,
        )
