"""
Configuração global do pytest para testes do slice converter.

Este arquivo configura o PYTHONPATH para que os imports funcionem corretamente.
"""

import sys
from pathlib import Path

import pytest

# Adiciona o diretório raiz do projeto (imports como src.parsing...)
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))


def assert_span_bounds(nodes):
    """Todo span de todo nó respeita 0 <= start < end <= len(text)."""
    for node in nodes:
        previous = 0
        for span in node.spans:
            assert 0 <= span.start < span.end <= len(node.text), (
                f"Span fora dos limites: {span} em {node.text!r}"
            )
            assert span.start >= previous, f"Spans fora de ordem em {node.text!r}"
            previous = span.start


@pytest.fixture
def span_bounds():
    return assert_span_bounds
