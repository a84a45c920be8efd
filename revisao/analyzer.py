from __future__ import annotations
import re
import unicodedata
from collections import Counter
from typing import Iterable, List, Optional

from revisao.keywords import (
    CATEGORIES,
    KEYWORD_LIMIT,
    KEYWORD_MIN_LENGTH,
    KEYWORD_PUNCTUATION,
)
from revisao.schema import AnalysisResult

_WS = re.compile(r"\s+")
_NOT_ALLOWED = re.compile(r"[^\w\s.,;:!?-]")
_STRIP_PUNCT = str.maketrans("", "", KEYWORD_PUNCTUATION)


def _fold(text: str) -> str:
    """Minúsculas sem alterar o comprimento (índices continuam válidos no texto original)."""
    return "".join(c if len(c.lower()) != 1 else c.lower() for c in text)


def clean_text(text: str) -> str:
    text = _WS.sub(" ", text)
    text = _NOT_ALLOWED.sub("", text)
    return text.strip()


def extract_between_keywords(text: str, start_terms: Iterable[str], end_terms: Iterable[str]) -> str:
    """
    Recorta o trecho entre o primeiro marcador de início e o primeiro marcador
    de fim que aparece a partir dele. Retorna "" se nenhum marcador de início ocorre.
    """
    start_terms = tuple(start_terms)
    lower = _fold(text)

    start_index = -1
    for term in start_terms:
        idx = lower.find(term.lower())
        if idx != -1 and (start_index == -1 or idx < start_index):
            start_index = idx
    if start_index == -1:
        return ""

    # o fim só é procurado depois do início
    end_index = -1
    for term in end_terms:
        idx = lower.find(term.lower(), start_index)
        if idx != -1 and (end_index == -1 or idx < end_index):
            end_index = idx
    if end_index == -1:
        end_index = len(text)

    extracted = text[start_index:end_index].strip()

    for term in start_terms:
        if _fold(extracted).startswith(term.lower()):
            extracted = extracted[len(term):].strip()
            break

    return clean_text(extracted)


def rank_keywords(text: str, limit: int = KEYWORD_LIMIT) -> List[str]:
    words = text.lower().translate(_STRIP_PUNCT).split()
    counts = Counter(w for w in words if len(w) >= KEYWORD_MIN_LENGTH)
    # sorted é estável: empates mantêm a ordem da primeira ocorrência
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return [word for word, _ in ranked[:limit]]


def analyze_text(text: str) -> AnalysisResult:
    fields = {}
    for name, category in CATEGORIES.items():
        excerpt = extract_between_keywords(text, category.start, category.end)
        fields[name] = excerpt or category.sentinel
    return AnalysisResult(main_keywords=rank_keywords(text), **fields)


def analyze(full_text: Optional[str]) -> AnalysisResult:
    """Ponto de entrada: texto ausente/vazio devolve o resultado vazio (todos os campos nulos)."""
    if not full_text:
        return AnalysisResult.empty()
    return analyze_text(unicodedata.normalize("NFC", full_text))
