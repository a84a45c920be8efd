from __future__ import annotations
import re
import unicodedata
from typing import List, Optional, Sequence

from revisao.schema import Article, SearchFilters, SearchPage

_NON_ALPHA = re.compile(r"[^a-z\s]")


def filter_by_year_range(items: Sequence[Article], gte: Optional[int] = None, lte: Optional[int] = None) -> List[Article]:
    out = []
    for item in items:
        if not item.year:
            continue
        if gte and item.year < gte:
            continue
        if lte and item.year > lte:
            continue
        out.append(item)
    return out


def normalize_name(text: str) -> str:
    """Remove acentos e pontuação: 'José da Silva-Júnior' -> 'jose da silvajunior'."""
    decomposed = unicodedata.normalize("NFD", text or "")
    no_marks = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_ALPHA.sub("", no_marks.lower())


def filter_by_author_name(items: Sequence[Article], author_name: Optional[str]) -> List[Article]:
    if not author_name:
        return list(items)

    target = normalize_name(author_name).split()

    def _matches(article: Article) -> bool:
        for author in article.authors:
            tokens = normalize_name(author).split()
            # todos os tokens do filtro precisam estar no nome do autor
            if all(t in tokens for t in target):
                return True
        return False

    return [a for a in items if _matches(a)]


def apply_local_filters(page: SearchPage, filters: SearchFilters) -> SearchPage:
    """
    Aplica ano/autor sobre a página já trazida da API remota.
    Os totais continuam os da API: o filtro local só afina a página corrente.
    """
    items = page.data
    gte, lte = filters.year_range()
    if gte or lte:
        items = filter_by_year_range(items, gte, lte)
    items = filter_by_author_name(items, filters.author)
    return page.model_copy(update={"data": items})
