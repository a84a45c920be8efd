from __future__ import annotations
from typing import Optional

from revisao.config import ApiConfig
from revisao.core_api import CoreClient
from revisao.filters import apply_local_filters
from revisao.scielo_api import ScieloClient
from revisao.schema import SearchFilters, SearchPage

SOURCES = ("core", "scielo")


def search_articles(
    query: str,
    filters: Optional[SearchFilters] = None,
    page: int = 1,
    source: str = "core",
    config: Optional[ApiConfig] = None,
    core: Optional[CoreClient] = None,
    scielo: Optional[ScieloClient] = None,
) -> SearchPage:
    """Busca uma página na fonte escolhida e aplica os filtros locais (ano/autor)."""
    filters = filters or SearchFilters()
    source = (source or "core").strip().lower()
    if source not in SOURCES:
        raise ValueError(f"Fonte desconhecida: {source!r} (use {', '.join(SOURCES)})")

    if source == "scielo":
        remote = (scielo or ScieloClient(config)).search(query, page)
    else:
        remote = (core or CoreClient(config)).search(query, filters, page)
    return apply_local_filters(remote, filters)
