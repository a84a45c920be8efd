from __future__ import annotations
import math
from datetime import date
from typing import Any, Dict, Optional

import requests

from revisao.config import ApiConfig
from revisao.errors import EmptyQueryError, SearchApiError
from revisao.log import get_logger
from revisao.retry import with_retry
from revisao.schema import Article, SearchPage

logger = get_logger(__name__)

SOURCE = "SciELO"


def _year(publication_date: Optional[str]) -> int:
    if publication_date and publication_date[:4].isdigit():
        return int(publication_date[:4])
    return date.today().year


def to_article(item: Dict[str, Any], position: int) -> Article:
    journal = item.get("journal")
    return Article(
        id=str(item.get("id") or f"scielo-{position}"),
        title=item.get("title") or "Sem título",
        authors=item.get("authors") or ["Autor desconhecido"],
        year=_year(item.get("publication_date")),
        abstract=item.get("abstract") or "Sem resumo disponível",
        source=journal or "Fonte não disponível",
        url=item.get("url") or "",
        journal=journal or None,
    )


class ScieloClient:
    """Busca regional na SciELO (resultados em português)."""

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ApiConfig.from_env()
        self.session = session or requests.Session()

    def search(self, query: str, page: int = 1) -> SearchPage:
        if not query or not query.strip():
            raise EmptyQueryError()
        size = self.config.page_size
        offset = (page - 1) * size
        params = {"q": query, "lang": "pt", "count": size, "from": offset, "output": "json"}
        logger.info("SciELO: buscando q=%r page=%s", query, page)

        def _call() -> Dict[str, Any]:
            r = self.session.get(self.config.scielo_api_url, params=params, timeout=self.config.timeout)
            r.raise_for_status()
            return r.json()

        try:
            data = with_retry(_call, max_retries=self.config.max_retries, base_delay=self.config.retry_base_delay)
        except requests.HTTPError as e:
            logger.error("Erro na resposta da API SciELO: %s", e)
            raise SearchApiError("Erro ao buscar dados na API SciELO.", SOURCE,
                                 getattr(e.response, "status_code", None)) from e
        except (requests.RequestException, ValueError) as e:
            logger.error("Erro na requisição da API SciELO: %s", e)
            raise SearchApiError("Erro de conexão com a API SciELO.", SOURCE) from e

        if not isinstance(data, dict):
            raise SearchApiError("Resposta inesperada da API SciELO.", SOURCE)

        results = data.get("results") or []
        articles = [to_article(it, offset + i) for i, it in enumerate(results)]
        total = int(data.get("count") or len(articles))
        return SearchPage(data=articles, total_hits=total, total_pages=math.ceil(total / size), page=page)
