from __future__ import annotations
import math
import re
from typing import Any, Dict, List, Optional

import requests

from revisao.config import ApiConfig
from revisao.errors import ArticleNotFoundError, EmptyQueryError, SearchApiError
from revisao.log import get_logger
from revisao.retry import with_retry
from revisao.schema import Article, SearchFilters, SearchPage

logger = get_logger(__name__)

SOURCE = "CORE"


def _slug(s: str) -> str:
    s = re.sub(r"[^\w\-]+", "-", (s or "").strip().lower())
    return re.sub(r"-+", "-", s).strip("-")[:60] or "artigo"


def _first(items: Any, key: str) -> Optional[str]:
    for it in items or []:
        if isinstance(it, dict) and it.get(key):
            return it[key]
    return None


def build_query(query: str, filters: SearchFilters) -> str:
    """Empurra o filtro de ano para a linguagem de consulta do CORE."""
    q = query.strip()
    gte, lte = filters.year_range()
    parts = [f"({q})"] if (gte or lte) else [q]
    if gte:
        parts.append(f"yearPublished>={gte}")
    if lte:
        parts.append(f"yearPublished<={lte}")
    return " AND ".join(parts)


def to_article(item: Dict[str, Any], position: int = 0) -> Article:
    title = item.get("title") or "Sem título"
    year = item.get("yearPublished")
    authors: List[str] = []
    for a in item.get("authors") or []:
        name = a.get("name") if isinstance(a, dict) else a
        if name:
            authors.append(str(name))

    url = item.get("downloadUrl") or _first(item.get("links"), "url") or ""
    if not url and item.get("sourceFulltextUrls"):
        url = item["sourceFulltextUrls"][0]

    article_id = str(item["id"]) if item.get("id") is not None else f"{_slug(title)}-{year}-{position}"
    return Article(
        id=article_id,
        title=title,
        authors=authors,
        year=year,
        abstract=item.get("abstract") or "",
        source=SOURCE,
        url=url,
        journal=_first(item.get("journals"), "title"),
        university=_first(item.get("dataProviders"), "name"),
        type=item.get("documentType"),
        keywords=[t for t in (item.get("tags") or []) if isinstance(t, str)],
        full_text=item.get("fullText"),
    )


class CoreClient:
    """Cliente da API do CORE (https://core.ac.uk)."""

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ApiConfig.from_env()
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.core_api_key:
            headers["Authorization"] = f"Bearer {self.config.core_api_key}"
        return headers

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.config.core_api_url.rstrip('/')}/{path.lstrip('/')}"

        def _call() -> Dict[str, Any]:
            r = self.session.get(url, params=params, headers=self._headers(), timeout=self.config.timeout)
            r.raise_for_status()
            return r.json()

        return with_retry(
            _call,
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_base_delay,
        )

    def search(self, query: str, filters: Optional[SearchFilters] = None, page: int = 1) -> SearchPage:
        if not query or not query.strip():
            raise EmptyQueryError()
        filters = filters or SearchFilters()
        size = self.config.page_size
        offset = (page - 1) * size
        params = {"q": build_query(query, filters), "limit": size, "offset": offset}
        logger.info("CORE: buscando q=%r page=%s", params["q"], page)

        try:
            data = self._get_json("search/works", params)
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            raise SearchApiError(f"Erro ao buscar artigos na API do CORE: {e}", SOURCE, status) from e
        except (requests.RequestException, ValueError) as e:
            raise SearchApiError(f"Erro de conexão com a API do CORE: {e}", SOURCE) from e

        if not isinstance(data, dict):
            raise SearchApiError("Resposta inesperada da API do CORE.", SOURCE)
        results = data.get("results") or []
        articles = [to_article(it, offset + i) for i, it in enumerate(results)]
        total = int(data.get("totalHits") or len(articles))
        return SearchPage(
            data=articles,
            total_hits=total,
            total_pages=math.ceil(total / size),
            page=page,
        )

    def get_article(self, article_id: str) -> Article:
        if not article_id:
            raise ArticleNotFoundError("ID do artigo não fornecido")
        try:
            data = self._get_json(f"works/{article_id}")
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            if status == 404:
                raise ArticleNotFoundError(f"Artigo não encontrado: {article_id}") from e
            raise SearchApiError(f"Erro ao buscar detalhes do artigo: {e}", SOURCE, status) from e
        except (requests.RequestException, ValueError) as e:
            raise SearchApiError(f"Erro de conexão com a API do CORE: {e}", SOURCE) from e
        if not isinstance(data, dict):
            raise SearchApiError("Resposta inesperada da API do CORE.", SOURCE)
        return to_article(data)
