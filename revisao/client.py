from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Tuple

import requests

from revisao.config import BACKEND_URL, HTTP_TIMEOUT_SEC
from revisao.log import get_logger
from revisao.schema import AnalysisResult, Article

logger = get_logger(__name__)

NOT_INFORMED = "Não informado"


def _empty(error: Optional[str] = None) -> Dict[str, Any]:
    out = AnalysisResult.empty().to_json()
    if error:
        out = {"error": error, **out}
    return out


def analyze_article(full_text: Optional[str], base_url: str = BACKEND_URL,
                    session: Optional[requests.Session] = None,
                    timeout: float = HTTP_TIMEOUT_SEC) -> Dict[str, Any]:
    """
    Envia o texto completo para /api/analyze.
    Nunca lança: qualquer falha vira {"error": ..., campos vazios}.
    """
    if not full_text:
        return _empty()

    http = session or requests
    try:
        resp = http.post(
            f"{base_url.rstrip('/')}/api/analyze",
            json={"fullText": full_text},
            headers={"Accept": "application/json"},
            timeout=timeout,
        )
        body = resp.text or ""

        # 404 do servidor web costuma vir como página HTML
        if body.strip().lower().startswith("<!doctype html>"):
            raise RuntimeError("API não encontrada. Verifique se o servidor está rodando e se a rota está correta.")

        try:
            data = json.loads(body)
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise RuntimeError("Resposta inválida do servidor: " + body[:100])

        if not resp.ok:
            raise RuntimeError(data.get("error") or "Erro ao analisar artigo")
        return data
    except (requests.RequestException, RuntimeError) as e:
        logger.error("Erro na análise do artigo: %s", e)
        return _empty(str(e))


def apply_analysis(article: Article, analysis: Dict[str, Any]) -> Article:
    """Mescla a análise no artigo: valores nulos na análise preservam o que o artigo já tinha."""
    update = {}
    for field, key in (("method", "method"), ("location", "location"),
                       ("participants", "participants"), ("main_keywords", "mainKeywords")):
        value = analysis.get(key)
        if value is not None:
            update[field] = value
    return article.model_copy(update=update)


def detail_rows(article: Article) -> List[Tuple[str, str]]:
    """Linhas do painel de detalhes; campos ausentes aparecem como 'Não informado'."""
    rows = [
        ("Título", article.title),
        ("Universidade", article.university or NOT_INFORMED),
        ("Autores", f"{len(article.authors)} autor(es): " + ", ".join(article.authors) if article.authors else NOT_INFORMED),
        ("Ano", str(article.year) if article.year else NOT_INFORMED),
        ("Revista", article.journal or NOT_INFORMED),
        ("Tipo de Artigo", article.type or NOT_INFORMED),
        ("Metodologia", article.method or NOT_INFORMED),
        ("Região do Estudo", article.location or NOT_INFORMED),
        ("Participantes", article.participants or NOT_INFORMED),
        ("Palavras-chave Principais", ", ".join(article.main_keywords) if article.main_keywords else NOT_INFORMED),
    ]
    if article.url:
        rows.append(("Link do Artigo", article.url))
    return rows
