"""
Backend HTTP da Revisão de Literatura.

Rotas
- POST /api/analyze          {"fullText": "..."} -> {method, location, participants, mainKeywords}
- POST /api/search           {"query", "filters", "page", "source"} -> {data, totalHits, totalPages, page}
- GET  /api/articles/<id>    detalhes de um artigo no CORE
- GET  /health

Toda resposta de erro é JSON com o campo "error"; as respostas do /api/analyze
sempre trazem os quatro campos da análise (vazios quando houve erro).
"""
from __future__ import annotations
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

from revisao.analyzer import analyze
from revisao.config import ApiConfig, CORS_ORIGINS
from revisao.core_api import CoreClient
from revisao.errors import ArticleNotFoundError, EmptyQueryError, SearchApiError
from revisao.log import get_logger
from revisao.schema import AnalysisResult, AnalyzeRequest, SearchRequest
from revisao.search import search_articles

logger = get_logger(__name__)


def _analysis_error(message: str, status: int):
    return jsonify({"error": message, **AnalysisResult.empty().to_json()}), status


def create_app(config: Optional[ApiConfig] = None) -> Flask:
    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["API_CONFIG"] = config or ApiConfig.from_env()
    CORS(app, resources={r"/api/*": {"origins": CORS_ORIGINS}})

    @app.errorhandler(404)
    def _not_found(_e):
        return jsonify({"error": "Rota não encontrada"}), 404

    @app.errorhandler(405)
    def _method_not_allowed(_e):
        logger.info("API Route: Método não permitido (%s %s)", request.method, request.path)
        return jsonify({"error": "Método não permitido"}), 405

    @app.errorhandler(500)
    def _internal_error(e):
        original = getattr(e, "original_exception", None) or e
        logger.error("Erro interno em %s %s: %s", request.method, request.path, original)
        return jsonify({"error": f"Erro interno do servidor: {original}"}), 500

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.post("/api/analyze")
    def analyze_route():
        logger.info("API Route: Iniciando processamento da requisição")

        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            logger.error("API Route: Erro ao fazer parse do corpo da requisição")
            return _analysis_error("Erro ao processar o corpo da requisição", 400)
        try:
            payload = AnalyzeRequest.model_validate(body)
        except ValidationError as e:
            logger.error("API Route: Corpo inválido: %s", e)
            return _analysis_error("Erro ao processar o corpo da requisição", 400)

        full_text = payload.full_text
        if not full_text:
            logger.info("API Route: Texto vazio")
            return jsonify(AnalysisResult.empty().to_json())

        logger.info("API Route: Texto recebido, tamanho: %d", len(full_text))
        try:
            result = analyze(full_text)
        except Exception as e:
            logger.exception("API Route: Erro na análise do texto")
            return _analysis_error(f"Erro na análise do texto: {e}", 500)

        logger.info("API Route: Análise concluída com sucesso")
        return jsonify(result.to_json())

    @app.post("/api/search")
    def search_route():
        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "Erro ao processar o corpo da requisição"}), 400
        try:
            req = SearchRequest.model_validate(body)
            page = search_articles(
                req.query,
                req.filters,
                page=req.page,
                source=req.source,
                config=app.config["API_CONFIG"],
            )
        except ValidationError as e:
            return jsonify({"error": f"Parâmetros de busca inválidos: {e.error_count()} erro(s)"}), 400
        except (EmptyQueryError, ValueError) as e:
            return jsonify({"error": str(e)}), 400
        except SearchApiError as e:
            logger.error("Erro na busca de artigos (%s): %s", e.source, e)
            return jsonify({"error": str(e)}), 502
        return jsonify(page.to_json())

    @app.get("/api/articles/<article_id>")
    def article_route(article_id: str):
        try:
            article = CoreClient(app.config["API_CONFIG"]).get_article(article_id)
        except ArticleNotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except SearchApiError as e:
            logger.error("Erro ao buscar detalhes do artigo: %s", e)
            return jsonify({"error": str(e)}), 502
        return jsonify(article.model_dump(by_alias=True))

    return app
