# run.py
import argparse
import json
import sys
from pathlib import Path


def _cmd_serve(args):
    from revisao.server import create_app  # importa só agora
    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


def _cmd_analyze(args):
    from revisao.pipeline import main
    main(max_count=args.count)


def _cmd_analyze_file(args):
    from revisao.analyzer import analyze
    path = Path(args.path)
    if path.suffix.lower() == ".pdf":
        from revisao.pdf_utils import extract_text_from_pdf
        text = extract_text_from_pdf(path)
    else:
        text = path.read_text(encoding="utf-8")
    print(json.dumps(analyze(text).to_json(), ensure_ascii=False, indent=2))


def _cmd_search(args):
    from rich.console import Console
    from rich.table import Table

    from revisao.errors import SearchApiError, EmptyQueryError
    from revisao.log import error
    from revisao.schema import SearchFilters
    from revisao.search import search_articles

    filters = SearchFilters(year=args.year, author=args.author)
    try:
        page = search_articles(args.query, filters, page=args.page, source=args.source)
    except (SearchApiError, EmptyQueryError) as e:
        error(f"Erro na busca: {e}")
        sys.exit(1)

    table = Table(title=f"Resultados da Busca - Total: {page.total_hits} artigos (página {page.page} de {page.total_pages})")
    table.add_column("ID", style="dim")
    table.add_column("Título")
    table.add_column("Autores")
    table.add_column("Ano", justify="right")
    for art in page.data:
        table.add_row(art.id, art.title, ", ".join(art.authors), str(art.year or ""))
    Console().print(table)


def _cmd_detail(args):
    from rich.console import Console
    from rich.table import Table

    from revisao.client import analyze_article, apply_analysis, detail_rows
    from revisao.config import BACKEND_URL
    from revisao.core_api import CoreClient
    from revisao.errors import ArticleNotFoundError, SearchApiError
    from revisao.log import error, warn

    try:
        article = CoreClient().get_article(args.article_id)
    except (ArticleNotFoundError, SearchApiError) as e:
        error(f"Erro ao buscar detalhes do artigo: {e}")
        sys.exit(1)

    # a análise é opcional: se falhar, o painel mostra "Não informado"
    if article.full_text:
        analysis = analyze_article(article.full_text, base_url=args.backend or BACKEND_URL)
        if analysis.get("error"):
            warn(f"Análise indisponível: {analysis['error']}")
        article = apply_analysis(article, analysis)

    table = Table(title="Detalhes do Artigo", show_header=False)
    table.add_column("Campo", style="bold")
    table.add_column("Valor")
    for label, value in detail_rows(article):
        table.add_row(label, value)
    Console().print(table)


def _cmd_save(args):
    from revisao.errors import ArticleNotFoundError, SearchApiError
    from revisao.log import error, info
    from revisao.pipeline import save_article

    try:
        doc_id, article = save_article(args.article_id)
    except (ArticleNotFoundError, SearchApiError) as e:
        error(f"Erro ao salvar artigo: {e}")
        sys.exit(1)
    info(f"✅ Artigo salvo ({doc_id}): {article.title}")


def _cmd_saved(args):
    from rich.console import Console
    from rich.table import Table

    from revisao.storage import ArticleStore

    store = ArticleStore()
    if args.year:
        articles = store.by_year(args.year)
    elif args.author:
        articles = store.by_author(args.author)
    else:
        articles = store.all()

    table = Table(title=f"Artigos salvos: {len(articles)}")
    table.add_column("ID", style="dim")
    table.add_column("Título")
    table.add_column("Ano", justify="right")
    table.add_column("Palavras-chave")
    for art in articles:
        table.add_row(art.id, art.title, str(art.year or ""), ", ".join(art.main_keywords or []))
    Console().print(table)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Revisão de literatura: busca de artigos e análise heurística")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("serve", help="Sobe o backend HTTP (Flask)")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.add_argument("--debug", action="store_true")
    p.set_defaults(func=_cmd_serve)

    p = sub.add_parser("analyze", help="Analisa os PDFs da pasta ./PDF")
    p.add_argument("--count", type=int, default=None, help="Quantos PDFs processar nesta execução")
    p.set_defaults(func=_cmd_analyze)

    p = sub.add_parser("analyze-file", help="Analisa um único arquivo (.pdf ou .txt)")
    p.add_argument("path")
    p.set_defaults(func=_cmd_analyze_file)

    p = sub.add_parser("search", help="Busca artigos no CORE ou na SciELO")
    p.add_argument("query")
    p.add_argument("--year", type=int, default=None)
    p.add_argument("--author", default=None)
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--source", choices=["core", "scielo"], default="core")
    p.set_defaults(func=_cmd_search)

    p = sub.add_parser("detail", help="Mostra os detalhes de um artigo do CORE e a análise do texto completo")
    p.add_argument("article_id")
    p.add_argument("--backend", default=None, help="URL do backend de análise (padrão: BACKEND_URL)")
    p.set_defaults(func=_cmd_detail)

    p = sub.add_parser("save", help="Salva um artigo do CORE (com a análise) na coleção local")
    p.add_argument("article_id")
    p.set_defaults(func=_cmd_save)

    p = sub.add_parser("saved", help="Lista os artigos da coleção local")
    p.add_argument("--year", type=int, default=None)
    p.add_argument("--author", default=None)
    p.set_defaults(func=_cmd_saved)

    args = parser.parse_args()
    if args.command == "serve":
        from revisao.config import BACKEND_HOST, BACKEND_PORT
        args.host = args.host or BACKEND_HOST
        args.port = args.port or BACKEND_PORT
    args.func(args)
