# revisao/pipeline.py
from __future__ import annotations
import os

from revisao import config
from revisao.analyzer import analyze
from revisao.log import info, warn, error
from revisao.pdf_utils import extract_text_from_pdf
from revisao.core_api import CoreClient
from revisao.schema import Article
from revisao.storage import (
    ArticleStore,
    load_sent_files,
    save_sent_files,
    save_analysis_json,
    append_to_md,
)


# ---------- util ----------
def _ensure_dirs() -> None:
    """Garante a estrutura mínima de pastas do projeto."""
    config.PDF_DIR.mkdir(parents=True, exist_ok=True)
    config.JSON_DIR.mkdir(parents=True, exist_ok=True)


# ---------- pipeline ----------
def main(max_count: int | None = None) -> int:
    """
    Executa a análise em lote:
      - escolhe até 'max_count' PDFs ainda não analisados
      - para cada PDF: extrai o texto, analisa, salva JSON/MD e marca como processado.
    Retorna quantos PDFs foram analisados.
    """
    _ensure_dirs()

    # resolve max_count: CLI (--count) > ENV > default(1)
    if max_count is None:
        max_count = int(os.environ.get("MAX_ARTIGOS_POR_EXECUCAO", str(config.MAX_ARTIGOS_POR_EXECUCAO)))

    pdfs = sorted(config.PDF_DIR.glob("*.pdf"))
    if not pdfs:
        warn(f"Nenhum PDF encontrado em {config.PDF_DIR} — adicione arquivos e rode novamente.")
        return 0

    sent = load_sent_files()
    todo = [p for p in pdfs if str(p) not in sent][:max_count]
    if not todo:
        info("Nenhum PDF novo para processar (todos já estão em outputs/sent.json).")
        return 0

    info(f"Processando {len(todo)} arquivo(s) nesta execução...")

    done = 0
    for idx, pdf_path in enumerate(todo, start=1):
        info(f"[{idx}/{len(todo)}] {pdf_path.name}")

        try:
            text = extract_text_from_pdf(pdf_path)
        except Exception as e:
            error(f"Falha ao ler {pdf_path.name}: {e}")
            continue
        if not text.strip():
            warn(f"Sem texto extraído — pulando: {pdf_path.name}")
            continue

        result = analyze(text)

        # persistência: JSON individual + consolidado.md
        save_analysis_json(pdf_path.stem, result)
        append_to_md(pdf_path.stem, result)
        info(f"✅ Salvo JSON e consolidado para {pdf_path.name}")

        # marca como processado e salva a cada arquivo (tolerante a falhas)
        sent.add(str(pdf_path))
        save_sent_files(sent)
        done += 1

    info("Concluído.")
    return done


# ---------- coleção local ----------
def save_article(article_id: str, client: CoreClient | None = None,
                 store: ArticleStore | None = None) -> tuple[str, Article]:
    """Busca o artigo no CORE, analisa o texto completo (quando houver) e grava na coleção local."""
    article = (client or CoreClient()).get_article(article_id)
    if article.full_text:
        result = analyze(article.full_text)
        article = article.model_copy(update={
            "method": result.method,
            "location": result.location,
            "participants": result.participants,
            "main_keywords": list(result.main_keywords),
        })
    doc_id = (store or ArticleStore()).add(article)
    return doc_id, article


if __name__ == "__main__":
    main()
