import json

from revisao import config, pipeline, storage
from revisao.analyzer import analyze
from revisao.schema import Article

TEXTO = "A metodologia foi qualitativa com entrevistas. Resultados mostraram entrevistas úteis."


def test_sent_files_roundtrip(tmp_path):
    path = tmp_path / "sent.json"
    assert storage.load_sent_files(path) == set()
    storage.save_sent_files({"b.pdf", "a.pdf"}, path)
    assert json.loads(path.read_text(encoding="utf-8")) == ["a.pdf", "b.pdf"]
    assert storage.load_sent_files(path) == {"a.pdf", "b.pdf"}


def test_corrupted_sent_log_is_ignored(tmp_path):
    path = tmp_path / "sent.json"
    path.write_text("{quebrado", encoding="utf-8")
    assert storage.load_sent_files(path) == set()


def test_analysis_json_and_markdown(tmp_path):
    result = analyze(TEXTO)
    path = storage.save_analysis_json("artigo1", result, tmp_path)
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["method"] == "foi qualitativa com entrevistas."
    assert saved["mainKeywords"][0] == "entrevistas"

    md = tmp_path / "consolidado.md"
    storage.append_to_md("artigo1", result, md)
    storage.append_to_md("artigo2", result, md)
    content = md.read_text(encoding="utf-8")
    assert content.count("## artigo") == 2
    assert "**Metodologia:** foi qualitativa com entrevistas." in content


def test_article_store_queries(tmp_path):
    store = storage.ArticleStore(tmp_path / "articles.json")
    first = store.add(Article(id="x", title="Um", year=2020, authors=["José da Silva"]))
    store.add(Article(id="y", title="Dois", year=2021, authors=["Ana Souza"], mainKeywords=["saúde"]))

    articles = store.all()
    assert [a.title for a in articles] == ["Um", "Dois"]
    assert articles[0].id == first
    assert articles[1].main_keywords == ["saúde"]
    assert [a.title for a in store.by_year(2021)] == ["Dois"]
    assert [a.title for a in store.by_author("jose da silva")] == ["Um"]
    assert store.by_author("Silva") == []

    raw = json.loads((tmp_path / "articles.json").read_text(encoding="utf-8"))
    assert all("createdAt" in doc for doc in raw)


def test_pipeline_analyzes_new_pdfs_once(tmp_path, monkeypatch):
    pdf_dir = tmp_path / "PDF"
    pdf_dir.mkdir()
    (pdf_dir / "a.pdf").write_bytes(b"%PDF-fake")
    (pdf_dir / "b.pdf").write_bytes(b"%PDF-fake")

    monkeypatch.setattr(config, "PDF_DIR", pdf_dir)
    monkeypatch.setattr(config, "JSON_DIR", tmp_path / "json")
    monkeypatch.setattr(storage, "JSON_DIR", tmp_path / "json")
    monkeypatch.setattr(storage, "SENT_LOG", tmp_path / "sent.json")
    monkeypatch.setattr(storage, "MD_PATH", tmp_path / "consolidado.md")
    monkeypatch.setattr(pipeline, "extract_text_from_pdf", lambda _p: TEXTO)

    assert pipeline.main(max_count=1) == 1
    assert pipeline.main(max_count=5) == 1
    assert pipeline.main(max_count=5) == 0
    assert sorted(p.name for p in (tmp_path / "json").glob("*.json")) == ["a.json", "b.json"]
    assert storage.load_sent_files() == {str(pdf_dir / "a.pdf"), str(pdf_dir / "b.pdf")}


class _FakeCore:
    def __init__(self, article):
        self.article = article

    def get_article(self, article_id):
        return self.article.model_copy(update={"id": article_id})


def test_save_article_stores_analysis(tmp_path):
    store = storage.ArticleStore(tmp_path / "articles.json")
    article = Article(id="0", title="Com texto", year=2022, fullText=TEXTO)
    doc_id, saved = pipeline.save_article("101", client=_FakeCore(article), store=store)

    assert saved.method == "foi qualitativa com entrevistas."
    stored = store.all()
    assert [a.id for a in stored] == [doc_id]
    assert stored[0].main_keywords[0] == "entrevistas"


def test_save_article_without_full_text_keeps_fields_empty(tmp_path):
    store = storage.ArticleStore(tmp_path / "articles.json")
    _, saved = pipeline.save_article("7", client=_FakeCore(Article(id="0", title="Sem texto")), store=store)
    assert saved.method is None
    assert store.all()[0].title == "Sem texto"
