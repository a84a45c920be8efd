from __future__ import annotations
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Set

from revisao.config import ARTICLES_DB, JSON_DIR, MD_PATH, SENT_LOG
from revisao.filters import normalize_name
from revisao.schema import AnalysisResult, Article


def _read_json(path: Path, default):
    if not path.exists():
        return default
    raw = path.read_text(encoding="utf-8").strip()
    if not raw:
        return default
    return json.loads(raw)

def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

# ---------- controle de PDFs já processados ----------
def load_sent_files(path: Optional[Path] = None) -> Set[str]:
    path = path or SENT_LOG
    try:
        data = _read_json(path, [])
    except json.JSONDecodeError:
        return set()
    return set(data) if isinstance(data, list) else set()

def save_sent_files(sent: Set[str], path: Optional[Path] = None) -> None:
    _write_json(path or SENT_LOG, sorted(sent))

# ---------- resultados da análise ----------
def save_analysis_json(stem: str, result: AnalysisResult, out_dir: Optional[Path] = None) -> Path:
    out_dir = out_dir or JSON_DIR
    path = out_dir / f"{stem}.json"
    _write_json(path, result.to_json())
    return path

def append_to_md(title: str, result: AnalysisResult, md_path: Optional[Path] = None) -> None:
    md_path = md_path or MD_PATH
    md_path.parent.mkdir(parents=True, exist_ok=True)

    block = []
    block.append(f"## {title or '(sem título)'}\n")
    block.append(f"**Metodologia:** {result.method or ''}\n\n")
    block.append(f"**Local:** {result.location or ''}\n\n")
    block.append(f"**Participantes:** {result.participants or ''}\n\n")
    block.append(f"**Palavras-chave:** {', '.join(result.main_keywords)}\n\n")
    block.append("---\n\n")

    with md_path.open("a", encoding="utf-8") as f:
        f.writelines(block)

# ---------- coleção local de artigos ----------
class ArticleStore:
    """Coleção de artigos salvos em um arquivo JSON (lista de documentos)."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or ARTICLES_DB)

    def _load(self) -> List[dict]:
        data = _read_json(self.path, [])
        return data if isinstance(data, list) else []

    def add(self, article: Article) -> str:
        docs = self._load()
        doc_id = uuid.uuid4().hex
        doc = article.model_dump(by_alias=True, exclude={"id"})
        doc["id"] = doc_id
        doc["createdAt"] = datetime.now(timezone.utc).isoformat()
        docs.append(doc)
        _write_json(self.path, docs)
        return doc_id

    def all(self) -> List[Article]:
        return [Article.model_validate(d) for d in self._load()]

    def by_year(self, year: int) -> List[Article]:
        return [a for a in self.all() if a.year == year]

    def by_author(self, author: str) -> List[Article]:
        # igualdade exata após remover acentos/caixa
        target = normalize_name(author).strip()
        return [a for a in self.all() if any(normalize_name(x).strip() == target for x in a.authors)]
