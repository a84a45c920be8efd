from __future__ import annotations
import os
from pathlib import Path

from pydantic import BaseModel, Field

# === Paths base ===
BASE_DIR = Path(__file__).resolve().parents[1]
PDF_DIR = Path(os.environ.get("PDF_DIR", str(BASE_DIR / "PDF")))
OUTPUT_DIR = Path(os.environ.get("OUTPUT_DIR", str(BASE_DIR / "outputs")))
JSON_DIR = OUTPUT_DIR / "json"
SENT_LOG = OUTPUT_DIR / "sent.json"
MD_PATH = OUTPUT_DIR / "consolidado.md"
ARTICLES_DB = Path(os.environ.get("ARTICLES_DB", str(OUTPUT_DIR / "articles.json")))

# === Servidor (Flask) ===
BACKEND_HOST = os.environ.get("BACKEND_HOST", "0.0.0.0")
BACKEND_PORT = int(os.environ.get("BACKEND_PORT", "3005"))
BACKEND_URL = os.environ.get("BACKEND_URL", f"http://localhost:{BACKEND_PORT}")
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# === APIs externas ===
CORE_API_URL = os.environ.get("CORE_API_URL", "https://api.core.ac.uk/v3")
CORE_API_KEY = os.environ.get("CORE_API_KEY", "")
SCIELO_API_URL = os.environ.get("SCIELO_API_URL", "https://search.scielo.org/api/v1/")
PAGE_SIZE = int(os.environ.get("PAGE_SIZE", "10"))

# === Rede: timeout e retry (backoff exponencial) ===
HTTP_TIMEOUT_SEC = float(os.environ.get("HTTP_TIMEOUT_SEC", "30"))
MAX_RETRIES = int(os.environ.get("MAX_RETRIES", "3"))
RETRY_BASE_DELAY_SEC = float(os.environ.get("RETRY_BASE_DELAY_SEC", "1.0"))

# === Controles de execução (pipeline de PDFs) ===
MAX_ARTIGOS_POR_EXECUCAO = int(os.environ.get("MAX_ARTIGOS_POR_EXECUCAO", "1"))
TEXT_MAX_CHARS = int(os.environ.get("TEXT_MAX_CHARS", "200000"))


class ApiConfig(BaseModel):
    """Configuração explícita passada aos clientes que fazem requisições de saída."""
    core_api_url: str = Field(default=CORE_API_URL)
    core_api_key: str = Field(default=CORE_API_KEY, repr=False)
    scielo_api_url: str = Field(default=SCIELO_API_URL)
    page_size: int = Field(default=PAGE_SIZE, ge=1)
    timeout: float = Field(default=HTTP_TIMEOUT_SEC, gt=0)
    max_retries: int = Field(default=MAX_RETRIES, ge=0)
    retry_base_delay: float = Field(default=RETRY_BASE_DELAY_SEC, ge=0)

    @classmethod
    def from_env(cls) -> "ApiConfig":
        # relê o ambiente (útil quando variáveis mudam depois do import)
        return cls(
            core_api_url=os.environ.get("CORE_API_URL", CORE_API_URL),
            core_api_key=os.environ.get("CORE_API_KEY", CORE_API_KEY),
            scielo_api_url=os.environ.get("SCIELO_API_URL", SCIELO_API_URL),
            page_size=int(os.environ.get("PAGE_SIZE", str(PAGE_SIZE))),
            timeout=float(os.environ.get("HTTP_TIMEOUT_SEC", str(HTTP_TIMEOUT_SEC))),
            max_retries=int(os.environ.get("MAX_RETRIES", str(MAX_RETRIES))),
            retry_base_delay=float(os.environ.get("RETRY_BASE_DELAY_SEC", str(RETRY_BASE_DELAY_SEC))),
        )
