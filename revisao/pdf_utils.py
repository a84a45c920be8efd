from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from revisao.config import TEXT_MAX_CHARS
from revisao.log import get_logger

logger = get_logger(__name__)

def extract_text_from_pdf(pdf_path: Path, max_chars: Optional[int] = None) -> str:
    reader = PdfReader(str(pdf_path))
    text_parts = []
    for number, page in enumerate(reader.pages, start=1):
        try:
            page_text = page.extract_text() or ""
        except (PdfReadError, KeyError, ValueError) as e:
            logger.warning("Página %d de %s sem texto extraível: %s", number, pdf_path.name, e)
            page_text = ""
        text_parts.append(page_text)
    full_text = "\n".join(text_parts)
    return full_text[: max_chars or TEXT_MAX_CHARS]
