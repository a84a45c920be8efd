from __future__ import annotations
import time
from typing import Callable, Optional, TypeVar

import requests

from revisao.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS = (429, 500)


def is_retryable_status(status: Optional[int]) -> bool:
    return status in RETRYABLE_STATUS


def _status_of(exc: Exception) -> Optional[int]:
    resp = getattr(exc, "response", None)
    return getattr(resp, "status_code", None)


def with_retry(
    operation: Callable[[], T],
    *,
    max_retries: int = 3,
    base_delay: float = 1.0,
    is_retryable: Callable[[Optional[int]], bool] = is_retryable_status,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Executa `operation` repetindo em falhas transitórias:
      - HTTPError cujo status satisfaz `is_retryable` (padrão: 429/500)
      - erros de conexão e timeout
    Espera base_delay * 2**tentativa entre as tentativas; esgotado o limite, relança.
    """
    attempt = 0
    while True:
        try:
            return operation()
        except requests.HTTPError as e:
            status = _status_of(e)
            if not is_retryable(status) or attempt >= max_retries:
                raise
            reason = f"HTTP {status}"
        except (requests.ConnectionError, requests.Timeout) as e:
            if attempt >= max_retries:
                raise
            reason = type(e).__name__

        delay = base_delay * (2 ** attempt)
        attempt += 1
        logger.warning("Falha transitória (%s); nova tentativa %d/%d em %.1fs", reason, attempt, max_retries, delay)
        sleep(delay)
