from typing import Optional


class SearchApiError(RuntimeError):
    """Falha ao consultar uma API de busca externa (CORE, SciELO)."""

    def __init__(self, message: str, source: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.status = status


class EmptyQueryError(ValueError):
    def __init__(self, message: str = "A consulta de busca não pode estar vazia."):
        super().__init__(message)


class ArticleNotFoundError(LookupError):
    pass
