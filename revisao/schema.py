from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    method: Optional[str] = Field(default=None, description="Trecho sobre a metodologia ou sentinela")
    location: Optional[str] = Field(default=None, description="Trecho sobre local/contexto ou sentinela")
    participants: Optional[str] = Field(default=None, description="Trecho sobre participantes ou sentinela")
    main_keywords: List[str] = Field(
        default_factory=list,
        alias="mainKeywords",
        max_length=5,
        description="Até 5 palavras mais frequentes (len > 3), em ordem decrescente",
    )

    @classmethod
    def empty(cls) -> "AnalysisResult":
        return cls()

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class AnalyzeRequest(BaseModel):
    full_text: Optional[str] = Field(default=None, alias="fullText")


class Article(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    authors: List[str] = Field(default_factory=list)
    year: Optional[int] = None
    abstract: str = ""
    source: str = ""
    url: str = ""
    journal: Optional[str] = None
    university: Optional[str] = None
    type: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    full_text: Optional[str] = Field(default=None, alias="fullText")
    method: Optional[str] = None
    location: Optional[str] = None
    participants: Optional[str] = None
    main_keywords: Optional[List[str]] = Field(default=None, alias="mainKeywords")


class SearchFilters(BaseModel):
    year: Optional[int] = None
    year_from: Optional[int] = Field(default=None, alias="yearFrom")
    year_to: Optional[int] = Field(default=None, alias="yearTo")
    author: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("year", "year_from", "year_to", "author", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        # o formulário envia "" quando o campo fica vazio
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def year_range(self) -> tuple[Optional[int], Optional[int]]:
        """Um ano isolado vira o intervalo fechado [ano, ano]."""
        if self.year:
            return self.year, self.year
        return self.year_from, self.year_to


class SearchRequest(BaseModel):
    query: str = ""
    filters: SearchFilters = Field(default_factory=SearchFilters)
    page: int = Field(default=1, ge=1)
    source: str = "core"


class SearchPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[Article] = Field(default_factory=list)
    total_hits: int = Field(default=0, alias="totalHits")
    total_pages: int = Field(default=0, alias="totalPages")
    page: int = 1

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)
