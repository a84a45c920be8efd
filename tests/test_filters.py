from revisao.filters import (
    apply_local_filters,
    filter_by_author_name,
    filter_by_year_range,
    normalize_name,
)
from revisao.schema import Article, SearchFilters, SearchPage


def _art(i, year=None, authors=()):
    return Article(id=str(i), title=f"Artigo {i}", year=year, authors=list(authors))


ITEMS = [
    _art(1, 2018, ["José da Silva", "Ana Souza"]),
    _art(2, 2020, ["João Pereira"]),
    _art(3, None, ["José Silva"]),
    _art(4, 2023, ["Maria José Silva Júnior"]),
]


def test_year_range_inclusive_and_drops_missing_year():
    assert [a.id for a in filter_by_year_range(ITEMS, 2018, 2020)] == ["1", "2"]
    assert [a.id for a in filter_by_year_range(ITEMS, gte=2020)] == ["2", "4"]
    assert [a.id for a in filter_by_year_range(ITEMS)] == ["1", "2", "4"]


def test_normalize_name_strips_accents_and_punctuation():
    assert normalize_name("José da Silva-Júnior") == "jose da silvajunior"
    assert normalize_name("") == ""


def test_author_filter_requires_every_token():
    assert [a.id for a in filter_by_author_name(ITEMS, "jose silva")] == ["1", "3", "4"]
    assert [a.id for a in filter_by_author_name(ITEMS, "JOÃO")] == ["2"]
    assert filter_by_author_name(ITEMS, "Carlos") == []


def test_author_filter_empty_keeps_all():
    assert filter_by_author_name(ITEMS, "") == ITEMS
    assert filter_by_author_name(ITEMS, None) == ITEMS


def test_single_year_becomes_closed_range():
    assert SearchFilters(year="2020").year_range() == (2020, 2020)
    assert SearchFilters(year="", yearFrom=2019).year_range() == (2019, None)


def test_local_filters_keep_remote_totals():
    page = SearchPage(data=ITEMS, total_hits=42, total_pages=5, page=2)
    out = apply_local_filters(page, SearchFilters(year=2020))
    assert [a.id for a in out.data] == ["2"]
    assert (out.total_hits, out.total_pages, out.page) == (42, 5, 2)

    out = apply_local_filters(page, SearchFilters(author="Ana"))
    assert [a.id for a in out.data] == ["1"]
