import pytest
import requests

from conftest import FakeResponse
from revisao.retry import is_retryable_status, with_retry


def _failing(*outcomes):
    """Operação que lança/retorna os itens em sequência."""
    seq = list(outcomes)
    calls = {"n": 0}

    def op():
        calls["n"] += 1
        item = seq.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return op, calls


def _http_error(status):
    return requests.HTTPError(f"{status}", response=FakeResponse(status, {}))


def test_retryable_statuses():
    assert is_retryable_status(429)
    assert is_retryable_status(500)
    assert not is_retryable_status(404)
    assert not is_retryable_status(None)


def test_retries_then_succeeds_with_exponential_backoff():
    delays = []
    op, calls = _failing(_http_error(429), _http_error(500), "ok")
    assert with_retry(op, max_retries=3, base_delay=0.5, sleep=delays.append) == "ok"
    assert calls["n"] == 3
    assert delays == [0.5, 1.0]


def test_gives_up_after_max_retries():
    delays = []
    op, calls = _failing(*[_http_error(429)] * 4)
    with pytest.raises(requests.HTTPError):
        with_retry(op, max_retries=2, base_delay=1, sleep=delays.append)
    assert calls["n"] == 3
    assert delays == [1, 2]


def test_non_retryable_status_propagates_immediately():
    delays = []
    op, calls = _failing(_http_error(404))
    with pytest.raises(requests.HTTPError):
        with_retry(op, max_retries=3, base_delay=1, sleep=delays.append)
    assert calls["n"] == 1
    assert delays == []


def test_connection_errors_are_retried():
    op, calls = _failing(requests.ConnectionError("caiu"), {"ok": True})
    assert with_retry(op, max_retries=1, base_delay=0, sleep=lambda _s: None) == {"ok": True}
    assert calls["n"] == 2


def test_custom_predicate():
    op, calls = _failing(_http_error(503), "ok")
    result = with_retry(op, max_retries=1, base_delay=0, is_retryable=lambda s: s == 503, sleep=lambda _s: None)
    assert result == "ok"
