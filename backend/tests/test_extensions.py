"""
Unit tests for remote extension fetching (mocked HTTP).
Run from repo root: python -m pytest backend/tests/test_extensions.py -v
"""
import pytest
from unittest.mock import patch, MagicMock

import requests


def _response(status_code=200, payload=None, bad_json=False):
    resp = MagicMock(status_code=status_code)
    if bad_json:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    return resp


@patch("veganscan.extensions.http_retry.requests.get")
def test_get_json_success(mock_get):
    """200 with JSON body returns payload."""
    from veganscan.extensions.http_retry import get_json_with_retries
    mock_get.return_value = _response(payload={"blacklist": ["honig"]})
    payload, err = get_json_with_retries("https://example.org/ext.json", initial_backoff=0)
    assert err is None
    assert payload == {"blacklist": ["honig"]}
    assert mock_get.call_count == 1


@patch("veganscan.extensions.http_retry.time.sleep")
@patch("veganscan.extensions.http_retry.requests.get")
def test_get_json_retries_timeout_then_succeeds(mock_get, mock_sleep):
    """Timeouts are retried with backoff."""
    from veganscan.extensions.http_retry import get_json_with_retries
    mock_get.side_effect = [requests.Timeout("slow"), _response(payload={"greylist": []})]
    payload, err = get_json_with_retries("https://example.org/ext.json", max_retries=3, initial_backoff=1.0)
    assert err is None
    assert payload == {"greylist": []}
    assert mock_get.call_count == 2
    mock_sleep.assert_called_once_with(1.0)


@patch("veganscan.extensions.http_retry.time.sleep")
@patch("veganscan.extensions.http_retry.requests.get")
def test_get_json_gives_up_after_retries(mock_get, mock_sleep):
    """Persistent 5xx returns an error after max_retries."""
    from veganscan.extensions.http_retry import get_json_with_retries
    mock_get.return_value = _response(status_code=503)
    payload, err = get_json_with_retries("https://example.org/ext.json", max_retries=3)
    assert payload is None
    assert "503" in err
    assert mock_get.call_count == 3
    assert mock_sleep.call_count == 2


@patch("veganscan.extensions.http_retry.requests.get")
def test_get_json_client_error_and_bad_body_not_retried(mock_get):
    """4xx and undecodable JSON fail immediately."""
    from veganscan.extensions.http_retry import get_json_with_retries
    mock_get.return_value = _response(status_code=404)
    payload, err = get_json_with_retries("https://example.org/missing.json")
    assert payload is None and "404" in err
    mock_get.reset_mock()
    mock_get.return_value = _response(bad_json=True)
    payload, err = get_json_with_retries("https://example.org/broken.json")
    assert payload is None and "invalid JSON" in err
    assert mock_get.call_count == 1


@patch("veganscan.extensions.fetcher.get_json_with_retries")
def test_fetch_fragments_partial_failure(mock_fetch):
    """One failing source does not block the others; order follows the source list."""
    from veganscan.extensions.fetcher import fetch_extension_fragments
    responses = {
        "https://a.example/ext.json": ({"blacklist": ["honig"]}, None),
        "https://b.example/ext.json": (None, "ConnectionError: refused"),
        "https://c.example/ext.json": ({"greylist": ["glycerin"]}, None),
    }
    mock_fetch.side_effect = lambda url, **kw: responses[url]
    frags = fetch_extension_fragments(list(responses), timeout=1)
    assert frags == [{"blacklist": ["honig"]}, {"greylist": ["glycerin"]}]


def test_fetch_fragments_no_sources(monkeypatch):
    """No configured URLs -> empty list, no requests."""
    from veganscan.extensions.fetcher import fetch_extension_fragments
    monkeypatch.delenv("VEGANSCAN_EXTENSION_URLS", raising=False)
    assert fetch_extension_fragments() == []
    assert fetch_extension_fragments([]) == []


@patch("veganscan.extensions.fetcher.get_json_with_retries")
def test_fetch_fragments_uses_configured_urls(mock_fetch, monkeypatch):
    """URLs and timeout come from the environment when not given."""
    from veganscan.extensions.fetcher import fetch_extension_fragments
    monkeypatch.setenv("VEGANSCAN_EXTENSION_URLS", "https://a.example/x.json, https://b.example/y.json")
    monkeypatch.setenv("EXTENSION_FETCH_TIMEOUT", "3")
    mock_fetch.return_value = ({"blacklist": []}, None)
    frags = fetch_extension_fragments()
    assert len(frags) == 2
    called_urls = sorted(c.args[0] for c in mock_fetch.call_args_list)
    assert called_urls == ["https://a.example/x.json", "https://b.example/y.json"]
    assert all(c.kwargs["timeout"] == 3 for c in mock_fetch.call_args_list)
