import pytest
import requests

from ingestion import pull_html


class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


def test_download_html(monkeypatch, tmp_path):
    calls = {}

    def fake_get(url, headers=None, timeout=None):
        calls.update(url=url, headers=headers, timeout=timeout)
        return FakeResponse("<html><body><p>Hi</p></body></html>")

    monkeypatch.setattr(pull_html.requests, "get", fake_get)
    path = pull_html.download_html("https://example.org/about", tmp_path / "about.html", timeout=5)

    assert path.read_text(encoding="utf-8") == "<html><body><p>Hi</p></body></html>"
    assert calls["timeout"] == 5
    assert calls["headers"]["User-Agent"] == pull_html.USER_AGENT


def test_download_html_http_error(monkeypatch, tmp_path):
    monkeypatch.setattr(pull_html.requests, "get", lambda url, **kw: FakeResponse("", status=404))
    with pytest.raises(requests.HTTPError):
        pull_html.download_html("https://example.org/missing", tmp_path / "x.html")
    assert not (tmp_path / "x.html").exists()


def test_default_filename():
    name = pull_html.default_filename("https://www.example.org/a/b?q=1")
    assert name.startswith("www.example.org_")
    assert name.endswith(".html")
