import httpx
import pytest

from careers_engine import fetchers
from careers_engine.errors import FetchError
from careers_engine.fetchers import HttpFetcher


def _fetcher(handler, **kwargs):
    return HttpFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)), **kwargs)


def test_http_fetcher_returns_body():
    fetcher = _fetcher(lambda request: httpx.Response(200, text="<p>ok</p>"))
    assert fetcher.get("https://jobs.example.com/") == "<p>ok</p>"


def test_http_fetcher_backs_off_on_429(monkeypatch):
    sleeps = []
    monkeypatch.setattr(fetchers.time, "sleep", sleeps.append)
    responses = iter([httpx.Response(429), httpx.Response(429), httpx.Response(200, text="done")])

    fetcher = _fetcher(lambda request: next(responses), backoff_s=1.0)

    assert fetcher.get("https://jobs.example.com/") == "done"
    assert sleeps == [1.0, 2.0]


def test_http_fetcher_gives_up(monkeypatch):
    monkeypatch.setattr(fetchers.time, "sleep", lambda s: None)
    fetcher = _fetcher(lambda request: httpx.Response(429), max_retries=1)

    with pytest.raises(FetchError, match="HTTP 429"):
        fetcher.get("https://jobs.example.com/")


def test_http_fetcher_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(FetchError, match="refused"):
        _fetcher(handler).get("https://jobs.example.com/")


def test_http_fetcher_cannot_interact():
    fetcher = _fetcher(lambda request: httpx.Response(200))
    with pytest.raises(FetchError):
        fetcher.click("button.next")
    with pytest.raises(FetchError):
        fetcher.scroll_to_end()


class _BrokenChromium:
    def launch(self, **kwargs):
        from playwright.sync_api import Error

        raise Error("BrowserType.launch: Executable doesn't exist")


class _StubPlaywright:
    def __init__(self):
        self.chromium = _BrokenChromium()
        self.stopped = False

    def start(self):
        return self

    def stop(self):
        self.stopped = True


def test_browser_launch_failure_is_fetch_error(monkeypatch):
    sync_api = pytest.importorskip("playwright.sync_api")
    stub = _StubPlaywright()
    monkeypatch.setattr(sync_api, "sync_playwright", lambda: stub)
    fetcher = fetchers.BrowserFetcher()

    with pytest.raises(FetchError, match="Executable doesn't exist"):
        fetcher.get("about:blank")
    assert stub.stopped
