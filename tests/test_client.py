from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest

from head_meta.client import HeadMetaScraper, fetch_head_meta, strip_protocol
from head_meta.config import Settings
from head_meta.errors import BadResponse, EmptyHead, HeadMetaError, TransportFailure


class ChunkStream(httpx.SyncByteStream):
    def __init__(self, chunks: list[bytes], *, fail_after: int | None = None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.served = 0

    def __iter__(self) -> Iterator[bytes]:
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise httpx.ReadError("connection reset")
            self.served += 1
            yield chunk


def _settings() -> Settings:
    return Settings.model_validate({"HEAD_META_SCHEME": "https", "HEAD_META_TIMEOUT_S": 5})


def _transport(stream: ChunkStream, *, status: int = 200, seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, headers={"content-type": "text/html; charset=utf-8"}, stream=stream)

    return httpx.MockTransport(handler)


def test_scrape_scenario_a_chunked() -> None:
    doc = b'<html><head><title>x</title><meta name="description" content="hi"></head><body>...</body></html>'
    stream = ChunkStream([doc[i : i + 7] for i in range(0, len(doc), 7)])
    seen: list[httpx.Request] = []
    scraper = HeadMetaScraper("https://example.com", "/page.html", settings=_settings(), transport=_transport(stream, seen=seen))

    outcome = scraper.scrape()

    assert outcome.error is None
    assert outcome.result == {"description": "hi"}
    assert str(seen[0].url) == "https://example.com/page.html"


def test_scrape_stops_reading_after_head_close() -> None:
    stream = ChunkStream(
        [
            b'<html><head><meta property="og:title" content="Hello">',
            b"</head><body>",
            b'<head><meta property="og:title" content="Later"></head>',
            b"</body></html>",
        ]
    )
    outcome = HeadMetaScraper("example.com", settings=_settings(), transport=_transport(stream)).scrape()
    assert outcome.result == {"ogTitle": "Hello"}
    assert stream.served == 2


def test_scrape_invokes_callback_exactly_once() -> None:
    calls: list[tuple[HeadMetaError | None, dict[str, str] | None]] = []
    stream = ChunkStream([b'<head><meta name="a" content="1"></head>'])
    HeadMetaScraper("example.com", settings=_settings(), transport=_transport(stream)).scrape(
        lambda err, result: calls.append((err, result))
    )
    assert calls == [(None, {"a": "1"})]


def test_scrape_bad_status_is_bad_response() -> None:
    stream = ChunkStream([b'<head><meta name="a" content="1"></head>'])
    outcome = HeadMetaScraper("example.com", settings=_settings(), transport=_transport(stream, status=404)).scrape()
    assert isinstance(outcome.error, BadResponse)
    assert outcome.error.status_code == 404
    assert outcome.result is None
    assert stream.served == 0


def test_scrape_transport_error_mid_stream() -> None:
    stream = ChunkStream([b'<head><meta name="a" content="1">', b"</head>"], fail_after=1)
    outcome = HeadMetaScraper("example.com", settings=_settings(), transport=_transport(stream)).scrape()
    assert isinstance(outcome.error, TransportFailure)
    assert isinstance(outcome.error.cause, httpx.ReadError)
    assert outcome.result is None


def test_scrape_connect_error_is_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    outcome = HeadMetaScraper("example.com", settings=_settings(), transport=httpx.MockTransport(handler)).scrape()
    assert isinstance(outcome.error, TransportFailure)


def test_fetch_head_meta_raises_empty_head() -> None:
    stream = ChunkStream([b"<html><body>nothing</body></html>"])
    with pytest.raises(EmptyHead):
        fetch_head_meta("example.com", settings=_settings(), transport=_transport(stream))


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.example.com", "www.example.com"),
        ("http://example.com/x", "example.com/x"),
        ("example.com", "example.com"),
    ],
)
def test_strip_protocol(url: str, expected: str) -> None:
    assert strip_protocol(url) == expected


def test_scraper_validates_arguments() -> None:
    with pytest.raises(TypeError):
        HeadMetaScraper(None, settings=_settings())  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        HeadMetaScraper("example.com", 42, settings=_settings())  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        HeadMetaScraper("https://", settings=_settings())


def test_scraper_exposes_host_and_path() -> None:
    scraper = HeadMetaScraper("https://example.com/", "about", settings=_settings())
    assert scraper.host == "example.com"
    assert scraper.path == "/about"
    assert scraper.url == "https://example.com/about"


def test_scraper_rejects_unusable_url_at_construction() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<head></head>")

    with pytest.raises(ValueError):
        HeadMetaScraper("example.com:notaport", settings=_settings(), transport=httpx.MockTransport(handler))
