from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from head_meta.config import Settings, load_settings
from head_meta.errors import HeadMetaError
from head_meta.session import StreamSession

logger = logging.getLogger(__name__)

_PROTOCOL_RE = re.compile(r"^https?://", re.IGNORECASE)

ScrapeCallback = Callable[[HeadMetaError | None, dict[str, str] | None], None]


@dataclass(frozen=True)
class ScrapeOutcome:
    error: HeadMetaError | None
    result: dict[str, str] | None


def strip_protocol(url: str) -> str:
    if not isinstance(url, str):
        raise TypeError("url must be a string")
    return _PROTOCOL_RE.sub("", url)


class HeadMetaScraper:
    """
    Streams a page over HTTP(S) and reports the `<meta>` pairs found in its `<head>`.

    The body is read chunk by chunk and the connection is dropped as soon as
    `</head>` has been seen.
    """

    def __init__(
        self,
        host: str,
        path: str = "/",
        *,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        if not isinstance(host, str):
            raise TypeError("host must be a string")
        if not isinstance(path, str):
            raise TypeError("path must be a string")
        host = strip_protocol(host).strip().rstrip("/")
        if not host:
            raise ValueError("host must not be empty")
        self._host = host
        self._path = path if path.startswith("/") else f"/{path}"
        self._settings = settings or load_settings()
        self._transport = transport
        try:
            httpx.URL(self.url)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid host or path: {self.url!r}") from e

    @property
    def host(self) -> str:
        return self._host

    @property
    def path(self) -> str:
        return self._path

    @property
    def url(self) -> str:
        return f"{self._settings.scheme}://{self._host}{self._path}"

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._settings.timeout_s,
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=False,
            transport=self._transport,
        )

    def _stream_into(self, session: StreamSession) -> None:
        with self._client() as client:
            with client.stream("GET", self.url) as response:
                if response.status_code != 200:
                    logger.info("bad response from %s: %s", self.url, response.status_code)
                    session.on_bad_response(response.status_code)
                    return
                for text in response.iter_text(self._settings.chunk_size):
                    session.on_chunk(text)
                    if not session.wants_more:
                        break

    def scrape(self, callback: ScrapeCallback | None = None) -> ScrapeOutcome:
        session = StreamSession(host=self._host, path=self._path)
        try:
            self._stream_into(session)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            session.on_error(e)
        finally:
            session.on_end()

        outcome = ScrapeOutcome(error=session.error, result=session.result)
        if callback is not None:
            callback(outcome.error, outcome.result)
        return outcome


def fetch_head_meta(
    host: str,
    path: str = "/",
    *,
    settings: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, str]:
    outcome = HeadMetaScraper(host, path, settings=settings, transport=transport).scrape()
    if outcome.error is not None:
        raise outcome.error
    assert outcome.result is not None
    return outcome.result
