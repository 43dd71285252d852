from __future__ import annotations

import logging
from dataclasses import dataclass, field

from head_meta.accumulator import Complete, HeadAccumulator
from head_meta.errors import BadResponse, EmptyHead, HeadMetaError, TransportFailure
from head_meta.html_head import parse_head_meta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Done:
    meta: dict[str, str]


@dataclass(frozen=True)
class Failed:
    error: HeadMetaError


SessionState = Pending | Done | Failed


@dataclass
class StreamSession:
    """
    Per-fetch state driven by the transport's chunk/error/end signals.

    The first terminal transition wins; any signal after that is ignored.
    """

    host: str
    path: str = "/"
    accumulator: HeadAccumulator = field(default_factory=HeadAccumulator)
    state: SessionState = field(default_factory=Pending)

    @property
    def is_terminal(self) -> bool:
        return not isinstance(self.state, Pending)

    @property
    def wants_more(self) -> bool:
        return not self.is_terminal and not self.accumulator.finished

    @property
    def result(self) -> dict[str, str] | None:
        return self.state.meta if isinstance(self.state, Done) else None

    @property
    def error(self) -> HeadMetaError | None:
        return self.state.error if isinstance(self.state, Failed) else None

    def _settle(self, state: Done | Failed) -> None:
        logger.debug("session %s%s settled: %s", self.host, self.path, type(state).__name__)
        self.state = state

    def on_chunk(self, text: str) -> None:
        if self.is_terminal:
            logger.debug("ignoring chunk for settled session %s%s", self.host, self.path)
            return
        signal = self.accumulator.feed(text)
        if isinstance(signal, Complete):
            self._settle(Done(parse_head_meta(signal.head_text)))

    def on_error(self, cause: BaseException) -> None:
        if self.is_terminal:
            return
        logger.info("transport error for %s%s: %s", self.host, self.path, cause)
        self.accumulator.abort()
        self._settle(Failed(TransportFailure(cause)))

    def on_bad_response(self, status_code: int | None = None) -> None:
        if self.is_terminal:
            return
        self.accumulator.abort()
        self._settle(Failed(BadResponse(status_code)))

    def on_end(self) -> None:
        if self.is_terminal:
            return
        if self.accumulator.is_empty:
            self._settle(Failed(EmptyHead()))
            return
        # Stream closed inside <head>: parse whatever was captured.
        self.accumulator.finished = True
        self._settle(Done(parse_head_meta(self.accumulator.buffer)))
