from __future__ import annotations

from dataclasses import dataclass

HEAD_OPEN_TAG = "<head>"
HEAD_CLOSE_TAG = "</head>"


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Complete:
    head_text: str


@dataclass(frozen=True)
class Abort:
    pass


Signal = Continue | Complete | Abort

CONTINUE = Continue()


class HeadAccumulator:
    """
    Buffers the `<head>...</head>` slice of a document delivered in arbitrary chunks.

    Text before `<head>` is dropped as it arrives. Only the last few characters are kept
    so that a marker split across two chunks is still found. After `</head>` the
    accumulator is finished and further chunks are ignored.
    """

    def __init__(self) -> None:
        self.started = False
        self.finished = False
        self._buffer = ""
        # Unaccepted tail of the pre-head stream, shorter than the open marker.
        self._carry = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def is_empty(self) -> bool:
        return not self._buffer

    def feed(self, chunk: str) -> Signal:
        if self.finished:
            return CONTINUE

        text = chunk
        if not self.started:
            text = self._carry + text
            pos = text.find(HEAD_OPEN_TAG)
            if pos == -1:
                self._carry = text[-(len(HEAD_OPEN_TAG) - 1) :]
                return CONTINUE
            self._carry = ""
            self.started = True
            text = text[pos:]

        # The close marker may straddle the previous chunk, so rescan its last few chars.
        search_from = max(0, len(self._buffer) - len(HEAD_CLOSE_TAG) + 1)
        self._buffer += text
        pos = self._buffer.find(HEAD_CLOSE_TAG, search_from)
        if pos == -1:
            return CONTINUE

        self._buffer = self._buffer[: pos + len(HEAD_CLOSE_TAG)]
        self.finished = True
        return Complete(self._buffer)

    def abort(self) -> Abort:
        self._buffer = ""
        self._carry = ""
        self.finished = True
        return Abort()
