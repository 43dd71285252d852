from __future__ import annotations


class HeadMetaError(RuntimeError):
    pass


class TransportFailure(HeadMetaError):
    def __init__(self, cause: BaseException):
        super().__init__(f"transport failure: {cause}")
        self.cause = cause
        self.__cause__ = cause


class BadResponse(HeadMetaError):
    def __init__(self, status_code: int | None = None):
        super().__init__(f"invalid response (status={status_code!r})")
        self.status_code = status_code


class EmptyHead(HeadMetaError):
    def __init__(self) -> None:
        super().__init__("no head data received from server")
