from __future__ import annotations

from typing import Optional, Tuple


class WorkerError(Exception):
    """Base class; each subclass maps to one HTTP status."""
    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class QuoteFetchError(WorkerError):
    status_code = 503
    error = "no_quotes"

    def __init__(self, reason: str):
        super().__init__(f"no quotes available: {reason}")


class QuoteDecodeError(WorkerError):
    status_code = 503
    error = "no_json_quotes"

    def __init__(self, reason: str):
        super().__init__(f"no JSON quotes available: {reason}")


class RenderError(WorkerError):
    status_code = 400
    error = "bad_request"

    def __init__(self, reason: str):
        super().__init__("Bad Request")
        self.reason = reason


class EncodeError(WorkerError):
    status_code = 500
    error = "encode_failed"

    def __init__(self, reason: str, dims: Optional[Tuple[int, int]] = None):
        super().__init__(f"ups: {reason}, buf dim: {dims}")
        self.dims = dims


class BadModeError(WorkerError):
    status_code = 400
    error = "bad_mode"

    def __init__(self, mode: str, allowed: Tuple[str, ...]):
        super().__init__(f"mode must be one of {allowed}, got {mode!r}")
