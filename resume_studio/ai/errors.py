from __future__ import annotations


class AIServiceError(RuntimeError):
    def __init__(self, message: str, *, code: str = "ai_unavailable"):
        super().__init__(message)
        self.code = code


class ConfigurationError(AIServiceError):
    """The upstream credential is missing or rejected; retrying cannot help."""

    def __init__(self, message: str, *, hint: str = "", code: str = "ai_not_configured"):
        super().__init__(message, code=code)
        self.hint = hint


class UpstreamCallError(Exception):
    """Raised by backends for a failed generation call.

    ``status_code`` is the HTTP-equivalent status reported by the SDK, when the
    SDK exposes one.
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(AIServiceError):
    def __init__(self, message: str, *, model: str, cause: BaseException | None = None, code: str):
        super().__init__(message, code=code)
        self.model = model
        self.cause = cause


class UpstreamRateLimited(UpstreamError):
    def __init__(self, message: str, *, model: str, cause: BaseException | None = None):
        super().__init__(message, model=model, cause=cause, code="upstream_rate_limited")


class UpstreamModelUnavailable(UpstreamError):
    def __init__(self, message: str, *, model: str, cause: BaseException | None = None):
        super().__init__(message, model=model, cause=cause, code="upstream_model_unavailable")


class UpstreamFatal(UpstreamError):
    def __init__(
        self,
        message: str,
        *,
        model: str,
        cause: BaseException | None = None,
        credential: bool = False,
    ):
        super().__init__(message, model=model, cause=cause, code="upstream_fatal")
        self.credential = credential


class AllCandidatesExhausted(AIServiceError):
    def __init__(
        self,
        message: str,
        *,
        last_error: UpstreamError | None,
        tried: list[str],
        code: str = "all_models_exhausted",
    ):
        super().__init__(message, code=code)
        self.last_error = last_error
        self.tried = tried


class GenerationDeadlineExceeded(AllCandidatesExhausted):
    def __init__(self, message: str, *, last_error: UpstreamError | None, tried: list[str]):
        super().__init__(message, last_error=last_error, tried=tried, code="deadline_exceeded")


class MalformedModelOutput(AIServiceError):
    def __init__(self, message: str, *, raw_text: str):
        super().__init__(message, code="malformed_model_output")
        self.raw_text = raw_text
