from typing import Any, Optional


class QualtricsExportError(Exception):
    pass


class MissingCredentialError(QualtricsExportError):
    pass


class UnsupportedFormatError(QualtricsExportError):
    pass


class DirectoryNotFoundError(QualtricsExportError):
    pass


class ExtractionError(QualtricsExportError):
    pass


class ExportTimeoutError(QualtricsExportError):
    pass


class ExportCancelledError(QualtricsExportError):
    pass


class ExportFailedError(QualtricsExportError):
    pass


class QualtricsApiError(QualtricsExportError):
    def __init__(self, message: str, status_code: int, content: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.content = content


class BadRequestError(QualtricsApiError):
    pass


class AuthenticationError(QualtricsApiError):
    pass


class NotFoundError(QualtricsApiError):
    pass


class PayloadTooLargeError(QualtricsApiError):
    pass


class RateLimitError(QualtricsApiError):
    pass


class UnexpectedStatusError(QualtricsApiError):
    pass
