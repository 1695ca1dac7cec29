import logging
from dataclasses import dataclass
from typing import Any

import requests

from qualtrics_export.errors import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    PayloadTooLargeError,
    RateLimitError,
    UnexpectedStatusError,
)

FATAL_STATUS_CODES = {
    400: (
        BadRequestError,
        "Qualtrics API raised a bad request (400) error. "
        "Check the survey ID, format and date parameters of your request."
    ),
    401: (
        AuthenticationError,
        "Qualtrics API raised an authentication (401) error - you may not have "
        "the required authorization. Please check your API key and root url."
    ),
    404: (
        NotFoundError,
        "Qualtrics API complains that the requested resource cannot be found "
        "(404 error). Please check if you are using the correct survey ID."
    ),
    413: (
        PayloadTooLargeError,
        "The request body was too large (413). This can also happen in cases "
        "where a multipart/form-data request is malformed."
    ),
    429: (
        RateLimitError,
        "You have reached the concurrent request limit (429)."
    ),
}

RETRYABLE_STATUS_CODES = {
    500: (
        "Qualtrics API reports an internal server (500) error. Please contact "
        "Qualtrics Support (https://www.qualtrics.com/contact/) with the "
        "instanceId and errorCode returned by this function."
    ),
    503: (
        "Qualtrics API reports a temporary internal server (503) error. Please "
        "contact Qualtrics Support (https://www.qualtrics.com/contact/) with the "
        "instanceId and errorCode returned by this function or retry your query."
    ),
}


@dataclass
class ApiResult:
    ok: bool
    status_code: int
    content: Any


def _content(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def classify_response(response: requests.Response, logger: logging.Logger) -> ApiResult:
    status = response.status_code

    if status == 200:
        return ApiResult(ok=True, status_code=status, content=_content(response))

    if status in RETRYABLE_STATUS_CODES:
        logger.warning(RETRYABLE_STATUS_CODES[status])
        return ApiResult(ok=False, status_code=status, content=_content(response))

    if status in FATAL_STATUS_CODES:
        error_cls, message = FATAL_STATUS_CODES[status]
        logger.error(f"API fout {status}: {response.text}")
        raise error_cls(message, status)

    logger.error(f"Onverwachte API status {status}: {response.text}")
    raise UnexpectedStatusError(
        f"Qualtrics API returned an unexpected status code ({status}).", status
    )
