import pytest

from qualtrics_export.errors import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    PayloadTooLargeError,
    QualtricsApiError,
    RateLimitError,
    UnexpectedStatusError,
)
from qualtrics_export.response_codes import classify_response
from tests.conftest import make_response


def test_200_is_ok_with_parsed_content(logger):
    result = classify_response(make_response(200, {"result": {"id": "ES_1"}}), logger)

    assert result.ok
    assert result.status_code == 200
    assert result.content == {"result": {"id": "ES_1"}}


@pytest.mark.parametrize("status", [500, 503])
def test_server_errors_return_content_without_raising(logger, status):
    body = {"meta": {"error": {"errorCode": "Q_500", "instanceId": "abc"}}}

    result = classify_response(make_response(status, body), logger)

    assert not result.ok
    assert result.status_code == status
    assert result.content == body


@pytest.mark.parametrize(
    "status, error_cls",
    [
        (400, BadRequestError),
        (401, AuthenticationError),
        (404, NotFoundError),
        (413, PayloadTooLargeError),
        (429, RateLimitError),
    ],
)
def test_fatal_codes_raise_specific_error(logger, status, error_cls):
    with pytest.raises(error_cls) as exc_info:
        classify_response(make_response(status, {"secret": "payload"}), logger)

    assert exc_info.value.status_code == status
    assert exc_info.value.content is None
    assert f"({status}" in str(exc_info.value)


def test_fatal_diagnostics_are_distinct(logger):
    messages = set()
    for status in (400, 401, 404, 413, 429):
        with pytest.raises(QualtricsApiError) as exc_info:
            classify_response(make_response(status), logger)
        messages.add(str(exc_info.value))

    assert len(messages) == 5


@pytest.mark.parametrize("status", [301, 403, 418, 502])
def test_unclassified_codes_are_fatal_unknown(logger, status):
    with pytest.raises(UnexpectedStatusError) as exc_info:
        classify_response(make_response(status), logger)

    assert exc_info.value.status_code == status


def test_non_json_body_is_kept_as_text(logger):
    resp = make_response(503, content=b"Service Unavailable")

    result = classify_response(resp, logger)

    assert result.content == "Service Unavailable"
