# Shared fixtures and fakes for the qualtrics_export tests.

import io
import json
import logging
import zipfile
from unittest.mock import patch

import pytest
import requests

import qualtrics_export
from qualtrics_export.credentials import Credential
from qualtrics_export.qualtrics_client import QualtricsClient

ROOT_URL = "https://test.qualtrics.com"
SURVEYS_URL = f"{ROOT_URL}/API/v3/surveys"
EXPORT_URL = f"{ROOT_URL}/API/v3/responseexports/"


def make_response(status_code: int, data=None, content: bytes = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    if content is not None:
        resp.headers["Content-Type"] = "application/octet-stream"
        resp._content = content
    else:
        resp.headers["Content-Type"] = "application/json"
        resp._content = json.dumps(data if data is not None else {}).encode("utf-8")
    return resp


def make_zip(member_name: str, text: str) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as z:
        z.writestr(member_name, text)
    return buf.getvalue()


class FakeSession:
    """Stand-in for requests.Session.

    Routes are keyed on (method, url). Each route holds a list of responses
    (or exceptions) handed out in order; the last one repeats. Every call is
    recorded in ``calls`` as (method, url, kwargs).
    """

    def __init__(self, routes=None):
        self.routes = {k: list(v) for k, v in (routes or {}).items()}
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    def add(self, method: str, url: str, *responses):
        self.routes.setdefault((method, url), []).extend(responses)

    def _handle(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        queue = self.routes.get((method, url))
        if not queue:
            return make_response(404, {"meta": {"error": {"errorMessage": "not found"}}})
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        return self._handle("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._handle("POST", url, **kwargs)

    def calls_to(self, method: str, url: str):
        return [c for c in self.calls if c[0] == method and c[1] == url]


@pytest.fixture(autouse=True)
def _patch_time_sleep():
    """Patch time.sleep in the poller so polling tests run instantly."""
    with patch("qualtrics_export.export_service.time.sleep") as sleep:
        yield sleep


@pytest.fixture(autouse=True)
def _clear_credentials(monkeypatch):
    qualtrics_export.credential_store.clear()
    monkeypatch.setattr(qualtrics_export, "QUALTRICS_API_TOKEN", None)
    yield
    qualtrics_export.credential_store.clear()


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("qualtrics_export.tests")


@pytest.fixture
def credential() -> Credential:
    return Credential("X")


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(credential, logger, session) -> QualtricsClient:
    return QualtricsClient(credential, logger, root_url=ROOT_URL, session=session)
