import logging
from typing import Optional

import requests

from qualtrics_export.config import (
    QUALTRICS_ROOT_URL,
    TIMEOUT_EXPORT_START,
    TIMEOUT_STATUS_CHECK,
    TIMEOUT_FILE_DOWNLOAD
)
from qualtrics_export.credentials import Credential
from qualtrics_export.errors import ExportFailedError
from qualtrics_export.response_codes import ApiResult, classify_response


class QualtricsClient:
    def __init__(self, credential: Credential, logger: logging.Logger,
                 root_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.logger = logger
        self.root_url = (root_url or QUALTRICS_ROOT_URL).rstrip("/")
        self.base_url = f"{self.root_url}/API/v3/"
        self.export_url = f"{self.base_url}responseexports/"
        self.headers = credential.headers()
        # Alleen een zelf aangemaakte session sluiten we ook zelf
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def list_surveys(self, page_url: Optional[str] = None) -> ApiResult:
        response = self.session.get(
            page_url or f"{self.base_url}surveys",
            headers=self.headers,
            timeout=TIMEOUT_STATUS_CHECK
        )
        return classify_response(response, self.logger)

    def start_export(self, payload: dict) -> ApiResult:
        response = self.session.post(
            self.export_url,
            headers=self.headers,
            json=payload,
            timeout=TIMEOUT_EXPORT_START
        )
        self.logger.debug(f"Export init status: {response.status_code}")
        return classify_response(response, self.logger)

    def check_status(self, job_id: str) -> ApiResult:
        response = self.session.get(
            f"{self.export_url}{job_id}",
            headers=self.headers,
            timeout=TIMEOUT_STATUS_CHECK
        )
        return classify_response(response, self.logger)

    def download_file(self, job_id: str) -> bytes:
        response = self.session.get(
            f"{self.export_url}{job_id}/file",
            headers={**self.headers, "Accept": "application/octet-stream"},
            timeout=TIMEOUT_FILE_DOWNLOAD
        )
        if response.status_code == 200:
            return response.content

        result = classify_response(response, self.logger)
        raise ExportFailedError(
            f"Download of export {job_id} failed with status {result.status_code}: {result.content}"
        )
