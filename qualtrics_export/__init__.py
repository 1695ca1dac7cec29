import logging
from typing import Any, Optional

import requests

from qualtrics_export.archive_handler import ArchiveHandler
from qualtrics_export.config import QUALTRICS_API_TOKEN
from qualtrics_export.credentials import Credential, CredentialStore
from qualtrics_export.errors import (
    AuthenticationError,
    BadRequestError,
    DirectoryNotFoundError,
    ExportCancelledError,
    ExportFailedError,
    ExportTimeoutError,
    ExtractionError,
    MissingCredentialError,
    NotFoundError,
    PayloadTooLargeError,
    QualtricsApiError,
    QualtricsExportError,
    RateLimitError,
    UnexpectedStatusError,
    UnsupportedFormatError,
)
from qualtrics_export.export_service import ExportJob, ExportService
from qualtrics_export.formats import ExportFormat
from qualtrics_export.logger import default_logger
from qualtrics_export.qualtrics_client import QualtricsClient
from qualtrics_export.survey_exporter import SurveyExporter
from qualtrics_export.survey_lister import SurveyLister

credential_store = CredentialStore()


def register_api_key(api_key: str) -> Credential:
    return credential_store.set(api_key)


def resolve_credential(credential: Optional[Credential] = None) -> Credential:
    if credential is not None:
        return credential
    try:
        return credential_store.get()
    except MissingCredentialError:
        if QUALTRICS_API_TOKEN:
            return Credential(QUALTRICS_API_TOKEN)
        raise


def build_exporter(root_url: str, credential: Optional[Credential] = None,
                   logger: Optional[logging.Logger] = None,
                   session: Optional[requests.Session] = None) -> SurveyExporter:
    logger = logger or default_logger()
    client = QualtricsClient(resolve_credential(credential), logger, root_url=root_url, session=session)
    return SurveyExporter(
        export_service=ExportService(client, logger),
        archive_handler=ArchiveHandler(client, logger),
        logger=logger
    )


def get_surveys(root_url: Optional[str] = None, credential: Optional[Credential] = None,
                logger: Optional[logging.Logger] = None,
                session: Optional[requests.Session] = None) -> Any:
    logger = logger or default_logger()
    with QualtricsClient(resolve_credential(credential), logger, root_url=root_url, session=session) as client:
        return SurveyLister(client, logger).list_surveys()


def get_survey(survey_id: str, root_url: str, export_format="csv", use_labels: bool = True,
               last_response_id: Optional[str] = None, start_date=None, end_date=None,
               save_dir: Optional[str] = None, verbose: bool = False,
               credential: Optional[Credential] = None,
               logger: Optional[logging.Logger] = None,
               session: Optional[requests.Session] = None, **kwargs) -> Any:
    # Formaat eerst: spss mag nooit tot een request leiden
    export_format = ExportFormat.parse(export_format)
    with build_exporter(root_url, credential=credential, logger=logger, session=session) as exporter:
        return exporter.get_survey(
            survey_id,
            export_format,
            use_labels=use_labels,
            last_response_id=last_response_id,
            start_date=start_date,
            end_date=end_date,
            save_dir=save_dir,
            verbose=verbose,
            **kwargs
        )


__all__ = [
    "ArchiveHandler",
    "AuthenticationError",
    "BadRequestError",
    "Credential",
    "CredentialStore",
    "DirectoryNotFoundError",
    "ExportCancelledError",
    "ExportFailedError",
    "ExportFormat",
    "ExportJob",
    "ExportService",
    "ExportTimeoutError",
    "ExtractionError",
    "MissingCredentialError",
    "NotFoundError",
    "PayloadTooLargeError",
    "QualtricsApiError",
    "QualtricsClient",
    "QualtricsExportError",
    "RateLimitError",
    "SurveyExporter",
    "SurveyLister",
    "UnexpectedStatusError",
    "UnsupportedFormatError",
    "build_exporter",
    "get_survey",
    "get_surveys",
    "register_api_key",
]
