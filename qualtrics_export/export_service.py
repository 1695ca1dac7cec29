import threading
import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, Union

from qualtrics_export.config import EXPORT_POLL_INTERVAL_SECONDS, EXPORT_TIMEOUT_SECONDS
from qualtrics_export.errors import (
    ExportCancelledError,
    ExportFailedError,
    ExportTimeoutError,
)
from qualtrics_export.formats import ExportFormat

DateLike = Union[date, datetime, str]

FAILED_STATUSES = {"failed", "cancelled"}


@dataclass
class ExportJob:
    id: str
    survey_id: str
    format: ExportFormat
    use_labels: bool = True
    last_response_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    percent_complete: float = 0

    @property
    def complete(self) -> bool:
        return self.percent_complete >= 100


def to_utc_midnight(value: Optional[DateLike]) -> Optional[str]:
    """'2017-01-31', date of datetime -> '2017-01-31T00:00:00Z'."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    elif not isinstance(value, date):
        try:
            value = datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
        except ValueError:
            raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from None
    return f"{value.isoformat()}T00:00:00Z"


def build_export_payload(survey_id: str, export_format: ExportFormat, use_labels: bool = True,
                         last_response_id: Optional[str] = None,
                         start_date: Optional[str] = None,
                         end_date: Optional[str] = None) -> dict:
    payload = {"format": export_format.value, "surveyId": survey_id}

    # Alleen meesturen wat gezet is; zonder filters = volledige export
    if last_response_id is not None:
        payload["lastResponseId"] = last_response_id
    if start_date is not None:
        payload["startDate"] = start_date
    if end_date is not None:
        payload["endDate"] = end_date

    payload["useLabels"] = bool(use_labels)
    return payload


class ExportService:
    def __init__(self, client, logger):
        self.client = client
        self.logger = logger

    def start_export(self, survey_id: str, export_format: Union[ExportFormat, str] = ExportFormat.CSV,
                     use_labels: bool = True, last_response_id: Optional[str] = None,
                     start_date: Optional[DateLike] = None,
                     end_date: Optional[DateLike] = None) -> Union[ExportJob, Any]:
        export_format = ExportFormat.parse(export_format)
        start = to_utc_midnight(start_date)
        end = to_utc_midnight(end_date)
        if start and end and start > end:
            raise ValueError(f"start_date ({start}) is after end_date ({end})")

        payload = build_export_payload(
            survey_id, export_format, use_labels, last_response_id, start, end
        )
        result = self.client.start_export(payload)
        if not result.ok:
            return result.content

        job_id = result.content["result"]["id"]
        self.logger.info(f"Export gestart: {job_id}")

        return ExportJob(
            id=job_id,
            survey_id=survey_id,
            format=export_format,
            use_labels=bool(use_labels),
            last_response_id=last_response_id,
            start_date=start,
            end_date=end,
        )

    def wait_for_completion(self, job: ExportJob,
                            progress_callback: Optional[Callable[[float], None]] = None,
                            cancel_event: Optional[threading.Event] = None,
                            poll_interval: Optional[float] = None,
                            timeout: Optional[float] = None,
                            verbose: bool = False) -> ExportJob:
        poll_interval = EXPORT_POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        timeout = EXPORT_TIMEOUT_SECONDS if timeout is None else timeout

        start_time = time.time()

        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise ExportCancelledError(f"Export {job.id} was cancelled")

            result = self.client.check_status(job.id)

            if result.ok:
                status = (result.content or {}).get("result") or {}
                job.percent_complete = status.get("percentComplete") or 0

                if progress_callback is not None:
                    progress_callback(job.percent_complete)
                if verbose:
                    self.logger.info(f"Export voortgang: {job.percent_complete}%")

                if job.complete:
                    return job

                if str(status.get("status", "")).lower() in FAILED_STATUSES:
                    raise ExportFailedError(
                        f"Export {job.id} failed on the server: {status.get('status')}"
                    )
            else:
                self.logger.warning(f"Status check {job.id} gaf {result.status_code}, opnieuw proberen")

            if time.time() - start_time >= timeout:
                raise ExportTimeoutError(
                    f"Export {job.id} did not complete in time ({timeout:g} seconds)"
                )

            time.sleep(poll_interval)
