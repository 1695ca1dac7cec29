import os
import threading
from typing import Any, Callable, Optional, Union

from qualtrics_export.errors import DirectoryNotFoundError
from qualtrics_export.export_service import DateLike, ExportJob
from qualtrics_export.formats import ExportFormat


class SurveyExporter:
    def __init__(self, export_service, archive_handler, logger):
        self.export_service = export_service
        self.archive_handler = archive_handler
        self.logger = logger

    def close(self):
        self.export_service.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def resolve_save_dir(self, save_dir: Optional[str]) -> str:
        if save_dir is None:
            save_dir = self.archive_handler.default_save_dir
            os.makedirs(save_dir, exist_ok=True)
        elif not os.path.isdir(save_dir):
            raise DirectoryNotFoundError(f"The directory {save_dir} does not exist.")
        return save_dir

    def get_survey(self, survey_id: str,
                   export_format: Union[ExportFormat, str] = ExportFormat.CSV,
                   use_labels: bool = True,
                   last_response_id: Optional[str] = None,
                   start_date: Optional[DateLike] = None,
                   end_date: Optional[DateLike] = None,
                   save_dir: Optional[str] = None,
                   verbose: bool = False,
                   progress_callback: Optional[Callable[[float], None]] = None,
                   cancel_event: Optional[threading.Event] = None,
                   timeout: Optional[float] = None) -> Any:
        # Eerst alles controleren wat zonder netwerk kan
        export_format = ExportFormat.parse(export_format)
        save_dir = self.resolve_save_dir(save_dir)

        self.logger.info(f"Export van survey {survey_id} als {export_format.value}")

        job = self.export_service.start_export(
            survey_id,
            export_format,
            use_labels=use_labels,
            last_response_id=last_response_id,
            start_date=start_date,
            end_date=end_date,
        )
        if not isinstance(job, ExportJob):
            # Tijdelijke serverfout: content teruggeven, niet zelf opnieuw proberen
            return job

        self.export_service.wait_for_completion(
            job,
            progress_callback=progress_callback,
            cancel_event=cancel_event,
            timeout=timeout,
            verbose=verbose,
        )
        self.logger.info(f"Export gereed: {job.id}")

        zip_bytes = self.archive_handler.download(job.id)
        zip_path = self.archive_handler.save(zip_bytes, save_dir, job.id)

        member_path = None
        try:
            member_path = self.archive_handler.extract(zip_path, save_dir, export_format, job_id=job.id)
            return self.archive_handler.parse(member_path, export_format)
        finally:
            self.archive_handler.cleanup(zip_path, member_path, save_dir)
