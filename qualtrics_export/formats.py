from enum import Enum
from typing import Union

from qualtrics_export.errors import UnsupportedFormatError


class ExportFormat(Enum):
    CSV = "csv"
    JSON = "json"
    XML = "xml"
    SPSS = "spss"

    @property
    def supported(self) -> bool:
        return self is not ExportFormat.SPSS

    @classmethod
    def parse(cls, value: Union["ExportFormat", str]) -> "ExportFormat":
        if isinstance(value, cls):
            export_format = value
        else:
            try:
                export_format = cls(str(value).strip().lower())
            except ValueError:
                allowed = ", ".join(f.value for f in cls if f.supported)
                raise UnsupportedFormatError(
                    f"Unknown export format '{value}'. Choose one of: {allowed}."
                ) from None

        if not export_format.supported:
            raise UnsupportedFormatError("SPSS files are currently not supported.")

        return export_format
