import sys

import pandas as pd

from qualtrics_export import build_exporter, get_surveys
from qualtrics_export.config import (
    EXPORT_FORMAT,
    EXPORT_SAVE_DIR,
    QUALTRICS_ROOT_URL,
    SURVEY_ID
)
from qualtrics_export.logger import Logger


def run_export(logger, survey_id: str):
    """
    Exporteert één survey en logt wat er binnenkwam.
    """
    with build_exporter(QUALTRICS_ROOT_URL, logger=logger) as exporter:
        data = exporter.get_survey(
            survey_id,
            EXPORT_FORMAT,
            save_dir=EXPORT_SAVE_DIR,
            verbose=True,
        )

    if isinstance(data, pd.DataFrame):
        logger.info(f"Survey {survey_id}: {data.shape[0]} responses, {data.shape[1]} kolommen")
    else:
        logger.info(f"Survey {survey_id}: export als {EXPORT_FORMAT} ontvangen")
    return data


def run_list(logger):
    surveys = get_surveys(QUALTRICS_ROOT_URL, logger=logger)
    if not isinstance(surveys, pd.DataFrame):
        logger.warning(f"Surveys ophalen gaf geen lijst terug: {surveys}")
        return surveys

    for _, row in surveys.iterrows():
        logger.info(f"{row['id']} | {row['name']}")
    return surveys


def main() -> int:
    logger = Logger.create_logger("qualtrics_export")

    try:
        if SURVEY_ID:
            run_export(logger, SURVEY_ID)
        else:
            run_list(logger)
    except Exception:
        logger.exception("Export afgebroken")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
