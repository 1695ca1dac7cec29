from typing import Any, Union

import pandas as pd

SURVEY_COLUMNS = ["id", "name", "ownerId", "lastModified", "isActive"]


class SurveyLister:
    def __init__(self, client, logger):
        self.client = client
        self.logger = logger

    def list_surveys(self) -> Union[pd.DataFrame, Any]:
        elements = []
        page_url = None

        while True:
            result = self.client.list_surveys(page_url)
            if not result.ok:
                # 500/503: ruwe content teruggeven, de gebruiker beslist over opnieuw proberen
                return result.content

            body = (result.content or {}).get("result") or {}
            elements.extend(body.get("elements") or [])

            page_url = body.get("nextPage")
            if not page_url:
                break
            self.logger.info(f"Volgende pagina surveys ophalen ({len(elements)} tot nu toe)")

        self.logger.info(f"{len(elements)} surveys gevonden")

        df = pd.json_normalize(elements)
        if df.empty:
            return pd.DataFrame(columns=SURVEY_COLUMNS)

        # Bekende kolommen vooraan, de rest erachter
        ordered = [c for c in SURVEY_COLUMNS if c in df.columns]
        return df[ordered + [c for c in df.columns if c not in ordered]]
