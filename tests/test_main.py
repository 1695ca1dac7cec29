import pandas as pd

from qualtrics_export import main as runner


def test_lists_surveys_when_no_survey_configured(monkeypatch):
    calls = []

    def fake_get_surveys(root_url, logger):
        calls.append(root_url)
        return pd.DataFrame([{"id": "SV_1", "name": "Test"}])

    monkeypatch.setattr(runner, "SURVEY_ID", None)
    monkeypatch.setattr(runner, "get_surveys", fake_get_surveys)

    assert runner.main() == 0
    assert calls == [runner.QUALTRICS_ROOT_URL]


def test_exports_configured_survey(monkeypatch):
    exported = []

    class FakeExporter:
        closed = False

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            FakeExporter.closed = True

        def get_survey(self, survey_id, export_format, save_dir, verbose):
            exported.append((survey_id, export_format, verbose))
            return pd.DataFrame({"ResponseID": ["R_1"]})

    monkeypatch.setattr(runner, "SURVEY_ID", "SV_1")
    monkeypatch.setattr(runner, "build_exporter", lambda root_url, logger: FakeExporter())

    assert runner.main() == 0
    assert exported == [("SV_1", runner.EXPORT_FORMAT, True)]
    assert FakeExporter.closed


def test_failure_is_logged_and_exit_code_is_non_zero(monkeypatch):
    def broken(root_url, logger):
        raise RuntimeError("boom")

    monkeypatch.setattr(runner, "SURVEY_ID", None)
    monkeypatch.setattr(runner, "get_surveys", broken)

    assert runner.main() == 1
