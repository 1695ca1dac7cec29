import os
import subprocess
import sys
from pathlib import Path

from qualtrics_export import config

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def test_default_save_dir_is_created_once_per_process():
    path = config.default_save_dir()

    assert os.path.isdir(path)
    assert os.path.basename(path).startswith("qualtrics_export_")
    assert config.default_save_dir() == path


def test_other_processes_get_their_own_default_save_dir():
    result = subprocess.run(
        [sys.executable, "-c", "from qualtrics_export.config import default_save_dir; print(default_save_dir())"],
        capture_output=True,
        text=True,
        check=True,
        cwd=str(PROJECT_ROOT),
    )

    other = result.stdout.strip()
    assert other
    assert other != config.default_save_dir()
