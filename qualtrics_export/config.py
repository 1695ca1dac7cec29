import atexit
import os
import shutil
import tempfile

# =========================
# Config uit environment
# =========================
QUALTRICS_API_TOKEN = os.getenv("QUALTRICS_API_TOKEN")
QUALTRICS_DATACENTER = os.getenv("QUALTRICS_DATA_CENTER")
QUALTRICS_ROOT_URL = os.getenv("QUALTRICS_ROOT_URL") or (
    f"https://{QUALTRICS_DATACENTER}.qualtrics.com"
    if QUALTRICS_DATACENTER
    else "https://yourdatacenterid.qualtrics.com"
)
SURVEY_ID = os.getenv("QUALTRICS_SURVEY_ID")

# Leeg = alleen naar stdout loggen
LOG_DIR = os.getenv("LOG_DIR")

# Request timeouts om mogelijke freezes tegen te gaan
TIMEOUT_EXPORT_START = int(os.getenv("TIMEOUT_EXPORT_START", "30"))
TIMEOUT_STATUS_CHECK = int(os.getenv("TIMEOUT_STATUS_CHECK", "30"))
TIMEOUT_FILE_DOWNLOAD = int(os.getenv("TIMEOUT_FILE_DOWNLOAD", "60"))

EXPORT_POLL_INTERVAL_SECONDS = float(os.getenv("EXPORT_POLL_INTERVAL_SECONDS", "2"))
EXPORT_TIMEOUT_SECONDS = float(os.getenv("EXPORT_TIMEOUT_SECONDS", "600"))

_default_save_dir = None


def default_save_dir() -> str:
    # Eigen tijdelijke map per proces, opgeruimd bij afsluiten
    global _default_save_dir
    if _default_save_dir is None:
        _default_save_dir = tempfile.mkdtemp(prefix="qualtrics_export_")
        atexit.register(shutil.rmtree, _default_save_dir, ignore_errors=True)
    return _default_save_dir


# Runner (main.py)
EXPORT_FORMAT = os.getenv("EXPORT_FORMAT", "csv")
EXPORT_SAVE_DIR = os.getenv("EXPORT_SAVE_DIR")
