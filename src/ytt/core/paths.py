from os import getenv
from pathlib import Path

LOGS_DIR = Path(getenv("YTT_LOGS_DIR", default=Path.home() / ".ytt" / "logs"))
LOG_FILE = LOGS_DIR / "ytt.log"
