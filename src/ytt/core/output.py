from datetime import datetime
from pathlib import Path

from ytt.core.config import CLEANED_FILENAME, RAW_FILENAME, TIMESTAMP_FORMAT
from ytt.core.exceptions import ConfigurationError, OutputError


def filename_suffix(suffix: str = "", now: datetime | None = None) -> str:
    """Timestamp used in artifact names, with the user's suffix appended."""
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    if not suffix:
        return timestamp
    return f"{timestamp}_{suffix}"


def check_output_dir(folder: Path) -> Path:
    if not folder.is_dir():
        raise ConfigurationError(f"path not found: {folder}")
    return folder


def check_output_file(output: str | None) -> None:
    """Rejects a cleaned transcript path that names an existing directory."""
    if output and Path(output).is_dir():
        raise ConfigurationError(f"output path is a directory: {output}")


def raw_transcript_path(folder: Path, suffix: str) -> Path:
    return folder / RAW_FILENAME.format(suffix=suffix)


def cleaned_transcript_path(folder: Path, suffix: str) -> Path:
    return folder / CLEANED_FILENAME.format(suffix=suffix)


def save_text(path: Path, text: str) -> Path:
    """Writes UTF-8 text, creating parent directories if needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise OutputError(f"failed to write {path}: {e}") from e
    return path
