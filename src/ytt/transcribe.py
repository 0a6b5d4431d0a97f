import logging
import sys
from pathlib import Path
from typing import TextIO, TypedDict

from pydantic import BaseModel

from ytt.core.config import DEFAULT_LANGUAGE
from ytt.core.output import (
    check_output_dir,
    check_output_file,
    cleaned_transcript_path,
    filename_suffix,
    raw_transcript_path,
    save_text,
)
from ytt.core.types import ModelSpec, Settings
from ytt.extractors.captions import get_transcript, transcript_text
from ytt.transformers.cleaning import ProgressCallback, clean_chunks
from ytt.transformers.providers import get_llm_client
from ytt.transformers.utils.chunking import chunk_transcript

logger = logging.getLogger(__name__)

STDOUT = "-"


class TranscribeOptions(BaseModel):
    video: str
    model: ModelSpec
    folder: Path = Path(".")
    suffix: str = ""
    raw_only: bool = False
    output: str | None = None
    language: str = DEFAULT_LANGUAGE
    strict: bool = False


class TranscribeResult(TypedDict):
    raw_path: Path
    cleaned_path: Path | None
    chunk_count: int


def _status(message: str) -> None:
    print(message, file=sys.stderr)


def run(
    options: TranscribeOptions,
    settings: Settings,
    on_progress: ProgressCallback | None = None,
    stdout: TextIO | None = None,
) -> TranscribeResult:
    """
    Fetches a video's captions, saves them raw, then cleans them chunk by
    chunk with the selected model and saves (or streams) the result.

    Nothing is written for the cleaned transcript unless every chunk
    succeeds. The raw transcript stays on disk either way.
    """
    # Fail on configuration before touching the network
    folder = check_output_dir(options.folder)
    if options.output != STDOUT:
        check_output_file(options.output)
    client = None
    if not options.raw_only:
        client = get_llm_client(options.model, settings)

    suffix = filename_suffix(options.suffix)

    # Fetch
    transcript = get_transcript(options.video, options.language)
    raw_text = transcript_text(transcript)
    raw_path = save_text(raw_transcript_path(folder, suffix), raw_text)
    _status(f"wrote raw autogenerated captions to {raw_path}")

    if client is None:
        return {"raw_path": raw_path, "cleaned_path": None, "chunk_count": 0}

    # Chunk and clean
    chunks = chunk_transcript(raw_text, options.model.max_words_per_chunk)
    logger.info(
        f"Cleaning {transcript['video_id']} in {len(chunks)} chunk(s)"
        f" with {client!r}."
    )

    if options.output == STDOUT:
        out = stdout or sys.stdout

        def _write(text: str) -> None:
            out.write(text)
            out.flush()

        clean_chunks(
            chunks,
            client,
            sink=_write,
            on_progress=on_progress,
            strict=options.strict,
        )
        out.write("\n")
        return {
            "raw_path": raw_path,
            "cleaned_path": None,
            "chunk_count": len(chunks),
        }

    cleaned_text = clean_chunks(
        chunks, client, on_progress=on_progress, strict=options.strict
    )

    # Finalize
    if options.output:
        cleaned_path = Path(options.output)
    else:
        cleaned_path = cleaned_transcript_path(folder, suffix)
    save_text(cleaned_path, cleaned_text)
    _status(f"wrote cleaned up transcript to {cleaned_path}")

    return {
        "raw_path": raw_path,
        "cleaned_path": cleaned_path,
        "chunk_count": len(chunks),
    }
