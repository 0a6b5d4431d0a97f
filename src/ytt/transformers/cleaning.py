import logging
from typing import Callable

from tqdm import tqdm

from ytt.core.exceptions import ChunkProcessingError, ExtractionError
from ytt.transformers.providers import LLMClient
from ytt.transformers.utils.helpers import extract_transcript
from ytt.transformers.utils.prompts import USER_PROMPT
from ytt.transformers.utils.retry import invoke_with_backoff

logger = logging.getLogger(__name__)

ChunkSink = Callable[[str], None]
ProgressCallback = Callable[[int, int], None]


def clean_chunks(
    chunks: list[str],
    client: LLMClient,
    sink: ChunkSink | None = None,
    on_progress: ProgressCallback | None = None,
    strict: bool = False,
) -> str:
    """
    Cleans transcript chunks with the LLM one at a time, in order.

    Each cleaned chunk is passed to `sink` as soon as it is ready and the
    ordered concatenation of all of them is returned. The first failing
    chunk raises ChunkProcessingError and stops the loop.
    """
    chunk_count = len(chunks)
    cleaned_chunks: list[str] = []

    _invoke = invoke_with_backoff
    _extract = extract_transcript

    progress_bar = tqdm(total=chunk_count, unit="chunk")

    try:
        for i, chunk in enumerate(chunks, start=1):
            try:
                response = _invoke(client, USER_PROMPT % chunk)
            except Exception as e:
                logger.error(
                    f"LLM call failed on chunk {i}/{chunk_count}"
                    f" with {client!r}: {e}"
                )
                raise ChunkProcessingError(i, chunk_count, str(e)) from e

            cleaned_chunk = _extract(response)
            if not cleaned_chunk:
                if strict:
                    raise ExtractionError(
                        f"no <transcript> block in the reply for chunk"
                        f" {i}/{chunk_count}"
                    )
                logger.warning(
                    f"No <transcript> block in the reply for chunk"
                    f" {i}/{chunk_count}; it contributes nothing."
                )

            cleaned_chunks.append(cleaned_chunk)
            if sink is not None:
                sink(cleaned_chunk)

            progress_bar.update(1)
            logger.info(f"transcribed part {i}/{chunk_count}")
            if on_progress is not None:
                on_progress(i, chunk_count)
    finally:
        progress_bar.close()

    return "".join(cleaned_chunks)
