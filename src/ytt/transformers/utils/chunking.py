def chunk_transcript(transcript: str, max_words_per_chunk: int) -> list[str]:
    """
    Splits a transcript into consecutive chunks of at most
    `max_words_per_chunk` whitespace-delimited words.

    Every word is followed by a single space, so chunks concatenate back
    into the original word sequence. Only the last chunk may be short.
    An empty or whitespace-only transcript yields no chunks.
    """
    if max_words_per_chunk < 1:
        raise ValueError(
            "max_words_per_chunk must be at least 1,"
            f" got {max_words_per_chunk}"
        )

    words = transcript.split()
    return [
        "".join(
            f"{word} " for word in words[i : i + max_words_per_chunk]
        )
        for i in range(0, len(words), max_words_per_chunk)
    ]
