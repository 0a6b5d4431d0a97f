import logging
from typing import Iterable

from requests.exceptions import RequestException
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    FetchedTranscript,
    FetchedTranscriptSnippet,
    NoTranscriptFound,
    YouTubeTranscriptApi,
)

from ytt.core.config import DEFAULT_LANGUAGE
from ytt.core.exceptions import FetchError
from ytt.core.types import CaptionSnippet, VideoTranscript
from ytt.extractors.utils.youtube import parse_video_id

logger = logging.getLogger(__name__)


def _normalize_transcript(
    snippets: Iterable[FetchedTranscriptSnippet],
) -> list[CaptionSnippet]:
    return [
        {
            "text": snippet.text,
            "start": snippet.start,
            "duration": snippet.duration,
        }
        for snippet in snippets
    ]


def _to_video_transcript(fetched: FetchedTranscript) -> VideoTranscript:
    return {
        "video_id": fetched.video_id,
        "language": fetched.language,
        "language_code": fetched.language_code,
        "is_generated": fetched.is_generated,
        "snippets": _normalize_transcript(fetched),
    }


def _fetch_translated(
    yt_transcript_api: YouTubeTranscriptApi, video_id: str, language: str
) -> VideoTranscript:
    """Translates the first translatable caption track into `language`."""
    for transcript in yt_transcript_api.list(video_id):
        if transcript.is_translatable:
            logger.info(
                f"Translating '{transcript.language_code}' captions for"
                f" {video_id} to '{language}'."
            )
            return _to_video_transcript(transcript.translate(language).fetch())

    raise FetchError(
        f"no '{language}' captions or translatable captions for {video_id}"
    )


def get_transcript(
    video: str, language: str = DEFAULT_LANGUAGE
) -> VideoTranscript:
    """
    Fetches the captions of a video from a YouTube URL or video ID.
    Falls back to translating another caption track when none exists in
    the requested language.
    """
    video_id = parse_video_id(video)
    yt_transcript_api = YouTubeTranscriptApi()

    try:
        try:
            fetched = yt_transcript_api.fetch(
                video_id=video_id, languages=[language]
            )
        except NoTranscriptFound:
            logger.warning(
                f"No '{language}' captions for {video_id}, attempting"
                " translation."
            )
            return _fetch_translated(yt_transcript_api, video_id, language)
        return _to_video_transcript(fetched)
    except (CouldNotRetrieveTranscript, RequestException) as e:
        raise FetchError(f"failed to get transcript: {e}") from e


def transcript_text(transcript: VideoTranscript) -> str:
    """Joins caption fragments, each followed by a line break."""
    return "".join(
        snippet["text"] + "\n" for snippet in transcript["snippets"]
    )
