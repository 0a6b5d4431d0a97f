import re
from urllib.parse import parse_qs, urlparse

from ytt.core.exceptions import FetchError

# --- GLOBAL REGEX COMPILERS ---
_compile = re.compile
_match_video_id = _compile(r"^[A-Za-z0-9_-]{11}$").match
_PATH_PREFIXES = ("/shorts/", "/embed/", "/live/", "/v/")
_YOUTUBE_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
}


def parse_video_id(video: str) -> str:
    """Returns the 11 character video ID from a bare ID or a YouTube URL."""
    video = video.strip()
    if _match_video_id(video):
        return video

    url = urlparse(video if "://" in video else f"https://{video}")
    host = (url.hostname or "").lower()
    candidate = ""

    if host in {"youtu.be", "www.youtu.be"}:
        candidate = url.path.lstrip("/").split("/")[0]
    elif host in _YOUTUBE_HOSTS:
        if url.path == "/watch":
            candidate = parse_qs(url.query).get("v", [""])[0]
        else:
            for prefix in _PATH_PREFIXES:
                if url.path.startswith(prefix):
                    candidate = url.path[len(prefix) :].split("/")[0]
                    break

    if not _match_video_id(candidate):
        raise FetchError(f"not a YouTube video URL or ID: {video}")
    return candidate
