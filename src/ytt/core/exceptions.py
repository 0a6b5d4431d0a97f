class YTTError(Exception):
    """Base class for every failure the command line reports to the user."""


class ConfigurationError(YTTError):
    """Missing credentials, unknown model or an unusable output location."""


class FetchError(YTTError):
    """The video reference is invalid or its captions could not be fetched."""


class ProviderError(YTTError):
    """A provider call failed in a way that retrying will not fix."""


class EmptyResponseError(ProviderError):
    pass


class OutputError(YTTError):
    """A transcript file could not be written."""


class ExtractionError(YTTError):
    """A reply had no <transcript> block and strict extraction is on."""


class ChunkProcessingError(YTTError):
    def __init__(self, index: int, total: int, message: str) -> None:
        self.index = index
        self.total = total
        super().__init__(
            f"failed to process chunk {index}/{total}: {message}"
        )
