from typing import Optional


class CollectorError(Exception):
    """Base class for all collector errors"""


class ConfigError(CollectorError):
    """Raised when the collector cannot be set up from its configuration"""


class FetchFailure(CollectorError):
    """
    A single search page could not be fetched.
    Carries the page identifier so the run summary can report it.
    """

    def __init__(self, source_id: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.source_id = source_id
        self.cause = cause
        self.message = message or (f"{type(cause).__name__}: {cause}" if cause else "fetch failed")
        super().__init__(f"{source_id}: {self.message}")


class FingerprintError(CollectorError):
    pass


class DuplicateArticleError(CollectorError):
    def __init__(self, article_hash: str):
        self.hash = article_hash
        super().__init__(f"Article already stored: {article_hash}")
