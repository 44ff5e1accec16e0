from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from collector.models import DEFAULT_AUTHOR


@dataclass
class ParsedItem:
    """One news item found on a page, text already normalized"""
    url: str
    title: str
    summary: str
    author: str = DEFAULT_AUTHOR
    press: Optional[str] = None
    thumbnail_url: Optional[str] = None


class BaseStrategy(ABC):
    # Tag written to raw_meta.scrape_method
    name: str = ""
    # Fallback strategies only run when the run is under-yielding
    fallback: bool = False
    # Extra inline bound on title length for noisy patterns
    max_text_length: Optional[int] = None

    @abstractmethod
    def parse(self, html: str) -> Iterator[ParsedItem]:
        """
        Yields the items this strategy recognizes on one page, in page order.
        Blocks missing their headline are skipped silently.
        """
        pass

    def accepts_length(self, item: ParsedItem) -> bool:
        if self.max_text_length is None:
            return True
        return 5 < len(item.title) < self.max_text_length

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"
