# services/category_resolver.py - free-text query -> ordered, capped list of categories
import logging
import re
from datetime import datetime
from typing import Callable, List, Optional

from services.clue_normalizer import ClueNormalizer
from services.exceptions import RetrievalError, ValidationError
from services.jservice_client import JServiceClient
from services.trivia_types import CategoryRecord, Filters

logger = logging.getLogger(__name__)

MAX_CATEGORIES = 12

# jService links each matching category as /popular/<id>
_CATEGORY_LINK = re.compile(r"popular/(\d+)")


def extract_category_ids(text: str) -> List[str]:
    """Find candidate category ids in a search page, in page order."""
    return _CATEGORY_LINK.findall(text or "")


class CategoryResolver:
    def __init__(
        self,
        client: Optional[JServiceClient] = None,
        normalizer: Optional[ClueNormalizer] = None,
        extractor: Callable[[str], List[str]] = extract_category_ids,
        max_categories: int = MAX_CATEGORIES,
    ):
        self.client = client or JServiceClient()
        self.normalizer = normalizer or ClueNormalizer(self.client)
        self.extractor = extractor
        self.max_categories = max_categories

    def candidate_ids(self, query: str) -> List[str]:
        """Scrape the search page; duplicate ids are dropped keeping the first."""
        html = self.client.search_page(query)
        ids: List[str] = []
        for cid in self.extractor(html):
            if cid not in ids:
                ids.append(cid)
        return ids

    def resolve(
        self, query: str, filters: Filters, now: Optional[datetime] = None
    ) -> List[CategoryRecord]:
        """
        Look up categories matching `query` and fetch their clues one at a time.

        Empty categories are dropped and do not count toward the cap. A failed
        clue fetch only skips that category; if every fetch failed the search
        fails as a whole so the caller can tell it apart from "no results".
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Please enter a category to search.")

        ids = self.candidate_ids(query)
        categories: List[CategoryRecord] = []
        failures = 0
        attempted = 0
        for cid in ids:
            attempted += 1
            try:
                record = self.normalizer.fetch_category(cid, filters, now=now)
            except RetrievalError as e:
                failures += 1
                logger.warning("category_fetch_failed id=%s error=%s", cid, e)
                continue
            if record is None:
                continue
            categories.append(record)
            if len(categories) >= self.max_categories:
                break

        if attempted and failures == attempted:
            raise RetrievalError(f"Could not load clues for any of {attempted} categories")

        logger.info(
            "resolve_done query=%s candidates=%d categories=%d failures=%d",
            query,
            len(ids),
            len(categories),
            failures,
        )
        return categories
