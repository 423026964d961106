"""Turn a category identifier into a cleaned, value-sorted clue list.

The pure part (``normalize_clues`` / ``build_category``) never touches the
network so it can be exercised directly; ``ClueNormalizer`` wires it to the
jService client and the filter encoding.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional

from services.filters import clue_query_params
from services.jservice_client import JServiceClient
from services.trivia_types import CategoryRecord, Clue, Filters

logger = logging.getLogger(__name__)


def normalize_clues(clues: Iterable[Clue]) -> List[Clue]:
    """
    Dedup by exact question text (first occurrence wins), default a missing
    value to 0, then sort ascending by value. sorted() is stable so ties keep
    their post-dedup order.
    """
    seen = set()
    unique: List[Clue] = []
    for clue in clues:
        if clue.question in seen:
            continue
        seen.add(clue.question)
        unique.append(clue)

    # some clues have a null value, score those as 0
    unique = [c if c.value else replace(c, value=0) for c in unique]
    return sorted(unique, key=lambda c: c.value)


def build_category(clues: Iterable[Clue]) -> Optional[CategoryRecord]:
    """Normalize and wrap clues; None when nothing survives."""
    normalized = normalize_clues(clues)
    if not normalized:
        return None
    return CategoryRecord(title=normalized[0].category_title, clues=tuple(normalized))


class ClueNormalizer:
    def __init__(self, client: Optional[JServiceClient] = None):
        self.client = client or JServiceClient()

    def fetch_category(
        self, category_id: str, filters: Filters, now: Optional[datetime] = None
    ) -> Optional[CategoryRecord]:
        """Fetch one category under the given filters. Raises RetrievalError on failure."""
        params = clue_query_params(category_id, filters, now=now)
        raw = self.client.fetch_clues(params)
        record = build_category(Clue.from_api(r) for r in raw)
        logger.debug(
            "category_fetched id=%s raw=%d kept=%d",
            category_id,
            len(raw),
            len(record.clues) if record else 0,
        )
        return record
