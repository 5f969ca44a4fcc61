import logging
from typing import Any, List

from .base_agent import BaseAnalysisAgent, as_records, require
from ..models.schemas import Category

logger = logging.getLogger(__name__)


class ContentClassifierAgent(BaseAnalysisAgent):
    """Content classification.

    Short or topically ambiguous documents usually come back with no
    categories; an empty list is a normal result, not a failure.
    """

    @property
    def agent_name(self) -> str:
        return "content_classifier"

    async def process(self, document_text: str) -> list:
        raw_output = await self.client.classify_text(document_text)
        return self._parse_output(raw_output)

    def _parse_output(self, raw_output: Any) -> List[Category]:
        categories = [
            Category(
                name=require(getattr(raw, "name", None), "categories.name"),
                confidence=require(getattr(raw, "confidence", None), "categories.confidence"),
            )
            for raw in as_records(getattr(raw_output, "categories", None), "categories")
        ]
        if not categories:
            logger.info("Content classification found no categories")
        return categories
