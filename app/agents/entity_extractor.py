import logging
from typing import Any, List

from .base_agent import BaseAnalysisAgent, as_records, enum_name, require
from ..models.schemas import Entity

logger = logging.getLogger(__name__)


class EntityExtractorAgent(BaseAnalysisAgent):

    @property
    def agent_name(self) -> str:
        return "entity_extractor"

    async def process(self, document_text: str) -> list:
        raw_output = await self.client.analyze_entities(document_text)
        return self._parse_output(raw_output)

    def _parse_output(self, raw_output: Any) -> List[Entity]:
        # Order is kept as returned; the service sorts by descending salience.
        entities = [
            Entity(
                name=require(getattr(raw, "name", None), "entities.name"),
                type=enum_name(require(getattr(raw, "type_", None), "entities.type")),
                salience=require(getattr(raw, "salience", None), "entities.salience"),
            )
            for raw in as_records(getattr(raw_output, "entities", None), "entities")
        ]
        logger.debug("Entity analysis returned %s entities", len(entities))
        return entities
