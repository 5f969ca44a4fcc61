import logging
from typing import Any, List

from .base_agent import BaseAnalysisAgent, as_records, enum_name, require
from ..models.schemas import SyntaxToken

logger = logging.getLogger(__name__)


class SyntaxAnalyzerAgent(BaseAnalysisAgent):

    @property
    def agent_name(self) -> str:
        return "syntax_analyzer"

    async def process(self, document_text: str) -> list:
        raw_output = await self.client.analyze_syntax(document_text)
        return self._parse_output(raw_output)

    def _parse_output(self, raw_output: Any) -> List[SyntaxToken]:
        tokens: List[SyntaxToken] = []
        for token in as_records(getattr(raw_output, "tokens", None), "tokens"):
            text = require(getattr(token, "text", None), "tokens.text")
            part_of_speech = require(getattr(token, "part_of_speech", None), "tokens.part_of_speech")
            # lemma, dependency_edge and the morphology fields are dropped
            tokens.append(
                SyntaxToken(
                    word=require(getattr(text, "content", None), "tokens.text.content"),
                    part_of_speech=enum_name(require(getattr(part_of_speech, "tag", None), "tokens.part_of_speech.tag")),
                )
            )
        logger.debug("Syntax analysis returned %s tokens", len(tokens))
        return tokens
