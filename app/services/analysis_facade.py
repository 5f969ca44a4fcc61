import asyncio
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from ..agents.base_agent import BaseAnalysisAgent
from ..agents.content_classifier import ContentClassifierAgent
from ..agents.entity_extractor import EntityExtractorAgent
from ..agents.sentiment_analyzer import SentimentAnalyzerAgent
from ..agents.syntax_analyzer import SyntaxAnalyzerAgent
from ..exceptions import AnalysisError
from ..models.schemas import (
    AnalysisOutcome,
    Category,
    DocumentSentiment,
    Entity,
    SentenceSentiment,
    SyntaxToken,
)
from .language_client import LanguageClient

logger = logging.getLogger(__name__)

DUMMY_SENTIMENT = (
    DocumentSentiment(magnitude=0, score=0),
    SentenceSentiment(text="dummy_text", magnitude=0, score=0),
)
DUMMY_ENTITIES = (Entity(name="dummy_name", type="OTHER", salience=0),)
DUMMY_SYNTAX = (SyntaxToken(word="dummy_word", part_of_speech="NOUN"),)
DUMMY_CLASSIFICATION = (Category(name="dummy_category", confidence=0),)


def build_fallback_outcome(
    analyze_sentiment: bool,
    analyze_entities: bool,
    analyze_syntax: bool,
    classify_content: bool,
) -> AnalysisOutcome:
    """Placeholder outcome used when any requested analysis fails."""
    return AnalysisOutcome(
        sentiment=list(DUMMY_SENTIMENT) if analyze_sentiment else None,
        entities=list(DUMMY_ENTITIES) if analyze_entities else None,
        syntax=list(DUMMY_SYNTAX) if analyze_syntax else None,
        classification=list(DUMMY_CLASSIFICATION) if classify_content else None,
    )


class AnalysisFacade:
    """Runs the requested analyses against the language service and merges them.

    ``analyze`` never raises: when any requested analysis fails the whole
    outcome is replaced by the placeholder outcome for the requested kinds.
    Callers cannot tell placeholder data from a real answer through
    ``analyze``; ``analyze_with_status`` also reports whether it degraded.
    """

    def __init__(
        self,
        sentiment_analyzer: SentimentAnalyzerAgent,
        entity_extractor: EntityExtractorAgent,
        syntax_analyzer: SyntaxAnalyzerAgent,
        content_classifier: ContentClassifierAgent,
    ) -> None:
        self.sentiment_analyzer = sentiment_analyzer
        self.entity_extractor = entity_extractor
        self.syntax_analyzer = syntax_analyzer
        self.content_classifier = content_classifier

    @classmethod
    def from_client(cls, client: LanguageClient) -> "AnalysisFacade":
        return cls(
            SentimentAnalyzerAgent(client),
            EntityExtractorAgent(client),
            SyntaxAnalyzerAgent(client),
            ContentClassifierAgent(client),
        )

    async def analyze(
        self,
        text: str,
        analyze_sentiment: bool = True,
        analyze_entities: bool = True,
        analyze_syntax: bool = True,
        classify_content: bool = True,
    ) -> AnalysisOutcome:
        outcome, _ = await self.analyze_with_status(
            text, analyze_sentiment, analyze_entities, analyze_syntax, classify_content
        )
        return outcome

    async def analyze_with_status(
        self,
        text: str,
        analyze_sentiment: bool = True,
        analyze_entities: bool = True,
        analyze_syntax: bool = True,
        classify_content: bool = True,
    ) -> Tuple[AnalysisOutcome, bool]:
        start_time = time.perf_counter()

        requested: Dict[str, Optional[BaseAnalysisAgent]] = {
            "sentiment": self.sentiment_analyzer if analyze_sentiment else None,
            "entities": self.entity_extractor if analyze_entities else None,
            "syntax": self.syntax_analyzer if analyze_syntax else None,
            "classification": self.content_classifier if classify_content else None,
        }
        active = {slot: agent for slot, agent in requested.items() if agent is not None}

        tasks = [asyncio.ensure_future(self._run_agent(agent, text)) for agent in active.values()]
        try:
            results: List[List[Any]] = await asyncio.gather(*tasks)
        except Exception as exc:
            logger.warning(
                "Analysis failed (%s: %s); returning placeholder outcome",
                type(exc).__name__,
                exc,
            )
            # No remote call may outlive the fallback.
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            fallback = build_fallback_outcome(
                analyze_sentiment, analyze_entities, analyze_syntax, classify_content
            )
            return fallback, True

        by_slot = dict(zip(active.keys(), results))
        outcome = AnalysisOutcome(
            sentiment=by_slot.get("sentiment"),
            entities=by_slot.get("entities"),
            syntax=by_slot.get("syntax"),
            classification=by_slot.get("classification"),
        )
        logger.info(
            "Completed %s analyses in %s seconds",
            len(active),
            round(time.perf_counter() - start_time, 4),
        )
        return outcome, False

    async def _run_agent(self, agent: BaseAnalysisAgent, document_text: str) -> List[Any]:
        start = time.perf_counter()
        result = await agent.execute(document_text)
        duration = round(time.perf_counter() - start, 4)
        logger.info("Agent %s finished in %s seconds", agent.agent_name, duration)

        if result.get("status") == "error":
            raise AnalysisError(result.get("message", "Agent returned error."))
        return result.get("data", [])
