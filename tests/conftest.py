import asyncio
from typing import Any, Dict, List, Optional, Set

import pytest
from google.api_core import exceptions as api_exceptions
from google.cloud import language_v1

from app.exceptions import RemoteUnavailableError


def sentiment_response(magnitude: float, score: float, sentences=()) -> language_v1.AnalyzeSentimentResponse:
    return language_v1.AnalyzeSentimentResponse(
        document_sentiment=language_v1.Sentiment(magnitude=magnitude, score=score),
        sentences=[
            language_v1.Sentence(
                text=language_v1.TextSpan(content=text),
                sentiment=language_v1.Sentiment(magnitude=m, score=s),
            )
            for text, m, s in sentences
        ],
    )


def entities_response(*entities) -> language_v1.AnalyzeEntitiesResponse:
    return language_v1.AnalyzeEntitiesResponse(
        entities=[
            language_v1.Entity(name=name, type_=getattr(language_v1.Entity.Type, type_), salience=salience)
            for name, type_, salience in entities
        ]
    )


def syntax_response(*tokens) -> language_v1.AnalyzeSyntaxResponse:
    return language_v1.AnalyzeSyntaxResponse(
        tokens=[
            language_v1.Token(
                text=language_v1.TextSpan(content=word),
                part_of_speech=language_v1.PartOfSpeech(tag=getattr(language_v1.PartOfSpeech.Tag, tag)),
                lemma=word.lower(),
            )
            for word, tag in tokens
        ]
    )


def classify_response(*categories) -> language_v1.ClassifyTextResponse:
    return language_v1.ClassifyTextResponse(
        categories=[
            language_v1.ClassificationCategory(name=name, confidence=confidence)
            for name, confidence in categories
        ]
    )


class FakeLanguageClient:
    """Stands in for LanguageClient with canned responses per analysis kind."""

    def __init__(
        self,
        responses: Optional[Dict[str, Any]] = None,
        fail_on: Optional[Set[str]] = None,
        delay: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.responses = responses or {}
        self.fail_on = fail_on or set()
        self.delay = delay
        self.delays = delays or {}
        self.calls: List[tuple] = []
        self.completed: List[str] = []

    async def _respond(self, kind: str, text: str) -> Any:
        self.calls.append((kind, text))
        delay = self.delays.get(kind, self.delay)
        if delay:
            await asyncio.sleep(delay)
        if kind in self.fail_on:
            raise RemoteUnavailableError(f"{kind} failed: 503 Service Unavailable")
        self.completed.append(kind)
        return self.responses[kind]

    async def analyze_sentiment(self, text: str) -> Any:
        return await self._respond("sentiment", text)

    async def analyze_entities(self, text: str) -> Any:
        return await self._respond("entities", text)

    async def analyze_syntax(self, text: str) -> Any:
        return await self._respond("syntax", text)

    async def classify_text(self, text: str) -> Any:
        return await self._respond("classify", text)


def default_responses() -> Dict[str, Any]:
    return {
        "sentiment": sentiment_response(
            1.5,
            0.25,
            sentences=[("Toronto is lovely.", 0.75, 0.75), ("The traffic is not.", 0.75, -0.5)],
        ),
        "entities": entities_response(("Toronto", "LOCATION", 0.75), ("traffic", "OTHER", 0.25)),
        "syntax": syntax_response(("Toronto", "NOUN"), ("is", "VERB"), ("lovely", "ADJ"), (".", "PUNCT")),
        "classify": classify_response(("/Travel & Transportation", 0.5)),
    }


@pytest.fixture()
def fake_client() -> FakeLanguageClient:
    return FakeLanguageClient(default_responses())


@pytest.fixture()
def service_unavailable() -> api_exceptions.GoogleAPIError:
    return api_exceptions.ServiceUnavailable("backend unavailable")
