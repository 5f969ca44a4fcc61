import logging
from typing import Any, List, Union

from .base_agent import BaseAnalysisAgent, as_records, require
from ..models.schemas import DocumentSentiment, SentenceSentiment

logger = logging.getLogger(__name__)


class SentimentAnalyzerAgent(BaseAnalysisAgent):

    @property
    def agent_name(self) -> str:
        return "sentiment_analyzer"

    async def process(self, document_text: str) -> list:
        raw_output = await self.client.analyze_sentiment(document_text)
        return self._parse_output(raw_output)

    def _parse_output(self, raw_output: Any) -> List[Union[DocumentSentiment, SentenceSentiment]]:
        document_sentiment = require(getattr(raw_output, "document_sentiment", None), "document_sentiment")
        result: List[Union[DocumentSentiment, SentenceSentiment]] = [
            DocumentSentiment(
                magnitude=require(getattr(document_sentiment, "magnitude", None), "document_sentiment.magnitude"),
                score=require(getattr(document_sentiment, "score", None), "document_sentiment.score"),
            )
        ]

        for sentence in as_records(getattr(raw_output, "sentences", None), "sentences"):
            text = require(getattr(sentence, "text", None), "sentences.text")
            sentiment = require(getattr(sentence, "sentiment", None), "sentences.sentiment")
            result.append(
                SentenceSentiment(
                    text=require(getattr(text, "content", None), "sentences.text.content"),
                    magnitude=require(getattr(sentiment, "magnitude", None), "sentences.sentiment.magnitude"),
                    score=require(getattr(sentiment, "score", None), "sentences.sentiment.score"),
                )
            )

        logger.debug("Sentiment analysis returned %s sentences", len(result) - 1)
        return result
