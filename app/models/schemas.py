from pydantic import BaseModel, ConfigDict, Field
from typing import List, NamedTuple, Optional, Union


class DocumentSentiment(BaseModel):
    magnitude: float = Field(..., ge=0, description="Amount of emotional content in the whole document")
    score: float = Field(..., ge=-1, le=1, description="Overall polarity (-1 negative, +1 positive)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "magnitude": 0.9,
                "score": 0.9
            }
        },
    )


class SentenceSentiment(BaseModel):
    text: str = Field(..., description="Text of the sentence")
    magnitude: float = Field(..., ge=0, description="Amount of emotional content in the sentence")
    score: float = Field(..., ge=-1, le=1, description="Sentence polarity (-1 negative, +1 positive)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "text": "I love this.",
                "magnitude": 0.9,
                "score": 0.9
            }
        },
    )


class Entity(BaseModel):
    name: str = Field(..., description="Representative name of the entity")
    type: str = Field(..., description="Entity type (PERSON, LOCATION, ORGANIZATION, EVENT, OTHER, ...)")
    salience: float = Field(..., ge=0, le=1, description="Relevance of the entity to the whole text (0-1)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "Toronto",
                "type": "LOCATION",
                "salience": 0.62
            }
        },
    )


class SyntaxToken(BaseModel):
    word: str = Field(..., description="Token text")
    part_of_speech: str = Field(..., alias="partOfSpeech", description="Part-of-speech tag (NOUN, VERB, ADJ, ...)")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "word": "love",
                "partOfSpeech": "VERB"
            }
        },
    )


class Category(BaseModel):
    name: str = Field(..., description="Category path, e.g. /Arts & Entertainment")
    confidence: float = Field(..., ge=0, le=1, description="Classifier confidence (0-1)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "/Science/Computer Science",
                "confidence": 0.74
            }
        },
    )


SentimentResult = List[Union[DocumentSentiment, SentenceSentiment]]
EntityResult = List[Entity]
SyntaxResult = List[SyntaxToken]
ClassificationResult = List[Category]


class AnalysisOutcome(NamedTuple):
    """Result of one facade call; a slot is None when its analysis was not requested."""

    sentiment: Optional[SentimentResult]
    entities: Optional[EntityResult]
    syntax: Optional[SyntaxResult]
    classification: Optional[ClassificationResult]


class AnalysisRequest(BaseModel):
    text: str = Field(..., description="Text to analyze, sent to the language service unmodified")
    analyze_sentiment: bool = Field(True, alias="wantSentiment", description="Run sentiment analysis")
    analyze_entities: bool = Field(True, alias="wantEntities", description="Run entity analysis")
    analyze_syntax: bool = Field(True, alias="wantSyntax", description="Run syntax analysis")
    classify_content: bool = Field(True, alias="wantClassification", description="Run content classification")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "text": "I love this.",
                "analyze_sentiment": True,
                "analyze_entities": False,
                "analyze_syntax": False,
                "classify_content": False
            }
        },
    )


class AnalysisResponse(BaseModel):
    sentiment: Optional[List[Union[SentenceSentiment, DocumentSentiment]]] = Field(
        None, description="Document sentiment followed by per-sentence sentiment"
    )
    entities: Optional[List[Entity]] = Field(None, description="Entities found in the text")
    syntax: Optional[List[SyntaxToken]] = Field(None, description="Tokens with their part of speech")
    classification: Optional[List[Category]] = Field(None, description="Content categories")
    degraded: bool = Field(False, description="True when the placeholder outcome was returned")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "sentiment": [
                    {"magnitude": 0.9, "score": 0.9},
                    {"text": "I love this.", "magnitude": 0.9, "score": 0.9}
                ],
                "entities": None,
                "syntax": None,
                "classification": None,
                "degraded": False
            }
        },
    )

    @classmethod
    def from_outcome(cls, outcome: AnalysisOutcome, degraded: bool = False) -> "AnalysisResponse":
        return cls(
            sentiment=outcome.sentiment,
            entities=outcome.entities,
            syntax=outcome.syntax,
            classification=outcome.classification,
            degraded=degraded,
        )
