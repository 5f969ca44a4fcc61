from .schemas import (
    AnalysisOutcome,
    AnalysisRequest,
    AnalysisResponse,
    Category,
    DocumentSentiment,
    Entity,
    SentenceSentiment,
    SyntaxToken,
)
