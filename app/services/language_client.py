import logging
from typing import Any, Optional

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import language_v1

from ..exceptions import RemoteUnavailableError

logger = logging.getLogger(__name__)


class LanguageClient:
    """Thin async wrapper around the Google Cloud Natural Language v1 API.

    Every method sends the full document text as a plain-text document and
    returns the raw response message. Transport, authentication and API
    errors are re-raised as ``RemoteUnavailableError``.
    """

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        client: Optional[language_v1.LanguageServiceAsyncClient] = None,
    ) -> None:
        self.credentials_path = credentials_path
        self._client = client

    def _get_client(self) -> language_v1.LanguageServiceAsyncClient:
        if self._client is None:
            if self.credentials_path:
                logger.info("Creating language client from key file %s", self.credentials_path)
                self._client = language_v1.LanguageServiceAsyncClient.from_service_account_file(
                    self.credentials_path
                )
            else:
                logger.info("Creating language client with application default credentials")
                self._client = language_v1.LanguageServiceAsyncClient()
        return self._client

    @staticmethod
    def build_document(text: str) -> language_v1.Document:
        return language_v1.Document(content=text, type_=language_v1.Document.Type.PLAIN_TEXT)

    async def analyze_sentiment(self, text: str) -> language_v1.AnalyzeSentimentResponse:
        return await self._call("analyze_sentiment", text)

    async def analyze_entities(self, text: str) -> language_v1.AnalyzeEntitiesResponse:
        return await self._call("analyze_entities", text)

    async def analyze_syntax(self, text: str) -> language_v1.AnalyzeSyntaxResponse:
        return await self._call("analyze_syntax", text)

    async def classify_text(self, text: str) -> language_v1.ClassifyTextResponse:
        return await self._call("classify_text", text)

    async def _call(self, method_name: str, text: str) -> Any:
        try:
            client = self._get_client()
            method = getattr(client, method_name)
            response = await method(request={"document": self.build_document(text)})
        except (api_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError, OSError) as exc:
            logger.debug("Language API call %s failed: %s", method_name, exc)
            raise RemoteUnavailableError(f"{method_name} failed: {exc}") from exc

        logger.debug("Language API call %s succeeded", method_name)
        return response
