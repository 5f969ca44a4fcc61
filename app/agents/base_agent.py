import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Awaitable, Callable, List

from ..config import settings
from ..exceptions import AnalysisError, MalformedResponseError
from ..services.language_client import LanguageClient

logger = logging.getLogger(__name__)


def timeout_guard(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """Decorator to enforce per-request timeout"""

    @wraps(func)
    async def wrapper(self, *args: Any, **kwargs: Any) -> Any:
        timeout_seconds = getattr(self, "timeout_seconds", settings.request_timeout_seconds)
        try:
            return await asyncio.wait_for(func(self, *args, **kwargs), timeout=timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.error("Agent %s timed out after %s seconds", getattr(self, "agent_name", "unknown"), timeout_seconds)
            raise TimeoutError(f"Operation exceeded timeout of {timeout_seconds} seconds") from exc

    return wrapper


class BaseAnalysisAgent(ABC):
    """Abstract base class for the per-kind analysis agents.

    An agent owns one request kind against the language service and the
    reshaping of its raw response into plain result records.
    """

    def __init__(self, client: LanguageClient) -> None:
        self.client = client
        self.timeout_seconds = settings.request_timeout_seconds

    @property
    @abstractmethod
    def agent_name(self) -> str:
        """Name used for logging and structured responses."""

    @abstractmethod
    async def process(self, document_text: str) -> list:
        """Request the analysis for ``document_text`` and return normalized records."""

    @timeout_guard
    async def _process_with_timeout(self, document_text: str) -> list:
        return await self.process(document_text)

    async def execute(self, document_text: str) -> dict:
        """Execute processing with timeout and structured error handling."""
        try:
            result = await self._process_with_timeout(document_text)
            if not isinstance(result, list):
                raise MalformedResponseError("Agent process() must return a list of records.")
            return {
                "status": "success",
                "agent": self.agent_name,
                "data": result,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        except TimeoutError as exc:
            return self._error_response(error_type="timeout", message=str(exc))
        except AnalysisError as exc:
            logger.warning("Agent %s failed: %s", self.agent_name, exc)
            return self._error_response(error_type="exception", message=str(exc))
        except Exception as exc:
            logger.exception("Unhandled agent error in %s", self.agent_name)
            return self._error_response(error_type="exception", message=str(exc))

    def _error_response(self, *, error_type: str, message: str) -> dict:
        return {
            "status": "error",
            "agent": self.agent_name,
            "error_type": error_type,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


def require(value: Any, field: str) -> Any:
    """Return ``value`` or raise ``MalformedResponseError`` naming the missing field."""
    if value is None:
        raise MalformedResponseError(f"Language service response is missing '{field}'.")
    return value


def enum_name(value: Any) -> str:
    """Render a protobuf enum value (or an already-named value) as its name."""
    name = getattr(value, "name", value)
    if not isinstance(name, str):
        raise MalformedResponseError(f"Unexpected enum value {value!r} in language service response.")
    return name


def as_records(items: Any, field: str) -> List[Any]:
    require(items, field)
    try:
        return list(items)
    except TypeError as exc:
        raise MalformedResponseError(f"'{field}' in language service response is not a sequence.") from exc
