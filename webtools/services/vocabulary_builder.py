"""
Vocabulary practice backed by the ``generate-vocabulary`` function.
"""

import logging
import secrets
import string
import time
from random import Random
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from webtools.errors import ExternalServiceError
from webtools.services.http import FunctionsClient

logger = logging.getLogger(__name__)

GENERATE_FUNCTION = "generate-vocabulary"
SESSION_SUFFIX_LENGTH = 9
_BASE36 = string.digits + string.ascii_lowercase

Difficulty = Literal["beginner", "intermediate", "advanced", "expert"]
WordCategory = Literal[
    "everyday", "business", "medical", "technology", "academic", "science", "literature"
]


class WordRequest(BaseModel):
    level: Difficulty = "intermediate"
    category: WordCategory = "everyday"
    session_id: Optional[str] = None


class WordData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    word: str = Field(..., min_length=1)
    definition: str = ""
    pronunciation: str = ""
    etymology: str = ""
    difficulty: Difficulty = "intermediate"
    category: str = ""
    examples: List[str] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)
    already_knew: bool = False
    learned: bool = False
    timestamp: int = 0


def new_session_id(rng: Optional[Random] = None, now_ms: Optional[int] = None) -> str:
    """``session-<epoch millis>-<9 random base36 characters>``."""
    rng = rng or secrets.SystemRandom()
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(rng.choice(_BASE36) for _ in range(SESSION_SUFFIX_LENGTH))
    return f"session-{millis}-{suffix}"


def generate_word(request: WordRequest, client: Optional[FunctionsClient] = None) -> WordData:
    """
    Ask the service for the next word at the requested level and category.

    Raises:
        ExternalServiceError: If the call fails or returns something unusable
    """
    client = client or FunctionsClient()
    session_id = request.session_id or new_session_id()
    logger.info(f"Generating {request.level} {request.category} word for {session_id}")
    data = client.invoke(
        GENERATE_FUNCTION,
        json={
            "userLevel": request.level,
            "category": request.category,
            "sessionId": session_id,
        },
    )
    try:
        return WordData.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected vocabulary response: {e}")
        raise ExternalServiceError("Vocabulary service returned an invalid response") from e


class VocabularySession:
    """Words encountered in one practice session."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or new_session_id()
        self.encountered: List[WordData] = []

    def already_knew(self, word: WordData) -> WordData:
        recorded = word.model_copy(update={"already_knew": True, "learned": False})
        self.encountered.append(recorded)
        return recorded

    def learned(self, word: WordData) -> WordData:
        recorded = word.model_copy(update={"already_knew": False, "learned": True})
        self.encountered.append(recorded)
        return recorded

    @property
    def known_count(self) -> int:
        return sum(1 for word in self.encountered if word.already_knew)

    @property
    def learned_count(self) -> int:
        return sum(1 for word in self.encountered if word.learned)

    def stats(self) -> dict:
        return {
            "session_id": self.session_id,
            "total": len(self.encountered),
            "already_knew": self.known_count,
            "learned": self.learned_count,
        }
