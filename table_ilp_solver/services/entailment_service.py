"""
Entailment Service - confidence that one token sequence entails another

Public API:
- entail(text1_tokens, text2_tokens) -> EntailmentResult
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

import httpx

from ..exceptions import EntailmentServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntailmentResult:
    """Entailment confidence plus whatever the service reports about how it got there"""
    confidence: float
    provenance: Dict[str, Any] = field(default_factory=dict)


class EntailmentService(ABC):
    """Directional entailment between two stemmed token sequences"""

    @abstractmethod
    def entail(self, text1: List[str], text2: List[str]) -> EntailmentResult:
        """How strongly does text1 (premise) entail text2 (hypothesis)?"""
        pass


class RemoteEntailmentService(EntailmentService):
    """
    Client for a JSON entailment service over HTTP

    Request:  POST <url> {"text1": [...tokens], "text2": [...tokens]}
    Response: {"confidence": 0.83, ...}; every other key is kept as provenance
    """

    def __init__(self, url: str, timeout: float = 30.0, client: httpx.Client = None):
        """
        Initialize the client

        Args:
            url: Endpoint of the entailment service
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (tests, connection pooling)
        """
        self.url = url
        self.client = client or httpx.Client(timeout=timeout)

    def entail(self, text1: List[str], text2: List[str]) -> EntailmentResult:
        try:
            response = self.client.post(self.url, json={'text1': text1, 'text2': text2})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EntailmentServiceError(
                f"Entailment request failed: {e.response.text}",
                status_code=e.response.status_code
            )
        except httpx.HTTPError as e:
            raise EntailmentServiceError(f"Entailment service unreachable at {self.url}: {e}")

        payload = response.json()
        if 'confidence' not in payload:
            raise EntailmentServiceError(f"Malformed entailment response: {payload}")

        confidence = float(payload.pop('confidence'))
        logger.debug(f"entail({text1}, {text2}) = {confidence}")
        return EntailmentResult(confidence=confidence, provenance=payload)

    def close(self):
        self.client.close()
