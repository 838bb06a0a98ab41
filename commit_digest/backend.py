"""Client for the Ollama text-generation API."""

import logging
from typing import Any, Callable, Optional, Protocol

import requests
from pydantic import ValidationError

from commit_digest.config import GENERATE_ENDPOINT
from commit_digest.errors import (
    BackendDecodeError,
    BackendStatusError,
    BackendTransportError,
    EmptyBackendResponseError,
)
from commit_digest.schemas import CommitDigestConfig, GenerateRequest, GenerateResponse
from commit_digest.settings import commit_digest_logger


class TextBackend(Protocol):
    """Anything that turns one prompt into generated text with a single call."""

    def invoke(self, prompt: str) -> str:
        ...


class OllamaClient:
    """Send prompts to Ollama's ``/api/generate`` endpoint.

    Each ``invoke`` performs exactly one blocking, non-streaming request.
    Nothing is retried: every failure is raised as a distinct
    :class:`~commit_digest.errors.BackendError` subclass.

    Attributes:
        config (CommitDigestConfig): Model, sampling and prompt settings.
        url (str): Full URL of the generate endpoint.
        timeout (float): Per-request timeout in seconds.
    """

    # --- Initialization ---
    def __init__(
        self,
        config: CommitDigestConfig,
        post: Callable[..., Any] = requests.post,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Effective configuration for this run.
            post: Function with the signature of ``requests.post``.
            timeout: Overrides ``config.request_timeout`` when given.
            logger: Logger to use instead of the module logger.
        """
        self._logger = logger or commit_digest_logger(__name__)
        self._post = post
        self.config = config
        self.url = f"{config.ollama_url}{GENERATE_ENDPOINT}"
        self.timeout = timeout if timeout is not None else config.request_timeout

    # --- Public methods ---
    def invoke(self, prompt: str) -> str:
        """Generate text for *prompt*.

        Args:
            prompt: Fully rendered prompt.

        Returns:
            The non-empty ``response`` field of the reply.

        Raises:
            BackendTransportError: If the request could not be completed.
            BackendStatusError: If the reply status is not 200.
            BackendDecodeError: If the reply is not a JSON generate envelope.
            EmptyBackendResponseError: If the reply carries no generated text.
        """
        payload = GenerateRequest.from_config(prompt, self.config)
        self._logger.debug(
            "POST %s (model: %s, prompt length: %d chars)",
            self.url,
            payload.model,
            len(prompt),
        )

        response = self._send(payload)
        text = self._parse(response)

        self._logger.debug("Received %d chars of generated text", len(text))
        return text

    # --- Private methods ---
    def _send(self, payload: GenerateRequest) -> Any:
        try:
            response = self._post(
                self.url, json=payload.model_dump(), timeout=self.timeout
            )
        except requests.RequestException as e:
            self._logger.debug("Request to %s failed: %s", self.url, e)
            raise BackendTransportError(f"Error making HTTP request: {e}") from e

        if response.status_code != requests.codes.ok:
            self._logger.debug(
                "Backend answered with status %d", response.status_code
            )
            raise BackendStatusError(response.status_code)

        return response

    def _parse(self, response: Any) -> str:
        try:
            body = response.json()
        except ValueError as e:
            self._logger.debug("Backend reply is not JSON: %s", e)
            raise BackendDecodeError(f"Error decoding response: {e}") from e

        try:
            envelope = GenerateResponse.model_validate(body)
        except ValidationError as e:
            self._logger.debug("Backend reply has an unexpected shape")
            raise BackendDecodeError(f"Malformed response envelope: {e}") from e

        if not envelope.response:
            self._logger.debug("Backend reply carries no generated text")
            raise EmptyBackendResponseError("Invalid or empty response from Ollama")

        return envelope.response

    # --- Dunder methods ---
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(url={self.url!r}, "
            f"model={self.config.ollama_model!r}, timeout={self.timeout})"
        )
