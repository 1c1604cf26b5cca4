"""Gemini (Vertex AI) client for summary generation."""

import asyncio
import logging
import time
from typing import Any, Optional

from google import genai
from google.genai import types
from google.oauth2 import service_account

from app.core.config import Settings
from app.core.exceptions import BackendError, BackendFailure
from app.models.summary import GenerationConfig, SafetySetting

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

# The SDK HTTP timeout trails the call timeout so expiry is reported as TIMEOUT
HTTP_TIMEOUT_MARGIN_SECONDS = 5

TEMPERATURE = 0.5
TOP_P = 0.95
MAX_OUTPUT_TOKENS = 65535

SAFETY_SETTINGS = (
    SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_MEDIUM_AND_ABOVE"),
    SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_MEDIUM_AND_ABOVE"),
    SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_MEDIUM_AND_ABOVE"),
    SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_MEDIUM_AND_ABOVE"),
)


def build_generation_config(settings: Settings) -> GenerationConfig:
    """Build the process-wide generation config."""
    return GenerationConfig(
        model=settings.gemini_model,
        temperature=TEMPERATURE,
        top_p=TOP_P,
        max_output_tokens=MAX_OUTPUT_TOKENS,
        safety_settings=SAFETY_SETTINGS,
    )


def _first_candidate_text(response: Any) -> str:
    """Return the text of the first part of the first candidate.

    Raises:
        BackendError: MALFORMED_RESPONSE if the response has no usable text.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        block_reason = None
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None:
            block_reason = getattr(feedback, "block_reason", None)
        detail = f" (prompt blocked: {block_reason})" if block_reason else ""
        raise BackendError(
            BackendFailure.MALFORMED_RESPONSE,
            cause=f"Model returned no candidates{detail}",
        )

    candidate = candidates[0]
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) if content is not None else None
    text = getattr(parts[0], "text", None) if parts else None

    if not text:
        finish_reason = getattr(candidate, "finish_reason", None)
        detail = f" (finish reason: {finish_reason})" if finish_reason else ""
        raise BackendError(
            BackendFailure.MALFORMED_RESPONSE,
            cause=f"Model returned an empty response{detail}",
        )
    return text


class SummarizerClient:
    """Sends summary prompts to a Gemini model.

    Holds the long-lived SDK client and the immutable generation config.
    Safe to share across concurrent requests.
    """

    def __init__(
        self,
        client: Any,
        config: GenerationConfig,
        timeout_seconds: Optional[float] = None,
    ):
        self.client = client
        self.config = config
        self.timeout_seconds = timeout_seconds
        self._request_config = types.GenerateContentConfig(
            temperature=config.temperature,
            top_p=config.top_p,
            max_output_tokens=config.max_output_tokens,
            safety_settings=[
                types.SafetySetting(category=s.category, threshold=s.threshold)
                for s in config.safety_settings
            ],
        )

    @property
    def model(self) -> str:
        return self.config.model

    async def summarize(self, prompt: str) -> str:
        """Generate a summary for a prompt.

        Args:
            prompt: Full instruction prompt including the source text.

        Returns:
            Text of the first candidate.

        Raises:
            BackendError: On transport failure, timeout or unusable response.
        """
        contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]
        start_time = time.time()

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.config.model,
                    contents=contents,
                    config=self._request_config,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise BackendError(
                BackendFailure.TIMEOUT,
                cause=f"Model did not respond within {self.timeout_seconds}s",
            )
        except Exception as e:
            raise BackendError(BackendFailure.BACKEND_FAILURE, cause=f"Gemini API error: {e}")

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Gemini {self.config.model} responded in {elapsed_ms}ms")

        return _first_candidate_text(response)


def create_summarizer(settings: Settings) -> SummarizerClient:
    """Create the Vertex AI backed summarizer from settings."""
    credentials = None
    if settings.google_application_credentials:
        credentials = service_account.Credentials.from_service_account_file(
            settings.google_application_credentials,
            scopes=[CLOUD_PLATFORM_SCOPE],
        )

    client = genai.Client(
        vertexai=True,
        project=settings.gcloud_project_id,
        location=settings.gcloud_location,
        credentials=credentials,
        http_options=types.HttpOptions(
            timeout=int(
                (settings.generation_timeout_seconds + HTTP_TIMEOUT_MARGIN_SECONDS) * 1000
            )
        ),
    )
    logger.info(
        f"Created Gemini client: {settings.gemini_model} "
        f"(project: {settings.gcloud_project_id}, location: {settings.gcloud_location})"
    )
    return SummarizerClient(
        client,
        build_generation_config(settings),
        timeout_seconds=settings.generation_timeout_seconds,
    )
