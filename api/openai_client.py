import time

import openai

from utils.logger import get_logger

from .base_client import BaseAIClient, ScoringProviderError

logger = get_logger(__name__)


class OpenAIClient(BaseAIClient):
    """
    A client for the OpenAI chat completions API in JSON mode.
    """

    provider_name = "openai"

    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini", timeout_s: float = 15.0, **kwargs):
        """
        Initialize the OpenAI client.

        Args:
            api_key: The OpenAI API key
            model_name: The name of the model to use (default: gpt-4o-mini)
            timeout_s: Per-request timeout in seconds
            **kwargs: Additional keyword arguments (``client`` to inject an SDK client)
        """
        super().__init__(api_key, model_name=model_name, timeout_s=timeout_s)
        if not api_key and kwargs.get("client") is None:
            raise ValueError("API key is required for OpenAI")
        self.client = kwargs.get("client") or openai.OpenAI(
            api_key=api_key, timeout=timeout_s, max_retries=0
        )
        self.model_name = model_name

    def get_json_completion(self, system_prompt: str, prompt: str, **kwargs) -> str:
        model = kwargs.get("model", self.model_name)
        temperature = kwargs.get("temperature", 0.3)
        start_time = time.time()

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            error = self._normalize_error(e)
            logger.error(
                f"OpenAI completion failed: {error.code}",
                extra={"extra_fields": {"model": model, "error_code": error.code}},
            )
            raise error from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ScoringProviderError("empty_response", "No response content from OpenAI", self.provider_name)

        usage = getattr(response, "usage", None)
        logger.info(
            "OpenAI completion successful",
            extra={
                "extra_fields": {
                    "model": model,
                    "latency_ms": int((time.time() - start_time) * 1000),
                    "tokens": getattr(usage, "total_tokens", 0) if usage else 0,
                }
            },
        )
        return content
