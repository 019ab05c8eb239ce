"""LLM client setup and tool-call inference — wraps the openai SDK.

Supports any OpenAI-compatible backend (OpenAI, OpenRouter, LM Studio).  The
``create_client`` factory takes the API key from configuration and injects
the extra headers OpenRouter expects when the base URL matches.

The public interface is ``ChatClient.call_tool(messages, tool, tool_choice)``
returning the raw JSON argument string of the forced tool call, which keeps
call sites and mocks small.
"""

import logging
import time

import openai as _openai

from papernotes.models import Config, ConfigError, LLMError

logger = logging.getLogger(__name__)


class ChatClient:
    """OpenAI-compatible chat client bound to one model.

    Attributes:
        model:       The model identifier passed to every request.
        base_url:    API base URL, kept for log messages.
        temperature: Sampling temperature for every request.
    """

    def __init__(
        self,
        model: str,
        base_url: str,
        api_key: str,
        temperature: float = 0.0,
        extra_headers: dict | None = None,
        timeout_s: int | None = None,
        max_output_tokens: int | None = None,
    ) -> None:
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.timeout_s = timeout_s
        self.max_output_tokens = max_output_tokens
        self._client = _openai.OpenAI(
            base_url=base_url,
            api_key=api_key,
            default_headers=extra_headers or {},
        )

    def call_tool(self, messages: list[dict], tool: dict, tool_choice: dict) -> str:
        """Send one chat completion constrained to *tool*; return its arguments.

        Raises:
            LLMError: if the reply contains no call to the requested function.
            openai.OpenAIError: on transport or API failures (not retried).
        """
        kwargs: dict = dict(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            tools=[tool],
            tool_choice=tool_choice,
        )
        if self.timeout_s is not None:
            kwargs["timeout"] = self.timeout_s
        if self.max_output_tokens is not None:
            kwargs["max_tokens"] = self.max_output_tokens

        name = tool["function"]["name"]
        logger.info("Calling LLM  model=%s  backend=%s", self.model, self.base_url)
        logger.info("Awaiting response...")
        t0 = time.monotonic()
        response = self._client.chat.completions.create(**kwargs)
        elapsed = time.monotonic() - t0

        if not response.choices:
            raise LLMError(f"Model {self.model!r} returned no choices")
        message = response.choices[0].message
        for call in message.tool_calls or []:
            if call.function.name == name:
                arguments = call.function.arguments
                logger.info(
                    "Response received (%.1fs, %s chars)", elapsed, f"{len(arguments):,}"
                )
                return arguments

        raise LLMError(
            f"Model did not call {name!r}; reply was: {(message.content or '')[:200]!r}"
        )


def create_client(config: Config) -> ChatClient:
    """Create a client from configuration.

    OpenRouter headers are injected automatically when ``config.base_url``
    contains ``"openrouter.ai"``.

    Raises:
        ConfigError: if ``config.llm_api_key`` is missing.
    """
    if not config.llm_api_key:
        raise ConfigError("OPENAI_API_KEY is not set; the chat model needs a key")

    extra_headers: dict = {}
    if "openrouter.ai" in config.base_url:
        extra_headers = {
            "HTTP-Referer": "https://github.com/paper-notes",
            "X-Title": "paper-notes",
        }

    return ChatClient(
        model=config.model,
        base_url=config.base_url,
        api_key=config.llm_api_key,
        temperature=config.temperature,
        extra_headers=extra_headers,
        timeout_s=config.timeout_s,
        max_output_tokens=config.max_output_tokens,
    )
