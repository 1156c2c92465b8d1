"""LLM gateway for workflow-specific completions.

Updates:
    v0.1.0 - 2026-10-19 - Async completions through LiteLLM with per-workflow attempts and timeout.
"""

from __future__ import annotations

import logging
from os import environ
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, cast

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from ..services.config_service import ConfigService, WorkflowModelConfig

try:
    import litellm
    from litellm import acompletion as _litellm_acompletion  # pyright: ignore[reportUnknownVariableType]
except ImportError as exc:  # pragma: no cover - guidance for missing dependency
    raise RuntimeError(
        "litellm is required for LLMGateway. Install via `pip install litellm`."
    ) from exc
else:
    litellm.drop_params = True

CompletionCallable = Callable[..., Awaitable[Any]]

acompletion = _litellm_acompletion

logger = logging.getLogger(__name__)


class LLMGateway:
    """Central point for orchestrating LLM calls."""

    DEFAULT_TIMEOUT_SECONDS = 30

    class LLMInvocationError(RuntimeError):
        """Raised when an LLM invocation fails."""

    def __init__(
        self,
        config_service: ConfigService,
        *,
        wait: wait_base | None = None,
    ) -> None:
        """Store configuration dependencies for LLM dispatch.

        Args:
            config_service (ConfigService): Loader providing workflow model configuration.
            wait (wait_base | None): Back-off between attempts when a workflow
                allows more than one.
        """

        self._config_service = config_service
        self._wait = wait or wait_exponential(multiplier=1, min=4, max=10)

    async def ainvoke(
        self,
        workflow: str,
        prompt: str,
        *,
        system_prompt: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Invoke the configured LLM workflow and return the response text.

        Args:
            workflow (str): Name of the workflow to execute.
            prompt (str): User-facing prompt content.
            system_prompt (str | None): Optional system guidance passed to the model.
            **kwargs: Provider-specific overrides such as ``response_format``.

        Returns:
            str: Content string returned by the LLM provider.

        Raises:
            LLMGateway.LLMInvocationError: If the workflow has no usable model
                config, the provider call fails or the response carries no text.
            RuntimeError: If the configured provider's API key is missing.
        """

        try:
            config = self._config_service.get_workflow_model_config(workflow)
        except (KeyError, ValueError) as exc:
            message = f"No usable model configuration for workflow '{workflow}': {exc}"
            logger.error(message)
            raise self.LLMInvocationError(message) from exc
        messages = self._build_messages(prompt, system_prompt)
        params = self._build_params(config, kwargs)
        params.setdefault("timeout", config.timeout or self.DEFAULT_TIMEOUT_SECONDS)

        try:
            response = await self._execute(workflow, messages, params, config.attempts)
        except self.LLMInvocationError:
            raise
        except Exception as exc:
            message = f"LLM invocation failed for workflow '{workflow}': {exc}"
            logger.error(message)
            raise self.LLMInvocationError(message) from exc

        return self._extract_text_content(response)

    async def _execute(
        self,
        workflow: str,
        messages: List[Dict[str, str]],
        params: Dict[str, Any],
        attempts: int,
    ) -> Dict[str, Any]:
        completion_fn = cast(CompletionCallable, acompletion)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=self._wait,
            retry=retry_if_exception_type(Exception),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                logger.debug(
                    "Invoking workflow=%s model=%s attempt=%s/%s",
                    workflow,
                    params.get("model"),
                    attempt.retry_state.attempt_number,
                    attempts,
                )
                raw_response = await completion_fn(messages=messages, **params)
                return self._normalise_response(raw_response)
        raise self.LLMInvocationError(
            f"LLM invocation failed for workflow '{workflow}' without response."
        )

    def _build_messages(
        self, prompt: str, system_prompt: str | None
    ) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _build_params(
        self, config: WorkflowModelConfig, overrides: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge model settings, provider settings and caller overrides.

        Raises:
            RuntimeError: If a configured provider is missing the required API key.
        """

        params: Dict[str, Any] = {"model": config.model}
        if config.temperature is not None:
            params["temperature"] = config.temperature

        max_tokens = self._resolve_max_tokens(config)
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        provider_name = config.provider
        if provider_name:
            provider_config = dict(self._config_service.providers.get(provider_name, {}))
            api_key_env = provider_config.pop("api_key_env", None)
            litellm_provider = provider_config.pop("litellm_provider", None)
            params.update(provider_config)
            if api_key_env:
                api_key = environ.get(api_key_env)
                if not api_key:
                    message = f"Environment variable '{api_key_env}' required for provider '{provider_name}'."
                    logger.error(message)
                    raise RuntimeError(message)
                params.setdefault("api_key", api_key)
            params.setdefault("custom_llm_provider", litellm_provider or provider_name)

        params.update(overrides)
        return params

    def _extract_text_content(self, response: Mapping[str, Any]) -> str:
        choices = response.get("choices")
        if not isinstance(choices, Sequence) or not choices:
            raise self.LLMInvocationError("LLM response did not include any choices.")
        first_choice = cast(Mapping[str, object], choices[0])
        message_value = first_choice.get("message")
        if not isinstance(message_value, Mapping):
            raise self.LLMInvocationError("LLM response missing message object.")
        content = cast(Mapping[str, Any], message_value).get("content")
        if not isinstance(content, str):
            raise self.LLMInvocationError("LLM response content is not textual.")
        return content

    def _normalise_response(self, raw_response: Any) -> Dict[str, Any]:
        if isinstance(raw_response, dict):
            return cast(Dict[str, Any], raw_response)
        for method_name in ("model_dump", "dict"):
            method = getattr(raw_response, method_name, None)
            if callable(method):
                candidate = method()
                if isinstance(candidate, dict):
                    return cast(Dict[str, Any], candidate)
        raise self.LLMInvocationError(
            f"Unexpected LLM response type: {type(raw_response).__name__}"
        )

    def _resolve_max_tokens(self, config: WorkflowModelConfig) -> Optional[int]:
        """Use the configured limit, else LiteLLM's metadata for the model."""

        if config.max_tokens is not None:
            return config.max_tokens

        candidates = [config.model]
        if "/" in config.model:
            candidates.append(config.model.split("/", 1)[1])
        for name in candidates:
            suggested = self._lookup_litellm_max_tokens(name)
            if suggested is not None:
                logger.debug(
                    "Resolved max_tokens=%s from LiteLLM metadata for model=%s",
                    suggested,
                    config.model,
                )
                return suggested
        return None

    @staticmethod
    def _lookup_litellm_max_tokens(model: str) -> Optional[int]:
        registry = getattr(litellm, "model_cost", None)
        if not isinstance(registry, Mapping):
            return None
        entry = registry.get(model)
        if not isinstance(entry, Mapping):
            return None
        for key in ("max_output_tokens", "max_tokens", "max_completion_tokens"):
            value = entry.get(key)
            if isinstance(value, (int, float)) and value > 0:
                return int(value)
        return None
