"""Image generation provider with support for multiple backends."""

from __future__ import annotations

import asyncio
import base64
import logging
import os
import time
from typing import Any, Awaitable, Callable

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import CAROUSEL_ASPECT_RATIO
from ..exceptions import BackgroundGenerationError, MissingCredentialsError
from .config import ImageProviderConfig, ProviderConfig, load_provider_config

_logger = logging.getLogger("ai_calls")

# Type for AI event callback
AIEventCallback = Callable[[dict[str, Any]], Awaitable[None]] | None

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _is_retryable(error: BaseException) -> bool:
    """Transport failures, rate limits and server errors are worth retrying."""
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status == 429 or status >= 500
    return False


class ImageProvider:
    """Unified image generation provider.

    Supports multiple backends, tried in priority order:
    - Gemini image generation (REST via httpx)
    - OpenAI (DALL-E 3)
    - fal.ai (Flux)

    Usage:
        provider = ImageProvider()
        image_bytes = await provider.generate(
            prompt="Abstract dark gradient background",
            aspect_ratio="4:5",
        )
    """

    # Portrait/landscape/square sizes for backends without aspect-ratio input
    ASPECT_SIZES = {
        "portrait": (1080, 1350),
        "landscape": (1350, 1080),
        "square": (1080, 1080),
    }

    # Backoff between attempts of one HTTP request
    retry_wait = wait_exponential(multiplier=1, min=2, max=10)

    def __init__(self, config: ProviderConfig | None = None, event_callback: AIEventCallback = None):
        """Initialize image provider.

        Args:
            config: Provider configuration. If None, loads from default config file.
            event_callback: Optional callback for AI events (for progress tracking).
        """
        self.config = config or load_provider_config()
        self._current_provider: str | None = None
        self._http_client: httpx.AsyncClient | None = None
        self._event_callback = event_callback
        self._total_calls = 0
        self._total_cost = 0.0

    async def _emit_event(self, event: dict[str, Any]) -> None:
        """Emit an AI event if callback is set."""
        if self._event_callback:
            await self._event_callback(event)

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.provider_settings.timeout_seconds)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    def has_credentials(self) -> bool:
        """Whether any enabled provider can be called."""
        return self.config.has_credentials()

    async def generate(
        self,
        prompt: str,
        aspect_ratio: str = CAROUSEL_ASPECT_RATIO,
        model: str | None = None,
        **kwargs: Any,
    ) -> bytes:
        """Generate an image from a prompt.

        Args:
            prompt: Text description of the image.
            aspect_ratio: Aspect ratio hint such as "4:5".
            model: Optional model id overriding the Gemini provider's model.
            **kwargs: Additional provider-specific arguments.

        Returns:
            Encoded image bytes as returned by the backend.

        Raises:
            MissingCredentialsError: If no enabled provider has an API key.
            BackgroundGenerationError: If every provider failed.
        """
        providers = self.config.get_enabled_image_providers()
        if not providers:
            raise MissingCredentialsError("No image providers are enabled")
        if not self.has_credentials():
            keys = ", ".join(c.api_key_env or name for name, c in providers)
            raise MissingCredentialsError(f"No image provider credentials set ({keys})")

        last_error: Exception | None = None
        failed_providers: list[str] = []

        for provider_name, provider_config in providers:
            try:
                self._current_provider = provider_name

                await self._emit_event({
                    "type": "image_call",
                    "provider": provider_name,
                    "model": model or provider_config.model,
                    "prompt_preview": prompt[:200],
                    "aspect_ratio": aspect_ratio,
                    "failed_providers": failed_providers.copy(),
                })
                _logger.info(
                    f"IMAGE_CALL | provider:{provider_name} | model:{model or provider_config.model} | "
                    f"aspect:{aspect_ratio} | prompt:{prompt[:120]}"
                )

                start_time = time.time()

                if provider_config.type == "gemini":
                    image_bytes = await self._generate_gemini(
                        provider_config, prompt, aspect_ratio, model
                    )
                elif provider_config.type == "openai":
                    image_bytes = await self._generate_openai(
                        provider_config, prompt, aspect_ratio, **kwargs
                    )
                elif provider_config.type == "fal":
                    image_bytes = await self._generate_fal(
                        provider_config, prompt, aspect_ratio, **kwargs
                    )
                else:
                    raise ValueError(f"Unknown provider type: {provider_config.type}")

                duration = time.time() - start_time
                self._total_calls += 1
                self._total_cost += provider_config.cost_per_image

                await self._emit_event({
                    "type": "image_response",
                    "provider": provider_name,
                    "duration_seconds": duration,
                    "cost_usd": provider_config.cost_per_image,
                    "total_calls": self._total_calls,
                    "total_cost": self._total_cost,
                    "image_size_bytes": len(image_bytes),
                })
                _logger.info(
                    f"IMAGE_RESPONSE | provider:{provider_name} | duration:{duration:.1f}s | "
                    f"bytes:{len(image_bytes)}"
                )

                return image_bytes

            except Exception as e:
                last_error = e
                failed_providers.append(provider_name)
                _logger.warning(f"IMAGE_ERROR | provider:{provider_name} | error:{e}")
                await self._emit_event({
                    "type": "image_error",
                    "provider": provider_name,
                    "error": str(e)[:50],
                    "failed_providers": failed_providers.copy(),
                })
                if self.config.provider_settings.fallback_on_error:
                    continue
                raise BackgroundGenerationError(f"{provider_name}: {e}") from e

        raise BackgroundGenerationError(
            f"All image providers failed ({', '.join(failed_providers)}): {last_error}"
        ) from last_error

    def _retrying(self) -> AsyncRetrying:
        """Retry policy for transient HTTP failures.

        ``provider_settings.max_retries`` is the total number of attempts.
        """
        return AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(max(1, self.config.provider_settings.max_retries)),
            wait=self.retry_wait,
            reraise=True,
        )

    async def _post_json(self, url: str, payload: dict[str, Any], headers: dict[str, str], timeout: int) -> dict[str, Any]:
        async for attempt in self._retrying():
            with attempt:
                client = await self._get_http_client()
                response = await client.post(url, json=payload, headers=headers, timeout=timeout)
                response.raise_for_status()
                return response.json()

    async def _generate_gemini(
        self,
        config: ImageProviderConfig,
        prompt: str,
        aspect_ratio: str,
        model: str | None = None,
    ) -> bytes:
        """Generate image using the Gemini generateContent API."""
        api_key = config.get_api_key()
        if not api_key:
            raise ValueError(f"{config.api_key_env or 'GOOGLE_API_KEY'} not set")

        base_url = (config.base_url or GEMINI_BASE_URL).rstrip("/")
        url = f"{base_url}/models/{model or config.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
                "imageConfig": {"aspectRatio": aspect_ratio},
            },
        }

        data = await self._post_json(
            url,
            payload,
            headers={"x-goog-api-key": api_key},
            timeout=config.timeout,
        )

        candidates = data.get("candidates") or []
        parts = (candidates[0].get("content") or {}).get("parts", []) if candidates else []
        for part in parts:
            inline = part.get("inlineData") or part.get("inline_data") or {}
            if inline.get("data"):
                return base64.b64decode(inline["data"])

        raise ValueError("Gemini response contained no image data")

    def _size_for(self, aspect_ratio: str) -> tuple[int, int]:
        try:
            w, h = (float(x) for x in aspect_ratio.split(":"))
        except ValueError:
            return self.ASPECT_SIZES["portrait"]
        if h > w:
            return self.ASPECT_SIZES["portrait"]
        if w > h:
            return self.ASPECT_SIZES["landscape"]
        return self.ASPECT_SIZES["square"]

    async def _generate_openai(
        self,
        config: ImageProviderConfig,
        prompt: str,
        aspect_ratio: str,
        **kwargs: Any,
    ) -> bytes:
        """Generate image using OpenAI DALL-E API."""
        from openai import AsyncOpenAI

        api_key = config.get_api_key()
        if not api_key:
            raise ValueError("OPENAI_API_KEY not set")

        client = AsyncOpenAI(api_key=api_key, timeout=config.timeout)

        # DALL-E 3 only supports specific sizes
        width, height = self._size_for(aspect_ratio)
        if height > width:
            dalle_size = "1024x1792"
        elif width > height:
            dalle_size = "1792x1024"
        else:
            dalle_size = "1024x1024"

        response = await client.images.generate(
            model=config.model,
            prompt=prompt,
            size=dalle_size,
            quality=config.settings.get("quality", "standard"),
            response_format="b64_json",
            n=1,
        )

        return base64.b64decode(response.data[0].b64_json)

    async def _generate_fal(
        self,
        config: ImageProviderConfig,
        prompt: str,
        aspect_ratio: str,
        **kwargs: Any,
    ) -> bytes:
        """Generate image using fal.ai API."""
        import fal_client

        api_key = config.get_api_key()
        if not api_key:
            raise ValueError("FAL_API_KEY not set")

        os.environ["FAL_KEY"] = api_key

        width, height = self._size_for(aspect_ratio)
        if height > width:
            image_size = "portrait_4_3"  # Closest to 4:5
        elif width > height:
            image_size = "landscape_4_3"
        else:
            image_size = "square"

        request_data = {
            "prompt": prompt,
            "image_size": image_size,
            **config.settings,
            **kwargs,
        }

        result = await asyncio.wait_for(
            asyncio.to_thread(fal_client.subscribe, config.model, arguments=request_data),
            timeout=config.timeout,
        )

        if "images" in result and len(result["images"]) > 0:
            image_url = result["images"][0]["url"]
        elif "image" in result:
            image_url = result["image"]["url"]
        else:
            raise ValueError(f"Unexpected fal.ai response format: {result}")

        client = await self._get_http_client()
        response = await client.get(image_url, timeout=config.timeout)
        response.raise_for_status()
        return response.content

    @property
    def current_provider(self) -> str | None:
        """Get the name of the last used provider."""
        return self._current_provider


# Module-level singleton
_default_provider: ImageProvider | None = None


def get_image_provider(config: ProviderConfig | None = None) -> ImageProvider:
    """Get the default image provider instance.

    Args:
        config: Optional config to use.

    Returns:
        ImageProvider instance.
    """
    global _default_provider
    if _default_provider is None or config is not None:
        _default_provider = ImageProvider(config)
    return _default_provider
