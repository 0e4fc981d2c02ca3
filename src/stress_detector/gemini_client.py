"""Gemini API client used as the stress classification oracle."""
import logging
from typing import Dict, Any, Optional

import requests

from stress_detector import config
from stress_detector.exceptions import ConfigError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for the Gemini v1beta :generateContent endpoint."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize client with API key from environment or parameter."""
        self.api_key = api_key or config.get_api_key()
        if not self.api_key:
            raise ConfigError(f"{config.API_KEY_ENV} must be set in environment or passed to constructor")

        self.base_url = config.BASE_URL
        self.default_model = model or config.get_model()

    def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Generate content using Gemini API.

        Args:
            prompt: The input text prompt
            temperature: Sampling temperature (0.0-1.0)
            response_schema: Gemini responseSchema; switches the reply to JSON mode
            timeout: Request timeout in seconds

        Returns:
            Dict with 'ok', 'text', 'raw', 'error' keys
        """
        model = self.default_model
        url = f"{self.base_url}/{model}:generateContent"
        timeout = timeout or config.get_timeout()

        generation_config: Dict[str, Any] = {
            "temperature": config.get_temperature() if temperature is None else temperature
        }

        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config
        }

        logger.debug("Calling %s (timeout=%ss)", model, timeout)
        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=timeout
            )
        except requests.exceptions.Timeout:
            return {
                "ok": False,
                "text": None,
                "raw": None,
                "error": f"Request timed out after {timeout} seconds"
            }
        except requests.exceptions.RequestException as e:
            return {
                "ok": False,
                "text": None,
                "raw": None,
                "error": f"Request failed: {e}"
            }

        if response.status_code != 200:
            return {
                "ok": False,
                "text": None,
                "raw": None,
                "error": f"HTTP {response.status_code}: {response.text[:500]}"
            }

        try:
            data = response.json()
        except ValueError as e:
            return {
                "ok": False,
                "text": None,
                "raw": response.text,
                "error": f"Unreadable response envelope: {e}"
            }

        return {
            "ok": True,
            "text": self._extract_text(data),
            "raw": data,
            "error": None
        }

    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        """Extract text content from API response."""
        if not isinstance(data, dict):
            return None

        candidates = data.get("candidates") or []
        if not candidates or not isinstance(candidates[0], dict):
            return None

        content = candidates[0].get("content") or {}
        parts = content.get("parts") or []
        if not parts:
            return None

        # Combine all text parts
        text_parts = [part.get("text", "") for part in parts if isinstance(part, dict)]
        return "".join(text_parts)
