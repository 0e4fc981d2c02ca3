"""Stress analysis: builds the oracle request and turns its reply into an AnalysisResult."""
import asyncio
import json
import logging
from typing import Any, Dict, Optional

from stress_detector.config import SUPPORTED_LANGUAGES
from stress_detector.exceptions import AnalysisError, ErrorKind
from stress_detector.gemini_client import GeminiClient
from stress_detector.response_contract import RESPONSE_SCHEMA, AnalysisResult, validate_reply

logger = logging.getLogger(__name__)


def build_prompt(text: str) -> str:
    """Prompt embedding the language hint, the task and the user's text."""
    languages = ", ".join(SUPPORTED_LANGUAGES)
    return f"""First, automatically detect the language of the following text from these options: {languages}.

Then, analyze the text in its detected language to determine the user's stress level based on its sentiment and emotional keywords.

Text: "{text}"

Provide a detailed reasoning section with numerical indicators:
- "negativeWordScore": A score from 0 to 100 indicating the density and severity of negative words.
- "emotionalTone": A score from -100 (very negative) to 100 (very positive) representing the overall emotional tone.
- "cognitiveOverloadIndex": A score from 0 to 100 indicating cognitive load, based on sentence complexity, repetition, and confusion markers.

Identify stressful keywords and assign an intensity score from 1 (mildly stressful) to 10 (highly stressful) for each keyword, reflecting its contribution to the overall stress level.

Provide your analysis in a JSON format. The JSON object must conform to the schema provided. Do not include any introductory text or markdown formatting in your response. Only return the valid JSON object."""


class StressAnalyzer:
    """
    Classifies the stress level of free text through the Gemini oracle.

    Holds nothing but the client between calls, so concurrent calls never
    share mutable state. Each call makes exactly one oracle request and
    never retries.
    """

    def __init__(self, gemini_client: GeminiClient):
        """Initialize with Gemini client."""
        self.client = gemini_client

    def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze `text` and return a validated result.

        Raises:
            AnalysisError: with `kind` set to the first failed check
        """
        if not text or not text.strip():
            raise AnalysisError(ErrorKind.EMPTY_INPUT, "no text to analyze")

        response = self.client.generate(build_prompt(text), response_schema=RESPONSE_SCHEMA)
        if not response.get("ok"):
            logger.warning("Oracle call failed: %s", response.get("error"))
            raise AnalysisError(ErrorKind.ORACLE_UNAVAILABLE, response.get("error") or "unknown error")

        data = self._parse_reply(response.get("text"))
        checked = validate_reply(data)
        if not checked["ok"]:
            logger.warning("Rejected oracle reply (%s): %s", checked["kind"].value, checked["error"])
            raise AnalysisError(checked["kind"], checked["error"])

        result = checked["result"]
        logger.info("Stress analysis complete: level=%s confidence=%s", result.level.value, result.confidence)
        return result

    async def analyze_async(self, text: str) -> AnalysisResult:
        """Run `analyze` on a worker thread; the oracle call is the only wait."""
        return await asyncio.to_thread(self.analyze, text)

    def _parse_reply(self, text: Optional[str]) -> Any:
        if not text or not text.strip():
            raise AnalysisError(ErrorKind.MALFORMED_REPLY, "empty response from API")
        try:
            return json.loads(text.strip())
        except json.JSONDecodeError as e:
            raise AnalysisError(ErrorKind.MALFORMED_REPLY, f"failed to parse JSON: {e}") from e


# Convenience function
def analyze_stress(text: str, gemini_client: GeminiClient = None) -> AnalysisResult:
    """Analyze `text` for stress, building a client from the environment if needed."""
    if gemini_client is None:
        gemini_client = GeminiClient()

    analyzer = StressAnalyzer(gemini_client)
    return analyzer.analyze(text)


def describe_failure(error: AnalysisError) -> Dict[str, str]:
    """Split a failure into the user-facing message and the diagnostic kind."""
    return {"message": error.user_message, "kind": error.kind.value, "detail": error.detail}
