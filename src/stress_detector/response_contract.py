"""Response contract for the stress oracle.

`RESPONSE_SCHEMA` is sent to Gemini as the generation constraint, and
`validate_reply` checks every reply against the same field names at runtime.
The oracle is an external producer, so nothing about its reply is trusted
until it has been through `validate_reply`.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from stress_detector.exceptions import ErrorKind


class ClassificationLevel(str, Enum):
    LOW = "Low Stress"
    MEDIUM = "Medium Stress"
    HIGH = "High Stress"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @property
    def short_label(self) -> str:
        """First word of the label ("Low", "Medium", "High")."""
        return self.value.split(" ")[0]


_LEVEL_ORDER = (ClassificationLevel.LOW, ClassificationLevel.MEDIUM, ClassificationLevel.HIGH)


@dataclass(frozen=True)
class StressfulKeyword:
    phrase: str
    intensity: int


@dataclass(frozen=True)
class ReasoningScores:
    negative_word_score: int
    emotional_tone: int
    cognitive_overload_index: int


@dataclass(frozen=True)
class AnalysisResult:
    level: ClassificationLevel
    confidence: int
    explanation: str
    keywords: Tuple[StressfulKeyword, ...]
    suggestions: Tuple[str, ...]
    reasoning: ReasoningScores

    def to_dict(self) -> Dict[str, Any]:
        """Wire form of the result, as the oracle produced it."""
        return {
            "stressLevel": self.level.value,
            "confidenceScore": self.confidence,
            "explanation": self.explanation,
            "stressfulKeywords": [{"word": k.phrase, "intensity": k.intensity} for k in self.keywords],
            "suggestions": list(self.suggestions),
            "reasoningScores": {
                "negativeWordScore": self.reasoning.negative_word_score,
                "emotionalTone": self.reasoning.emotional_tone,
                "cognitiveOverloadIndex": self.reasoning.cognitive_overload_index,
            },
        }


REASONING_FIELDS = ("negativeWordScore", "emotionalTone", "cognitiveOverloadIndex")

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "stressLevel": {
            "type": "STRING",
            "enum": [level.value for level in ClassificationLevel],
            "description": "The predicted stress level.",
        },
        "confidenceScore": {
            "type": "INTEGER",
            "description": "A confidence score for the prediction, from 0 to 100.",
        },
        "explanation": {
            "type": "STRING",
            "description": "A brief explanation of why this stress level was predicted, based on tone and keywords.",
        },
        "stressfulKeywords": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "word": {
                        "type": "STRING",
                        "description": "A stressful word or phrase from the text.",
                    },
                    "intensity": {
                        "type": "INTEGER",
                        "description": "A score from 1 (mild) to 10 (extreme) indicating the word's contribution to the stress level.",
                    },
                },
                "required": ["word", "intensity"],
            },
            "description": "A list of stressful keywords, each with a stress intensity score.",
        },
        "suggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "If the stress level is high, provide 2-3 actionable suggestions for stress reduction. Otherwise, return an empty array.",
        },
        "reasoningScores": {
            "type": "OBJECT",
            "properties": {
                "negativeWordScore": {
                    "type": "INTEGER",
                    "description": "A score from 0 to 100 indicating the density and severity of negative words.",
                },
                "emotionalTone": {
                    "type": "INTEGER",
                    "description": "A score from -100 (very negative) to 100 (very positive) representing the overall emotional tone.",
                },
                "cognitiveOverloadIndex": {
                    "type": "INTEGER",
                    "description": "A score from 0 to 100 indicating cognitive load, based on sentence complexity, repetition, and confusion markers.",
                },
            },
            "required": list(REASONING_FIELDS),
            "description": "A detailed breakdown of numerical indicators for the analysis.",
        },
    },
    "required": [
        "stressLevel",
        "confidenceScore",
        "explanation",
        "stressfulKeywords",
        "suggestions",
        "reasoningScores",
    ],
}


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid score
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _failure(kind: ErrorKind, error: str) -> Dict[str, Any]:
    return {"ok": False, "result": None, "kind": kind, "error": error}


def _parse_keywords(raw: Any) -> Optional[List[StressfulKeyword]]:
    if not isinstance(raw, list):
        return None
    keywords = []
    for item in raw:
        if not isinstance(item, dict):
            return None
        word = item.get("word")
        intensity = item.get("intensity")
        if not isinstance(word, str) or not word.strip() or not _is_number(intensity):
            return None
        keywords.append(StressfulKeyword(phrase=word, intensity=intensity))
    return keywords


def validate_reply(data: Any) -> Dict[str, Any]:
    """
    Check a parsed oracle reply against the contract.

    Checks run in a fixed order and stop at the first failure: object shape,
    classification, reasoning scores, then the remaining fields. Numeric
    ranges are not enforced; values are passed through unchanged.

    Returns:
        Dict with 'ok', 'result' (AnalysisResult or None), 'kind' (ErrorKind
        or None) and 'error' keys
    """
    if not isinstance(data, dict):
        return _failure(ErrorKind.MALFORMED_REPLY, f"expected a JSON object, got {type(data).__name__}")

    raw_level = data.get("stressLevel")
    try:
        level = ClassificationLevel(raw_level)
    except ValueError:
        return _failure(ErrorKind.INVALID_CLASSIFICATION, f"invalid stressLevel {raw_level!r}")

    reasoning = data.get("reasoningScores")
    if not isinstance(reasoning, dict):
        return _failure(ErrorKind.MISSING_REASONING, "reasoningScores missing")
    missing = [name for name in REASONING_FIELDS if not _is_number(reasoning.get(name))]
    if missing:
        return _failure(ErrorKind.MISSING_REASONING, f"reasoningScores incomplete: {', '.join(missing)}")

    confidence = data.get("confidenceScore")
    if not _is_number(confidence):
        return _failure(ErrorKind.MALFORMED_REPLY, "confidenceScore missing or not a number")

    explanation = data.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        return _failure(ErrorKind.MALFORMED_REPLY, "explanation missing or empty")

    keywords = _parse_keywords(data.get("stressfulKeywords"))
    if keywords is None:
        return _failure(ErrorKind.MALFORMED_REPLY, "stressfulKeywords missing or malformed")

    suggestions = data.get("suggestions")
    if not isinstance(suggestions, list) or not all(isinstance(s, str) for s in suggestions):
        return _failure(ErrorKind.MALFORMED_REPLY, "suggestions missing or not a list of strings")

    result = AnalysisResult(
        level=level,
        confidence=confidence,
        explanation=explanation,
        keywords=tuple(keywords),
        suggestions=tuple(suggestions),
        reasoning=ReasoningScores(
            negative_word_score=reasoning["negativeWordScore"],
            emotional_tone=reasoning["emotionalTone"],
            cognitive_overload_index=reasoning["cognitiveOverloadIndex"],
        ),
    )
    return {"ok": True, "result": result, "kind": None, "error": None}
