"""Map flagged keywords back onto source text as highlight segments."""
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from stress_detector.response_contract import StressfulKeyword

# (minimum intensity, tier), most severe first
TIER_THRESHOLDS = ((9, 5), (7, 4), (5, 3), (3, 2))


def intensity_tier(intensity: float) -> int:
    """Display tier 1-5 for a keyword intensity."""
    for threshold, tier in TIER_THRESHOLDS:
        if intensity >= threshold:
            return tier
    return 1


@dataclass(frozen=True)
class HighlightSegment:
    text: str
    keyword: Optional[StressfulKeyword] = None

    @property
    def tier(self) -> Optional[int]:
        if self.keyword is None:
            return None
        return intensity_tier(self.keyword.intensity)


def _build_pattern(keywords: Sequence[StressfulKeyword]) -> Optional["re.Pattern"]:
    phrases = []
    for keyword in keywords:
        if keyword.phrase.strip() and keyword.phrase not in phrases:
            phrases.append(keyword.phrase)
    if not phrases:
        return None
    # Longer phrases first so "stressed out" wins over "stressed" at the same position
    phrases.sort(key=len, reverse=True)
    return re.compile("|".join(re.escape(p) for p in phrases), re.IGNORECASE)


def _find_keyword(part: str, keywords: Sequence[StressfulKeyword]) -> Optional[StressfulKeyword]:
    folded = part.casefold()
    for keyword in keywords:
        if keyword.phrase.casefold() == folded:
            return keyword
    return None


def highlight(text: str, keywords: Sequence[StressfulKeyword]) -> List[HighlightSegment]:
    """
    Split `text` into segments, tagging the ones that match a keyword.

    Matching is case-insensitive and literal. All phrases are scanned at once,
    left to right, so a span of text is matched at most once and segments
    come out in text order. Keywords that never occur in the text are
    skipped.
    """
    pattern = _build_pattern(keywords) if keywords else None
    if pattern is None:
        return [HighlightSegment(text)]

    segments: List[HighlightSegment] = []
    cursor = 0
    for match in pattern.finditer(text):
        if match.start() > cursor:
            segments.append(HighlightSegment(text[cursor:match.start()]))
        part = match.group(0)
        segments.append(HighlightSegment(part, _find_keyword(part, keywords)))
        cursor = match.end()

    if cursor < len(text) or not segments:
        segments.append(HighlightSegment(text[cursor:]))
    return segments
