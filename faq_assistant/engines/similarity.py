"""
Similarity Scorer

Blends four cheap lexical signals into one score:

    0.4 * word overlap + 0.2 * substring + 0.3 * thematic keywords + 0.1 * length

All signals are computed on normalized text. The result is not clamped; with
several thematic sets matching it can exceed 1.0.
"""

import unicodedata
from typing import Mapping, NamedTuple, Optional, Tuple

from faq_assistant.engines.intent_config import THEMATIC_KEYWORDS
from faq_assistant.schemas import Question

PUNCTUATION = ".,¿?¡!"
_PUNCTUATION_TABLE = str.maketrans("", "", PUNCTUATION)

WORD_WEIGHT = 0.4
SUBSTRING_WEIGHT = 0.2
KEYWORD_WEIGHT = 0.3
LENGTH_WEIGHT = 0.1

SUBSTRING_BONUS = 0.5
THEMATIC_BONUS = 0.3

# Query vs stored question is a stronger signal than query vs stored answer.
QUESTION_TEXT_WEIGHT = 1.2
ANSWER_TEXT_WEIGHT = 0.8


class SimilarityBreakdown(NamedTuple):
    word_overlap: float
    substring: float
    keyword: float
    length_penalty: float

    @property
    def total(self) -> float:
        return (
            self.word_overlap * WORD_WEIGHT
            + self.substring * SUBSTRING_WEIGHT
            + self.keyword * KEYWORD_WEIGHT
            + self.length_penalty * LENGTH_WEIGHT
        )


def normalize_text(text: str) -> str:
    """Lower-case, strip diacritics and `. , ¿ ? ¡ !`, blank out BOMs, trim."""
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.translate(_PUNCTUATION_TABLE).replace("\ufeff", " ").strip()


def word_overlap_score(s1: str, s2: str) -> float:
    # Words of s1 found in s2; repeated words in s1 each count.
    words1 = s1.split()
    words2 = s2.split()
    if not words1 or not words2:
        return 0.0
    common = sum(1 for word in words1 if word in words2)
    return common / max(len(words1), len(words2))


def substring_score(s1: str, s2: str) -> float:
    return SUBSTRING_BONUS if (s2 in s1 or s1 in s2) else 0.0


def keyword_score(
    s1: str,
    s2: str,
    thematic: Mapping[str, Tuple[str, ...]] = THEMATIC_KEYWORDS,
) -> float:
    score = 0.0
    for words in thematic.values():
        if any(w in s1 for w in words) and any(w in s2 for w in words):
            score += THEMATIC_BONUS
    return score


def length_penalty_score(s1: str, s2: str) -> float:
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    diff = abs(len(s1) - len(s2)) / longest
    return 1 - diff * 0.5


def similarity_breakdown(
    str1: str,
    str2: str,
    thematic: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> SimilarityBreakdown:
    s1 = normalize_text(str1)
    s2 = normalize_text(str2)
    return SimilarityBreakdown(
        word_overlap=word_overlap_score(s1, s2),
        substring=substring_score(s1, s2),
        keyword=keyword_score(s1, s2, THEMATIC_KEYWORDS if thematic is None else thematic),
        length_penalty=length_penalty_score(s1, s2),
    )


def calculate_similarity(
    str1: str,
    str2: str,
    thematic: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> float:
    return similarity_breakdown(str1, str2, thematic).total


def question_similarity(
    query: str,
    question: Question,
    thematic: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> float:
    """Score a stored Q&A pair against a user query (query always first)."""
    return max(
        calculate_similarity(query, question.question, thematic) * QUESTION_TEXT_WEIGHT,
        calculate_similarity(query, question.answer, thematic) * ANSWER_TEXT_WEIGHT,
    )
