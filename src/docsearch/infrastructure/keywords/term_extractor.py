"""Frequency-based term extractor.

Candidates are unigrams, adjacent bigrams and trigrams, hyphenated compounds,
contextual numbers (years and other runs of four or more digits) and acronyms
taken from the original casing. Each candidate is scored by its whole-word
frequency in the normalized text, weighted towards longer and multi-word
terms, and the ranked list is split so that phrases are not crowded out by
single words.
"""

import re
import unicodedata
from collections import Counter
from dataclasses import dataclass

from docsearch.infrastructure.keywords.stopwords import STOPWORDS

MAX_TERMS = 50
MAX_SINGLE_WORDS = 30
MAX_PHRASES = 20

MIN_TOKEN_LENGTH = 4
MIN_BIGRAM_LENGTH = 8
MIN_TRIGRAM_LENGTH = 12
MIN_COMPOUND_LENGTH = 6
COMMON_TERM_RATIO = 0.1

_NON_WORD = re.compile(r"[^\w\s-]|_")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_COMPOUND = re.compile(r"^[^\W_]+(?:-[^\W_]+)+$")
_CONTEXTUAL_NUMBER = re.compile(r"^(?:19\d{2}|20\d{2}|\d{4,})$")
_LETTER_WORD = re.compile(r"\b[^\W\d_]{2,}\b")


def normalize_text(text: str) -> str:
    """Lowercase, strip diacritics, keep letters/digits/whitespace/hyphens, collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    cleaned = _NON_WORD.sub(" ", stripped)
    return _WHITESPACE.sub(" ", cleaned).strip()


@dataclass(frozen=True)
class ScoredTerm:
    """Candidate term with its frequency and final score."""

    term: str
    frequency: int
    score: float

    @property
    def word_count(self) -> int:
        return self.term.count(" ") + 1


class FrequencyTermExtractor:
    """Extracts up to 50 ranked, unique keywords from plain text."""

    def __init__(self, stopwords: frozenset[str] = STOPWORDS) -> None:
        self._stopwords = stopwords

    def extract(self, text: str) -> list[str]:
        """Return ranked keywords: single words first, then phrases."""
        ranked = self.rank(text)[:MAX_TERMS]
        singles = [t.term for t in ranked if t.word_count == 1][:MAX_SINGLE_WORDS]
        phrases = [t.term for t in ranked if t.word_count > 1][:MAX_PHRASES]
        return (singles + phrases)[:MAX_TERMS]

    def rank(self, text: str) -> list[ScoredTerm]:
        """Score every candidate term, highest first; ties keep first-appearance order."""
        if not text or not text.strip():
            return []
        tokens = self._tokenize(text)
        if not tokens:
            return []

        candidates = self._candidates(tokens, self._acronyms(text))
        if not candidates:
            return []

        counts = Counter(tokens)
        counts.update(" ".join(pair) for pair in zip(tokens, tokens[1:]))
        counts.update(" ".join(triple) for triple in zip(tokens, tokens[1:], tokens[2:]))
        total = len(tokens)

        scored = [
            ScoredTerm(term=term, frequency=counts[term], score=self._score(term, counts[term], total))
            for term in candidates
        ]
        return sorted(scored, key=lambda t: t.score, reverse=True)

    def _tokenize(self, text: str) -> list[str]:
        tokens = (token.strip("-") for token in normalize_text(text).split(" "))
        return [token for token in tokens if token]

    def _acronyms(self, text: str) -> set[str]:
        """All-uppercase words of two or more letters, folded like the normalized text."""
        found: set[str] = set()
        for word in _LETTER_WORD.findall(text):
            if not word.isupper():
                continue
            folded = normalize_text(word)
            if folded and folded not in self._stopwords:
                found.add(folded)
        return found

    def _survives(self, token: str) -> bool:
        return (
            len(token) >= MIN_TOKEN_LENGTH
            and not token.isdigit()
            and token not in self._stopwords
        )

    def _candidates(self, tokens: list[str], acronyms: set[str]) -> list[str]:
        """Candidate terms in order of first appearance."""
        keep = [self._survives(token) for token in tokens]
        seen: dict[str, None] = {}
        n = len(tokens)
        for i, token in enumerate(tokens):
            compound = _HYPHEN_COMPOUND.match(token) and len(token) >= MIN_COMPOUND_LENGTH
            if keep[i] or compound or token in acronyms or _CONTEXTUAL_NUMBER.match(token):
                seen.setdefault(token)
            if i + 1 < n and keep[i] and keep[i + 1]:
                bigram = f"{token} {tokens[i + 1]}"
                if len(bigram) >= MIN_BIGRAM_LENGTH:
                    seen.setdefault(bigram)
            if i + 2 < n and keep[i] and keep[i + 1] and keep[i + 2]:
                trigram = f"{token} {tokens[i + 1]} {tokens[i + 2]}"
                if len(trigram) >= MIN_TRIGRAM_LENGTH:
                    seen.setdefault(trigram)
        return list(seen)

    def _score(self, term: str, frequency: int, total_tokens: int) -> float:
        length = len(term)
        if length >= 12:
            length_bonus = 2.0
        elif length >= 8:
            length_bonus = 1.5
        else:
            length_bonus = 1.0

        words = term.count(" ") + 1
        if words == 3:
            ngram_bonus = 1.8
        elif words == 2:
            ngram_bonus = 1.3
        else:
            ngram_bonus = 1.0

        hyphen_bonus = 1.4 if "-" in term else 1.0
        numeric_bonus = 1.2 if any(c.isdigit() for c in term) else 1.0
        common_penalty = 0.7 if frequency > total_tokens * COMMON_TERM_RATIO else 1.0

        return frequency * length_bonus * ngram_bonus * hyphen_bonus * numeric_bonus * common_penalty
