"""
Word Validity Pipeline

Decides whether a typed word is an acceptable guess. The decision is an
ordered chain of tiers, the first tier to reach a verdict wins:

1. length      - normalized word must have WORD_LENGTH letters
2. word_list   - canonical exact-match list, accepted ahead of any heuristic
3. structure   - coarse Arabic script and letter-pattern sanity check
4. cache       - words accepted earlier through the dictionary or similarity tiers
5. dictionary  - larger reference dictionary (optional)
6. similarity  - in-order letter alignment against the canonical list

The similarity tier approximates shared-root detection and is permissive on
purpose; it is not a morphological analyzer.
"""

import asyncio
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from ..config.game_settings import ARABIC_DIACRITICS, NON_ARABIC_LETTERS, WORD_LENGTH
from ..storage import KeyValueStorage, RecordKind, StorageKey
from ..utils.game_logger import game_logger

ARABIC_WORD = re.compile(r'^[\u0621-\u064A]+$')
# alif, waw, ya, meem, lam, noon
ESSENTIAL_LETTERS = re.compile(r'[اويملن]')
# alif, waw, ya, alif maqsura, ta marbuta, hamza on waw, hamza on ya
VOWEL_LETTERS = re.compile(r'[اويىةؤئ]')
DOUBLED_CONSONANTS = re.compile(r'(كك|سس|شش|فف)')
RARE_LETTER_PREFIX = re.compile(r'^[ظذثغ]{2}')

MATCH_THRESHOLD = 3
STRONG_MATCH_THRESHOLD = 4
REQUIRED_STRONG_MATCHES = 2


def normalize_arabic_word(word: str) -> str:
    """Removes diacritics and every character outside the Arabic letter block."""
    return NON_ARABIC_LETTERS.sub('', ARABIC_DIACRITICS.sub('', word))


def is_likely_arabic_word(word: str) -> bool:
    """Heuristic gate: looks like an Arabic word, not a grammar check."""
    if not ARABIC_WORD.match(word):
        return False
    if not ESSENTIAL_LETTERS.search(word):
        return False
    if not VOWEL_LETTERS.search(word):
        return False
    return not DOUBLED_CONSONANTS.search(word) and not RARE_LETTER_PREFIX.match(word)


def ordered_alignment(candidate: str, known_word: str, limit: int = STRONG_MATCH_THRESHOLD) -> int:
    """
    Counts candidate letters found in known_word in the same order.

    Each letter is searched after the previous match; counting stops at limit.
    """
    match_count = 0
    last_match_index = -1
    for char in candidate:
        next_index = known_word.find(char, last_match_index + 1)
        if next_index > last_match_index:
            match_count += 1
            last_match_index = next_index
            if match_count >= limit:
                break
    return match_count


class ValidityCache:
    """
    Append-only set of accepted words that are not in the canonical list.

    Loaded lazily from storage on first use and written through on add.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.key = StorageKey(RecordKind.VALID_WORDS_CACHE)
        self._words: Optional[Set[str]] = None

    def _load(self) -> Set[str]:
        if self._words is None:
            try:
                stored = self.storage.get_json(self.key) or []
                if not isinstance(stored, list):
                    raise ValueError("word cache must be an array")
                self._words = {str(word) for word in stored}
            except ValueError as e:
                game_logger.logger.warning(f"Discarding malformed word cache: {e}")
                self._words = set()
        return self._words

    def __contains__(self, word: str) -> bool:
        return word in self._load()

    def __len__(self) -> int:
        return len(self._load())

    def add(self, word: str) -> None:
        words = self._load()
        if word in words:
            return
        words.add(word)
        self.storage.set_json(self.key, sorted(words))


@dataclass
class ValidityResult:
    """Outcome of a pipeline run."""
    accepted: bool
    word: str
    tier: str
    should_cache: bool = False
    failed: bool = False


class ValidityTier:
    """
    One stage of the pipeline.

    decide() returns True to accept, False to reject, None to defer to the
    next tier.
    """
    name = 'tier'
    caches = False

    def decide(self, word: str) -> Optional[bool]:
        raise NotImplementedError


class LengthTier(ValidityTier):
    name = 'length'

    def __init__(self, word_length: int = WORD_LENGTH):
        self.word_length = word_length

    def decide(self, word: str) -> Optional[bool]:
        return None if len(word) == self.word_length else False


class StructureTier(ValidityTier):
    name = 'structure'

    def decide(self, word: str) -> Optional[bool]:
        return None if is_likely_arabic_word(word) else False


class WordListTier(ValidityTier):
    name = 'word_list'

    def __init__(self, words: Iterable[str]):
        self.words = frozenset(words)

    def decide(self, word: str) -> Optional[bool]:
        return True if word in self.words else None


class CacheTier(ValidityTier):
    name = 'cache'

    def __init__(self, cache: ValidityCache):
        self.cache = cache

    def decide(self, word: str) -> Optional[bool]:
        return True if word in self.cache else None


class DictionaryTier(WordListTier):
    name = 'dictionary'
    caches = True


class SimilarityTier(ValidityTier):
    """
    Accepts a word sharing an in-order run of letters with listed words.

    Needs at least one listed word with MATCH_THRESHOLD aligned letters and
    at least REQUIRED_STRONG_MATCHES distinct listed words with
    STRONG_MATCH_THRESHOLD aligned letters.
    """
    name = 'similarity'
    caches = True

    def __init__(self, words: Iterable[str]):
        self.words = list(dict.fromkeys(words))

    def decide(self, word: str) -> Optional[bool]:
        has_match = False
        strong_matches = 0
        for known_word in self.words:
            aligned = ordered_alignment(word, known_word)
            if aligned >= MATCH_THRESHOLD:
                has_match = True
            if aligned >= STRONG_MATCH_THRESHOLD:
                strong_matches += 1
                if strong_matches >= REQUIRED_STRONG_MATCHES:
                    break
        return has_match and strong_matches >= REQUIRED_STRONG_MATCHES


class ValidityPipeline:
    """Ordered chain of validity tiers with a fail-closed runner."""

    def __init__(self,
                 word_list: List[str],
                 cache: ValidityCache,
                 dictionary: Optional[Iterable[str]] = None,
                 word_length: int = WORD_LENGTH):
        self.word_list_tier = WordListTier(word_list)
        self.cache_tier = CacheTier(cache)
        self.dictionary_tier = DictionaryTier(dictionary) if dictionary is not None else None

        self.tiers: List[ValidityTier] = [LengthTier(word_length), self.word_list_tier,
                                          StructureTier(), self.cache_tier]
        if self.dictionary_tier is not None:
            self.tiers.append(self.dictionary_tier)
        self.tiers.append(SimilarityTier(word_list))

    @property
    def cache(self) -> ValidityCache:
        return self.cache_tier.cache

    def is_known(self, candidate: str) -> bool:
        """True when the word is in the canonical list or the cache."""
        word = normalize_arabic_word(candidate)
        return bool(self.word_list_tier.decide(word) or self.cache_tier.decide(word))

    async def check(self, candidate: str) -> ValidityResult:
        """
        Runs the tiers in order. Any internal error rejects the word.
        """
        # Yield once so callers can publish a pending state before the verdict
        await asyncio.sleep(0)

        word = candidate
        try:
            word = normalize_arabic_word(candidate)
            for tier in self.tiers:
                decision = tier.decide(word)
                if decision is None:
                    continue
                return ValidityResult(
                    accepted=decision,
                    word=word,
                    tier=tier.name,
                    should_cache=bool(decision and tier.caches)
                )
            return ValidityResult(accepted=False, word=word, tier='exhausted')
        except Exception as e:
            game_logger.logger.error(f"Word validation error for {candidate!r}: {e}")
            return ValidityResult(accepted=False, word=str(word), tier='error', failed=True)

    async def is_acceptable(self, candidate: str) -> bool:
        result = await self.check(candidate)
        return result.accepted
