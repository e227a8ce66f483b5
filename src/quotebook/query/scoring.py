# ABOUTME: Fuzzy subsequence scoring used to rank quotes against free-text queries.
# ABOUTME: Any callable with the Scorer signature can replace the default scorer.

from collections.abc import Callable

# A scorer returns None when the candidate does not match at all.
Scorer = Callable[[str, str], float | None]

# Points for every matched query character.
MATCH_SCORE = 16.0
# Extra points when a matched character directly follows the previous match.
CONSECUTIVE_BONUS = 8.0
# Extra points when a match starts a word (after a non-alphanumeric or at a camelCase hump).
BOUNDARY_BONUS = 10.0
# Penalty per candidate character skipped between two matched characters.
GAP_PENALTY = 1.0
# Penalty per candidate character, so shorter candidates rank above longer ones.
LENGTH_PENALTY = 0.1

_NO_MATCH = float("-inf")


def _is_boundary(candidate: str, index: int) -> bool:
    if index == 0:
        return True
    before = candidate[index - 1]
    current = candidate[index]
    if not before.isalnum():
        return True
    return before.islower() and current.isupper()


def subsequence_score(query: str, candidate: str) -> float | None:
    """Score how well query matches candidate as an ordered subsequence.

    Matching is case-insensitive and whitespace in the query is ignored, so
    "best times" matches "It was the best of times". Every query character
    must appear in the candidate in order; otherwise the result is None.

    The best alignment is found by dynamic programming over
    (query position, candidate position). An alignment earns MATCH_SCORE
    per character, CONSECUTIVE_BONUS for each adjacent pair, BOUNDARY_BONUS
    for characters that start a word, and loses GAP_PENALTY per skipped
    character between matches. LENGTH_PENALTY per candidate character is
    subtracted last. An empty query scores 0.0 against anything.
    """
    needle = [ch.lower() for ch in query if not ch.isspace()]
    if not needle:
        return 0.0
    if len(needle) > len(candidate):
        return None

    lowered = [ch.lower() for ch in candidate]
    size = len(lowered)
    bonuses = [BOUNDARY_BONUS if _is_boundary(candidate, j) else 0.0 for j in range(size)]

    # previous[j]: best score with the previous query character matched at j
    previous = [
        MATCH_SCORE + bonuses[j] if lowered[j] == needle[0] else _NO_MATCH for j in range(size)
    ]

    for char in needle[1:]:
        current = [_NO_MATCH] * size
        # best of previous[k] + GAP_PENALTY * k over k < j, so that
        # previous[k] - GAP_PENALTY * (j - k - 1) can be read off in O(1)
        running = _NO_MATCH
        for j in range(1, size):
            running = max(running, previous[j - 1] + GAP_PENALTY * (j - 1))
            if lowered[j] != char:
                continue
            via_gap = running - GAP_PENALTY * (j - 1)
            via_run = previous[j - 1] + CONSECUTIVE_BONUS
            best = max(via_gap, via_run)
            if best != _NO_MATCH:
                current[j] = best + MATCH_SCORE + bonuses[j]
        previous = current

    best = max(previous)
    if best == _NO_MATCH:
        return None
    return best - LENGTH_PENALTY * size
