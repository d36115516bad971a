from rapidfuzz.distance import Levenshtein

from .targets import GuessTarget

# A guess that contains the answer may be at most this much longer than it
CONTAINMENT_LENGTH_RATIO = 1.6


def distance(a: str, b: str) -> int:
    """Unweighted single-character insert/delete/substitute edit distance."""
    return Levenshtein.distance(a, b)


def is_match(proposition: str, target: GuessTarget) -> bool:
    """Decide whether an already-normalized proposition matches ``target``.

    Accepts typos up to ``target.max_distance`` edits, or a proposition that
    embeds the expected answer without rambling far beyond its length.
    """
    if not proposition:
        return False
    if distance(proposition, target.to_guess) <= target.max_distance:
        return True
    return (
        target.to_guess in proposition
        and len(proposition) <= CONTAINMENT_LENGTH_RATIO * len(target.to_guess)
    )
