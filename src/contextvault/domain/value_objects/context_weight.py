"""Context weight - per-source retrieval priority."""

DEFAULT_CONTEXT_WEIGHT = 100
MIN_CONTEXT_WEIGHT = 0
MAX_CONTEXT_WEIGHT = 100


def is_valid_weight(weight: object) -> bool:
    """True for integers in [0, 100]; bools are rejected."""
    if isinstance(weight, bool) or not isinstance(weight, int):
        return False
    return MIN_CONTEXT_WEIGHT <= weight <= MAX_CONTEXT_WEIGHT
