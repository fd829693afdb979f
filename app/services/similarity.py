from typing import Iterable, Optional, Sequence

from app.services.text import tokenize
from app.services.triggers import parse_triggers

# umbral conservador: una sola palabra genérica en común no alcanza
SIMILARITY_THRESHOLD = 0.34

def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    A, B = set(a), set(b)
    union = len(A | B) or 1
    return len(A & B) / union

def best_similarity(message: str, rules: Sequence) -> Optional[tuple]:
    """(regla, score) con mayor Jaccard >= umbral; ante empate gana la primera."""
    msg_tokens = tokenize(message)
    best = None
    for rule in rules:
        for trigger in parse_triggers(rule.triggers):
            score = jaccard(msg_tokens, tokenize(trigger))
            if score < SIMILARITY_THRESHOLD:
                continue
            if best is None or score > best[1]:
                best = (rule, score)
    return best

def similarity_fallback(message: str, rules: Sequence):
    best = best_similarity(message, rules)
    return best[0] if best else None
