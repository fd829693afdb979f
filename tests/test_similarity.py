from app.services.similarity import SIMILARITY_THRESHOLD, best_similarity, jaccard, similarity_fallback
from conftest import make_rule


def test_jaccard_basics():
    assert jaccard(["a", "b"], ["b", "c"]) == 1 / 3
    assert jaccard([], []) == 0
    assert jaccard(["x"], []) == 0


def test_best_scoring_rule_above_threshold_wins():
    strong = make_rule(1, ["cuánto sale"])              # {cuanto, sale} vs {cuanto, sale, notebook} -> 2/3
    weak = make_rule(2, ["notebook nueva usada"])       # 1/5 = 0.20
    best = best_similarity("cuanto sale la notebook", [weak, strong])
    assert best is not None
    rule, score = best
    assert rule is strong
    assert score >= SIMILARITY_THRESHOLD


def test_below_threshold_is_no_match():
    weak = make_rule(2, ["notebook nueva usada"])
    assert similarity_fallback("cuanto sale la notebook", [weak]) is None
    # una sola palabra en común sobre cuatro no alcanza
    assert similarity_fallback("cuanto sale la notebook", [make_rule(3, ["cuánto cuesta"])]) is None


def test_ties_keep_first_rule():
    a = make_rule(1, ["precio notebook"])
    b = make_rule(2, ["precio notebook"])
    assert similarity_fallback("precio notebook", [a, b]) is a


def test_rules_without_triggers_are_skipped():
    assert similarity_fallback("hola", [make_rule(1, []), make_rule(2, "roto")]) is None
