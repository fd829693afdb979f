import pytest

from app.services.text import normalize, tokenize
from app.services.triggers import includes_trigger, parse_triggers


def test_normalize_strips_case_and_accents():
    assert normalize("CAFÉ") == normalize("cafe") == "cafe"
    assert normalize("Miércoles PRÓXIMO") == "miercoles proximo"
    assert normalize(None) == ""


@pytest.mark.parametrize("text", ["CAFÉ", "¿Cuánto sale la Ñandú?", "ya normalizado", ""])
def test_normalize_is_idempotent(text):
    assert normalize(normalize(text)) == normalize(text)


def test_tokenize_drops_short_tokens():
    assert tokenize("¿Cuánto sale la notebook X1?") == ["cuanto", "sale", "notebook"]
    assert tokenize("a, de, la") == []


def test_short_trigger_needs_word_boundary():
    assert includes_trigger(normalize("gracias por todo"), "ia") is False
    assert includes_trigger(normalize("quiero saber de IA hoy"), "ia") is True
    assert includes_trigger(normalize("ia"), "ia") is True
    assert includes_trigger(normalize("hey!"), "hey") is True
    assert includes_trigger(normalize("heyyy"), "hey") is False


def test_long_trigger_is_substring():
    assert includes_trigger(normalize("cual es el precio del producto"), "precio") is True
    assert includes_trigger(normalize("PRECIOS?"), "Precio") is True
    assert includes_trigger(normalize("cual es el horario"), "dirección") is False


def test_empty_trigger_never_matches():
    assert includes_trigger("hola", "") is False
    assert includes_trigger("hola", "   ".strip()) is False


def test_parse_triggers_fails_open():
    assert parse_triggers(["hola", "buenas"]) == ["hola", "buenas"]
    assert parse_triggers('["precio", "valor"]') == ["precio", "valor"]
    assert parse_triggers("{no es json") == []
    assert parse_triggers('{"a": 1}') == []
    assert parse_triggers(None) == []
    assert parse_triggers(42) == []
