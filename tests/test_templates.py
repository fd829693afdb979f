from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from app.services.templates import build_context, fill_template, has_unresolved, placeholders


def test_missing_placeholder_is_left_verbatim():
    out = fill_template("Hola {name}, el precio es {price}", {"name": "Acme"})
    assert out == "Hola Acme, el precio es {price}"
    assert has_unresolved(out)


def test_identifiers_are_case_insensitive():
    assert fill_template("Hola {NAME}", {"name": "Acme"}) == "Hola Acme"
    assert fill_template("Hola {name}", {"Name": "Acme"}) == "Hola Acme"
    # sin valor queda tal como estaba escrito
    assert fill_template("Precio {Price}", {}) == "Precio {Price}"


def test_empty_or_none_values_count_as_missing():
    assert fill_template("{hours}", {"hours": ""}) == "{hours}"
    assert fill_template("{hours}", {"hours": None}) == "{hours}"


def test_non_identifier_braces_are_untouched():
    assert fill_template("{1} y {a-b} y {}", {"a": "x"}) == "{1} y {a-b} y {}"
    assert has_unresolved("{1}") is False


def test_placeholders_lists_lowercase_names():
    assert placeholders("{Product_Name} cuesta ${price}") == ["product_name", "price"]


def test_build_context_from_profile_product_and_date():
    profile = {"name": "Acme", "hours": "9 a 18", "address": None, "phone": ""}
    product = SimpleNamespace(name="Notebook X", price=Decimal("1500.00"), stock=3)
    ctx = build_context(
        profile, product=product, when=datetime(2026, 10, 23, 10, 0),
        catalog=["Notebook X", "Mouse"], when_text="23/10/2026 10:00",
    )
    assert ctx == {
        "name": "Acme",
        "hours": "9 a 18",
        "product_catalog": "Notebook X, Mouse",
        "product_name": "Notebook X",
        "price": "1500.00",
        "stock": "3",
        "date_time": "23/10/2026 10:00",
    }
