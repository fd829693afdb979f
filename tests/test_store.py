from decimal import Decimal

import pytest

from app.core.default_rules import all_default_rules
from app.db.models.product import Product
from app.services.bot_configs import get_or_create_config, get_profile, update_config
from app.services.products import best_product_match, create_product, find_by_name, list_catalog
from app.services.rules import (
    create_rule, delete_rule, list_rules, restore_default_rules, seed_default_rules, update_rule,
)


@pytest.mark.asyncio
async def test_get_or_create_config_once(db_session):
    cfg, created = await get_or_create_config(db_session, "t")
    assert created is True
    assert (cfg.mode, cfg.slot_minutes) == ("sales", 30)

    again, created = await get_or_create_config(db_session, "t")
    assert created is False
    assert again.bot_id == "t"


@pytest.mark.asyncio
async def test_update_config_and_profile(db_session):
    cfg = await update_config(db_session, "t", {"mode": "reservations", "hours": "9 a 18"})
    assert cfg.mode == "reservations"
    profile = get_profile(cfg)
    assert profile["hours"] == "9 a 18"
    assert profile["address"] is None


@pytest.mark.asyncio
async def test_list_rules_order_and_mode_filter(db_session):
    a = await create_rule(db_session, bot_id="t", mode="sales", condition=None, triggers=["a"], action="A", priority=10)
    b = await create_rule(db_session, bot_id="t", mode="common", condition=None, triggers=["b"], action="B", priority=90)
    c = await create_rule(db_session, bot_id="t", mode="sales", condition=None, triggers=["c"], action="C", priority=10)
    await create_rule(db_session, bot_id="t", mode="reservations", condition=None, triggers=["d"], action="D")
    await create_rule(db_session, bot_id="otro", mode="sales", condition=None, triggers=["e"], action="E")

    rules = await list_rules(db_session, "t", {"sales", "common"})
    assert [r.id for r in rules] == [b.id, a.id, c.id]
    assert len(await list_rules(db_session, "t")) == 4


@pytest.mark.asyncio
async def test_update_and_delete_rule(db_session):
    rule = await create_rule(db_session, bot_id="t", mode="sales", condition=None, triggers=["a"], action="A")
    updated = await update_rule(db_session, rule.id, triggers=["x", "y"], action="B")
    assert updated.triggers == ["x", "y"]
    assert updated.action == "B"

    assert await update_rule(db_session, 999, action="nada") is None
    assert await delete_rule(db_session, rule.id) is True
    assert await delete_rule(db_session, rule.id) is False


@pytest.mark.asyncio
async def test_seed_only_when_empty(db_session):
    n = await seed_default_rules(db_session, "t")
    assert n == len(all_default_rules())
    assert await seed_default_rules(db_session, "t") == 0
    assert len(await list_rules(db_session, "t")) == n


@pytest.mark.asyncio
async def test_restore_defaults_replaces_everything(db_session):
    await create_rule(db_session, bot_id="t", mode="sales", condition=None, triggers=["a"], action="custom")
    n = await restore_default_rules(db_session, "t")
    rules = await list_rules(db_session, "t")
    assert len(rules) == n == len(all_default_rules())
    assert all(r.action != "custom" for r in rules)


@pytest.mark.asyncio
async def test_products_lookup(db_session):
    await create_product(db_session, bot_id="t", name="Notebook X", price=Decimal("1500.00"), stock=3)
    await create_product(db_session, bot_id="t", name="Mouse", price=Decimal("20"), stock=10)
    await create_product(db_session, bot_id="otro", name="Teclado", price=Decimal("50"), stock=1)

    found = await find_by_name(db_session, "t", "  notebook x ")
    assert found is not None and found.stock == 3
    assert await find_by_name(db_session, "t", "Teclado") is None
    assert await list_catalog(db_session, "t") == ["Mouse", "Notebook X"]
    assert await list_catalog(db_session, "t", limit=1) == ["Mouse"]


def test_best_product_match_prefers_longest_name():
    short = Product(name="Notebook X", price=Decimal("1"), stock=1)
    long = Product(name="Notebook X Pro", price=Decimal("2"), stock=1)
    other = Product(name="Mouse", price=Decimal("3"), stock=1)

    assert best_product_match([short, long, other], "precio de la Notebook X Pro?") is long
    assert best_product_match([other], "tienen teclados?") is None
    assert best_product_match([short, other], "hay notebooks?") is short
