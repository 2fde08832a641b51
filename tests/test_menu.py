"""Menu item pricing tests."""

import pytest

from coffee_shop.domain import Coffee, CoffeeSize, CoffeeType, PlainItem


class TestPlainItem:
    def test_price_is_base_price(self):
        croissant = PlainItem(id=1, name="Croissant", base_price=3.25, category="Pastry")
        assert croissant.effective_price() == pytest.approx(3.25)
        assert croissant.item_type == "Plain"
        assert croissant.kind == "plain"

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            PlainItem(id=1, name="Broken", base_price=-1)

    def test_set_base_price_ignores_negative(self):
        item = PlainItem(id=1, name="Tea", base_price=2.0)
        item.set_base_price(-5)
        assert item.base_price == 2.0
        item.set_base_price(2.5)
        assert item.base_price == 2.5


class TestCoffee:
    def test_defaults(self):
        coffee = Coffee(id=1, name="Americano", base_price=3.0)
        assert coffee.category == "Coffee"
        assert coffee.coffee_type is CoffeeType.AMERICANO
        assert coffee.size is CoffeeSize.MEDIUM
        assert coffee.is_hot is True
        assert coffee.customizations == []

    def test_large_with_two_customizations(self):
        coffee = Coffee(id=1, name="Latte", base_price=4.00, size=CoffeeSize.LARGE)
        coffee.add_customization("oat milk")
        coffee.add_customization("extra shot")
        assert coffee.effective_price() == pytest.approx(7.40)

    @pytest.mark.parametrize(
        "size, expected",
        [(CoffeeSize.SMALL, 2.50), (CoffeeSize.MEDIUM, 3.25), (CoffeeSize.LARGE, 4.00)],
    )
    def test_size_multiplier(self, size, expected):
        coffee = Coffee(id=1, name="Espresso", base_price=2.50, size=size)
        assert coffee.effective_price() == pytest.approx(expected)

    def test_blank_customization_ignored(self):
        coffee = Coffee(id=1, name="Mocha", base_price=5.0)
        coffee.add_customization("   ")
        coffee.add_customization(None)
        coffee.add_customization("  whipped cream ")
        assert coffee.customizations == ["whipped cream"]

    def test_remove_and_clear_customizations(self):
        coffee = Coffee(id=1, name="Mocha", base_price=5.0)
        for extra in ("vanilla", "caramel", "vanilla"):
            coffee.add_customization(extra)
        coffee.remove_customization("vanilla")
        assert coffee.customizations == ["caramel", "vanilla"]
        coffee.clear_customizations()
        assert coffee.customizations == []

    def test_configured_copy_leaves_catalog_item_alone(self):
        catalog = Coffee(id=3, name="Latte", base_price=4.50, coffee_type=CoffeeType.LATTE)
        drink = catalog.configured(size=CoffeeSize.SMALL, is_hot=False, customizations=["soy milk"])
        assert drink.size is CoffeeSize.SMALL
        assert drink.is_hot is False
        assert drink.customizations == ["soy milk"]
        assert drink.kind == "coffee"
        assert catalog.size is CoffeeSize.MEDIUM
        assert catalog.customizations == []

    def test_configured_keeps_defaults_when_unset(self):
        catalog = Coffee(id=3, name="Latte", base_price=4.50)
        drink = catalog.configured()
        assert drink.size is CoffeeSize.MEDIUM
        assert drink.is_hot is True
        assert drink.effective_price() == pytest.approx(4.50 * 1.3)
