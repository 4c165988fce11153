"""Tests for order creation, pricing and listing in the service layer."""

import asyncio

import pytest

from zaiboost_api.app.core.crypto import UNAVAILABLE, decrypt_secret
from zaiboost_api.app.core.errors import NotFound
from zaiboost_api.app.models import CatalogItem, OrderUpdate
from zaiboost_api.app.schemas.order import OrderCreate
from zaiboost_api.app.services.catalog_service import CatalogService
from zaiboost_api.app.services.order_service import OrderService
from zaiboost_api.app.services.statistics_service import StatisticsService


def run(coro):
    return asyncio.run(coro)


def _claims(user):
    return {"id": user.id, "username": user.username, "role": user.role}


def _endgame_id(ledger):
    return next(s.id for s in ledger.list_services() if s.category == "endgame")


class TestPricingRule:

    def test_daily_price_is_per_day(self):
        item = CatalogItem(id=1, game="genshin", category="daily", name="d", price_base=0, price_per_unit=5000, unit_name="hari")

        assert item.quote(0, 7) == 35000

    def test_explore_price_is_per_percent(self):
        item = CatalogItem(id=1, game="wuwa", category="explore", name="e", price_base=0, price_per_unit=3000, unit_name="%")

        assert item.quote(40, 100) == 180000

    def test_backwards_range_costs_nothing_extra(self):
        item = CatalogItem(id=1, game="wuwa", category="explore", name="e", price_base=1000, price_per_unit=3000, unit_name="%")

        assert item.quote(80, 20) == 1000

    @pytest.mark.parametrize("start,target", [(0, 0), (0, 1), (3, 50), (90, 10)])
    def test_endgame_price_ignores_range(self, start, target):
        item = CatalogItem(id=1, game="genshin", category="endgame", name="Abyss", price_base=60000, price_per_unit=0, unit_name="clear")

        assert item.quote(start, target) == 60000

    def test_catalog_service_quote(self, ledger):
        assert run(CatalogService.quote(1, 0, 7)) == 35000

    def test_catalog_service_quote_unknown(self, ledger):
        with pytest.raises(NotFound):
            run(CatalogService.quote(999))


class TestCreateOrder:

    def test_client_total_stored_verbatim(self, ledger, customer, order_payload):
        order_payload["total_price"] = 1

        order = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        assert order.total_price == 1

    def test_matching_total_accepted(self, ledger, customer, order_payload):
        order = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        assert order.total_price == 35000
        assert order.status == "pending"
        assert order.current_value == order.start_value == 0
        assert order.target_value == 7
        assert order.game == "genshin"
        assert order.user_id == customer.id

    def test_missing_total_defaults_to_quote(self, ledger, customer, order_payload):
        del order_payload["total_price"]
        order_payload["start_value"] = 2

        order = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        assert order.total_price == 25000

    def test_endgame_total_is_base_price(self, ledger, customer, order_payload):
        del order_payload["total_price"]
        order_payload.update(service_id=_endgame_id(ledger), start_value=0, target_value=36)

        order = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        assert order.total_price == 60000

    def test_game_password_is_encrypted(self, ledger, customer, order_payload):
        order = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        assert order.game_password != "hunter2!"
        assert decrypt_secret(order.game_password) == "hunter2!"

    def test_unknown_service(self, ledger, customer, order_payload):
        order_payload["service_id"] = 999

        with pytest.raises(NotFound):
            run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        assert ledger.list_orders() == []


class TestListing:

    def test_user_listing_is_enriched_and_newest_first(self, ledger, customer, order_payload):
        first = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))
        second = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        orders = run(OrderService.list_user_orders(customer.id))

        assert [o.id for o in orders] == [second.id, first.id]
        assert orders[0].service_name == "Genshin: Paket Mingguan (7 Hari)"
        assert orders[0].service_category == "daily"
        assert "game_password" not in orders[0].model_dump()

    def test_admin_listing_decrypts_and_names_owner(self, ledger, customer, order_payload):
        run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))

        [order] = run(OrderService.list_all_orders())

        assert order.username == "traveler"
        assert order.game_password == "hunter2!"

    def test_admin_listing_survives_corrupt_envelope(self, ledger, customer, order_payload):
        created = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))
        ledger.get_order(created.id).game_password = "garbage"

        [order] = run(OrderService.list_all_orders())

        assert order.game_password == UNAVAILABLE


class TestUpdateAndStats:

    def test_update_unknown_order(self, ledger):
        with pytest.raises(NotFound):
            run(OrderService.update_order(42, OrderUpdate(status="processing")))

    def test_terminal_order_can_still_be_edited(self, ledger, customer, order_payload):
        order = run(OrderService.create_order(OrderCreate(**order_payload), _claims(customer)))
        run(OrderService.update_order(order.id, OrderUpdate(status="cancelled")))

        updated = run(OrderService.update_order(order.id, OrderUpdate(status="processing", current_value=3)))

        assert updated.status == "processing"
        assert updated.current_value == 3

    def test_overview_counts(self, ledger, customer, other_customer, admin, order_payload):
        claims = _claims(customer)
        a = run(OrderService.create_order(OrderCreate(**order_payload), claims))
        b = run(OrderService.create_order(OrderCreate(**{**order_payload, "total_price": 20000}), claims))
        c = run(OrderService.create_order(OrderCreate(**order_payload), claims))
        run(OrderService.create_order(OrderCreate(**order_payload), claims))
        run(OrderService.update_order(a.id, OrderUpdate(status="completed")))
        run(OrderService.update_order(b.id, OrderUpdate(status="completed")))
        run(OrderService.update_order(c.id, OrderUpdate(status="cancelled")))

        stats = run(StatisticsService.overview())

        assert stats.revenue == 55000
        assert stats.completed_orders == 2
        assert stats.active_orders == 1
        assert stats.total_users == 2
