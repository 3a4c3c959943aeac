"""Tests for cryptobot/registry.py"""

from cryptobot.models import AlertRecord


class TestSetAlert:

    def test_set_then_list_yields_single_record(self, registry):
        registry.set_alert(42, "bitcoin", 50000)
        alerts = list(registry.list_alerts(42))
        assert alerts == [AlertRecord(user_id=42, coin="bitcoin", target_price=50000.0)]

    def test_second_set_overwrites_first(self, registry):
        registry.set_alert(42, "bitcoin", 50000)
        registry.set_alert(42, "bitcoin", 61000)
        alerts = list(registry.list_alerts(42))
        assert len(alerts) == 1
        assert alerts[0].target_price == 61000.0

    def test_coin_is_lower_cased(self, registry):
        rec = registry.set_alert(7, "BTC", 1)
        assert rec.coin == "btc"
        assert (7, "btc") in registry

    def test_mixed_case_variants_share_a_key(self, registry):
        registry.set_alert(7, "Bitcoin", 1)
        registry.set_alert(7, "BITCOIN", 2)
        assert len(registry) == 1
        assert registry.get((7, "bitcoin")).target_price == 2.0

    def test_unknown_coin_is_accepted(self, registry):
        registry.set_alert(7, "notacoin", 3)
        assert len(registry) == 1


class TestListAlerts:

    def test_only_own_records(self, registry):
        registry.set_alert(1, "bitcoin", 10)
        registry.set_alert(2, "bitcoin", 20)
        registry.set_alert(1, "eth", 30)
        mine = list(registry.list_alerts(1))
        assert {r.user_id for r in mine} == {1}
        assert [r.coin for r in mine] == ["bitcoin", "eth"]

    def test_insertion_order(self, registry):
        for coin in ("sol", "btc", "eth"):
            registry.set_alert(5, coin, 1)
        assert [r.coin for r in registry.list_alerts(5)] == ["sol", "btc", "eth"]

    def test_is_lazy(self, registry):
        registry.set_alert(5, "btc", 1)
        it = registry.list_alerts(5)
        assert not isinstance(it, list)
        assert next(it).coin == "btc"

    def test_empty_for_unknown_user(self, registry):
        registry.set_alert(5, "btc", 1)
        assert list(registry.list_alerts(6)) == []


class TestRemoveAlert:

    def test_remove_existing(self, registry):
        rec = registry.set_alert(5, "btc", 1)
        assert registry.remove_alert(rec.key) is True
        assert len(registry) == 0

    def test_remove_is_idempotent(self, registry):
        registry.set_alert(5, "btc", 1)
        registry.remove_alert((5, "btc"))
        assert registry.remove_alert((5, "btc")) is False
        assert registry.remove_alert((99, "nope")) is False

    def test_keys_is_a_snapshot(self, registry):
        registry.set_alert(1, "btc", 1)
        registry.set_alert(2, "eth", 1)
        keys = registry.keys()
        for k in keys:
            registry.remove_alert(k)
        assert keys == [(1, "btc"), (2, "eth")]
        assert len(registry) == 0
