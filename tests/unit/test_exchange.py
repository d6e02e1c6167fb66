"""Unit tests for messages, exchanges and clocks."""

import simpy

from routemeter.core import Exchange, Message, SimulationClock, SystemClock


class TestMessage:
    """Test header access."""

    def test_get_header_default(self):
        assert Message().get_header("missing", 3) == 3

    def test_none_header_treated_as_absent(self):
        assert Message(headers={"h": None}).get_header("h", "d") == "d"

    def test_get_header_conversion(self):
        assert Message(headers={"h": "2.5"}).get_header("h", as_type=float) == 2.5

    def test_failed_conversion_returns_default(self):
        message = Message(headers={"h": "abc"})
        assert message.get_header("h", 1.0, as_type=float) == 1.0

    def test_remove_headers_by_prefix(self):
        message = Message(headers={"RouteMeterName": "x", "RouteMeterTags": {}, "Keep": 1})
        assert message.remove_headers("RouteMeter") == 2
        assert message.headers == {"Keep": 1}

    def test_headers_copied(self):
        headers = {"a": 1}
        message = Message(headers=headers)
        message.set_header("b", 2)
        assert headers == {"a": 1}
        assert message.remove_header("b") == 2


class TestExchange:
    """Test exchange property slots."""

    def test_defaults(self):
        exchange = Exchange()
        assert exchange.exchange_id
        assert exchange.message.headers == {}
        assert not exchange.failed

    def test_property_slots(self):
        exchange = Exchange(exchange_id="e-1")
        exchange.set_property("timer:x", 1)
        assert exchange.get_property("timer:x") == 1
        assert exchange.remove_property("timer:x") == 1
        assert exchange.remove_property("timer:x") is None

    def test_failed(self):
        exchange = Exchange()
        exchange.exception = ValueError("bad")
        assert exchange.failed

    def test_unique_ids(self):
        assert Exchange().exchange_id != Exchange().exchange_id


class TestClocks:
    """Test clock implementations."""

    def test_simulation_clock_follows_env(self):
        env = simpy.Environment()
        clock = SimulationClock(env)
        assert clock.now() == 0
        env.run(until=5)
        assert clock.now() == 5

    def test_system_clock_monotonic(self):
        clock = SystemClock()
        assert clock.now() <= clock.now()
