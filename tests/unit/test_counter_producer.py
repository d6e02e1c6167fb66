"""Unit tests for the counter producer."""

from unittest.mock import MagicMock

import pytest

from routemeter.core import Exchange, Message
from routemeter.core.constants import (
    HEADER_COUNTER_DECREMENT,
    HEADER_COUNTER_INCREMENT,
    HEADER_METRIC_NAME,
)
from routemeter.endpoint import MetricsEndpoint
from routemeter.naming import Tags
from routemeter.producers import CounterProducer
from routemeter.registry import MeterRegistry

METRICS_NAME = "metrics.name"
INCREMENT = 100000.0
DECREMENT = 91929199.0


@pytest.fixture
def registry():
    registry = MagicMock()
    registry.counter.return_value = MagicMock()
    return registry


def make_producer(registry, **endpoint_kwargs):
    endpoint = MetricsEndpoint("counter", METRICS_NAME, registry, **endpoint_kwargs)
    return endpoint.create_producer()


class TestCounterProducer:
    """Test counter emission against a mocked registry."""

    def test_create_producer(self, registry):
        """Test that a counter endpoint creates a CounterProducer."""
        producer = make_producer(registry)
        assert isinstance(producer, CounterProducer)
        assert producer.registry is registry

    def test_static_increment_only(self, registry):
        """Test static increment 5 with no decrement and no override."""
        producer = make_producer(registry, increment=5)
        producer.process(Exchange())

        counter = registry.counter.return_value
        registry.counter.assert_called_once_with(METRICS_NAME, Tags.empty())
        counter.increment.assert_called_once_with(5)
        counter.decrement.assert_not_called()

    def test_decrement_only(self, registry):
        """Test a static decrement with no increment."""
        producer = make_producer(registry, decrement=DECREMENT)
        producer.process(Exchange())

        counter = registry.counter.return_value
        counter.decrement.assert_called_once_with(DECREMENT)
        counter.increment.assert_not_called()

    def test_increment_and_decrement(self, registry):
        """Test that both operations hit the same counter, increment first."""
        producer = make_producer(registry, increment=INCREMENT, decrement=DECREMENT)
        producer.process(Exchange())

        counter = registry.counter.return_value
        assert counter.method_calls[0][0] == "increment"
        assert counter.method_calls[1][0] == "decrement"
        counter.increment.assert_called_once_with(INCREMENT)
        counter.decrement.assert_called_once_with(DECREMENT)

    def test_without_increment_and_decrement(self, registry):
        """Test that no configured delta means no registry calls at all."""
        producer = make_producer(registry)
        producer.process(Exchange())
        registry.counter.assert_not_called()

    def test_overriding_increment(self, registry):
        """Test that the message increment header wins over the static value."""
        producer = make_producer(registry, increment=INCREMENT, decrement=DECREMENT)
        exchange = Exchange(Message(headers={HEADER_COUNTER_INCREMENT: INCREMENT + 1}))
        producer.process(exchange)

        counter = registry.counter.return_value
        counter.increment.assert_called_once_with(INCREMENT + 1)
        counter.decrement.assert_called_once_with(DECREMENT)

    def test_overriding_decrement(self, registry):
        """Test that the message decrement header wins over the static value."""
        producer = make_producer(registry, decrement=DECREMENT)
        exchange = Exchange(Message(headers={HEADER_COUNTER_DECREMENT: DECREMENT - 1}))
        producer.process(exchange)

        registry.counter.return_value.decrement.assert_called_once_with(DECREMENT - 1)

    def test_override_without_static_value(self, registry):
        """Test that a header increment works even when nothing is configured."""
        producer = make_producer(registry)
        producer.process(Exchange(Message(headers={HEADER_COUNTER_INCREMENT: "2.5"})))
        registry.counter.return_value.increment.assert_called_once_with(2.5)

    def test_malformed_override_falls_back_to_static(self, registry):
        """Test that an unparseable header is ignored in favour of the static value."""
        producer = make_producer(registry, increment=5)
        producer.process(Exchange(Message(headers={HEADER_COUNTER_INCREMENT: "lots"})))
        registry.counter.return_value.increment.assert_called_once_with(5)

    def test_metric_name_header_override(self, registry):
        """Test that the RouteMeterName header replaces the endpoint name."""
        producer = make_producer(registry, increment=1)
        producer.process(Exchange(Message(headers={HEADER_METRIC_NAME: "other.name"})))
        registry.counter.assert_called_once_with("other.name", Tags.empty())

    def test_metric_headers_cleared_after_process(self, registry):
        """Test that overrides apply to one step only."""
        producer = make_producer(registry, increment=1)
        exchange = Exchange(Message(headers={HEADER_COUNTER_INCREMENT: 3, "Other": "kept"}))
        producer.process(exchange)

        assert HEADER_COUNTER_INCREMENT not in exchange.message.headers
        assert exchange.message.headers == {"Other": "kept"}


class TestCounterEmitWithRegistry:
    """Test counter emission against a real registry."""

    @pytest.mark.parametrize(
        "increment,decrement,expected",
        [(10.0, 3.0, 7.0), (10.0, None, 10.0), (None, 3.0, -3.0)],
    )
    def test_net_delta(self, increment, decrement, expected):
        """Test that the net recorded delta is increment minus decrement."""
        registry = MeterRegistry()
        producer = make_producer(registry)
        producer.emit(METRICS_NAME, Tags.empty(), increment, decrement)

        assert registry.counter(METRICS_NAME).count() == expected

    def test_no_delta_registers_nothing(self):
        """Test that an empty emission does not create a counter."""
        registry = MeterRegistry()
        producer = make_producer(registry)
        producer.emit(METRICS_NAME, Tags.empty(), None, None)

        assert registry.meters() == []

    def test_counter_identity_reused(self):
        """Test that repeated emissions accumulate on one counter."""
        registry = MeterRegistry()
        producer = make_producer(registry, increment=2)
        for _ in range(3):
            producer.process(Exchange())

        assert len(registry.meters()) == 1
        assert registry.counter(METRICS_NAME).count() == 6.0
