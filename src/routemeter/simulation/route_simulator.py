"""Drives simulated exchanges through an instrumented route."""

import logging
from typing import Any, Dict, List, Optional, Tuple

import simpy

from ..core.exchange import Exchange, Message
from ..endpoint import MetricsEndpoint
from ..producers import AbstractMetricsProducer
from ..registry import MeterRegistry
from ..routepolicy import RoutePolicy
from .models import ExchangeRecord, RouteDefinition, RouteStep
from .sampler import DistributionSampler

logger = logging.getLogger(__name__)


class SimulatedFailure(Exception):
    """Marks an exchange the simulation decided should fail."""
    pass


class RouteSimulator:
    """Generates exchanges for one route and walks each through its steps.

    Every exchange runs as its own SimPy process, so many exchanges are in
    flight at once and their timer samples are separated by simulated
    processing delays.
    """

    def __init__(
        self,
        simpy_env: simpy.Environment,
        route: RouteDefinition,
        policy: RoutePolicy,
        registry: MeterRegistry,
        sampler: DistributionSampler,
    ):
        self.simpy_env = simpy_env
        self.route = route
        self.policy = policy
        self.registry = registry
        self.sampler = sampler

        self.steps: List[Tuple[RouteStep, Optional[AbstractMetricsProducer]]] = [
            (step, self._create_producer(step)) for step in route.steps
        ]
        self.exchange_counter = 0
        self.records: List[ExchangeRecord] = []

        logger.info(f"RouteSimulator initialized for {route.route_id} with {len(self.steps)} steps")

    def _create_producer(self, step: RouteStep) -> Optional[AbstractMetricsProducer]:
        if step.metric_config is None:
            return None
        return MetricsEndpoint.from_config(step.metric_config, self.registry).create_producer()

    def generate_exchanges_process(self, total_duration: float = float("inf")) -> simpy.events.Event:
        """Main SimPy process creating exchanges according to the arrival distribution."""
        self.policy.on_route_start()

        while True:
            if self.simpy_env.now >= total_duration:
                break
            if (
                self.route.total_exchanges is not None
                and self.exchange_counter >= self.route.total_exchanges
            ):
                break

            iat = self.sampler.sample(self.route.inter_arrival_time_dist_config)
            yield self.simpy_env.timeout(iat)

            exchange = self._create_exchange()
            self.simpy_env.process(self._run_exchange(exchange))

        logger.info(
            f"Exchange generation for {self.route.route_id} completed. "
            f"Generated {self.exchange_counter} exchanges"
        )

    def _create_exchange(self) -> Exchange:
        self.exchange_counter += 1
        return Exchange(
            Message(body={"sequence": self.exchange_counter}),
            exchange_id=f"{self.route.route_id}-{self.exchange_counter}",
            from_route_id=self.route.route_id,
        )

    def _run_exchange(self, exchange: Exchange) -> simpy.events.Event:
        record = ExchangeRecord(
            exchange_id=exchange.exchange_id,
            route_id=self.route.route_id,
            begin_time_sim=self.simpy_env.now,
        )
        self.records.append(record)
        self.policy.on_exchange_begin(exchange)

        for step, producer in self.steps:
            if step.delay_dist_config is not None:
                delay = self.sampler.sample(step.delay_dist_config)
                if delay > 0:
                    yield self.simpy_env.timeout(delay)
            if producer is not None:
                for name, value in step.headers.items():
                    exchange.message.set_header(name, value)
                producer.process(exchange)

        if self.sampler.chance(self.route.failure_probability):
            exchange.exception = SimulatedFailure(f"Simulated failure of {exchange.exchange_id}")

        record.end_time_sim = self.simpy_env.now
        record.failed = exchange.failed
        self.policy.on_exchange_done(exchange)

    def summary(self) -> Dict[str, Any]:
        completed = [r for r in self.records if r.end_time_sim is not None]
        failed = [r for r in completed if r.failed]
        return {
            "generated": self.exchange_counter,
            "completed": len(completed),
            "failed": len(failed),
            "inflight": self.policy.inflight(),
        }
