"""Distribution summary producer."""

import logging

from ..core.constants import HEADER_HISTOGRAM_VALUE
from ..core.exchange import Exchange
from ..naming.tags import Tags
from .base import AbstractMetricsProducer

logger = logging.getLogger(__name__)


class DistributionSummaryProducer(AbstractMetricsProducer):
    """Records the endpoint value, or the RouteMeterHistogramValue header, into a summary."""

    def do_process(self, exchange: Exchange, metric_name: str, tags: Tags) -> None:
        value = exchange.message.get_header(
            HEADER_HISTOGRAM_VALUE, self.endpoint.value, as_type=float
        )
        if value is None:
            logger.warning(f'Cannot update summary "{metric_name}" with null value')
            return

        self.registry.summary(metric_name, tags).record(value)
