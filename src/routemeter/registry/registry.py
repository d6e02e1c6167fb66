"""In-memory meter registry."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ..core.clock import Clock, SystemClock
from ..core.errors import MeterTypeConflictError
from ..core.units import DurationUnit
from ..naming.tags import Tags, TagsLike
from .meters import Counter, DistributionSummary, Gauge, Meter, Timer
from .models import MeterId, MeterType

logger = logging.getLogger(__name__)

DEFAULT_PERCENTILES = [0.5, 0.9, 0.95, 0.99]


class MeterRegistry:
    """Central, thread-safe store of counters, timers, summaries and gauges.

    A meter is identified by its name and tag set. Asking for the same
    (name, tags) pair again returns the meter registered first; asking for
    it as a different meter type raises MeterTypeConflictError.
    """

    def __init__(self, clock: Optional[Clock] = None, config: Optional[Dict[str, Any]] = None):
        """Initialize the registry.

        Args:
            clock: Clock used by timer samples; defaults to SystemClock
            config: Optional registry configuration containing:
                - percentiles_to_calculate: List of percentiles (e.g., [0.5, 0.99])
        """
        self.clock: Clock = clock or SystemClock()
        self.config: Dict[str, Any] = config or {}
        self._meters: Dict[Tuple[str, Tags], Meter] = {}
        self._lock = threading.Lock()

        logger.info(f"MeterRegistry initialized with {self.clock.__class__.__name__}")

    def now(self) -> float:
        return self.clock.now()

    def counter(self, name: str, tags: Optional[TagsLike] = None) -> Counter:
        return self._register(name, tags, MeterType.COUNTER, Counter)

    def timer(self, name: str, tags: Optional[TagsLike] = None) -> Timer:
        return self._register(name, tags, MeterType.TIMER, Timer)

    def summary(self, name: str, tags: Optional[TagsLike] = None) -> DistributionSummary:
        return self._register(name, tags, MeterType.DISTRIBUTION_SUMMARY, DistributionSummary)

    def gauge(
        self, name: str, tags: Optional[TagsLike], supplier: Callable[[], float]
    ) -> Gauge:
        """Register a gauge sampling ``supplier``; an existing gauge keeps its supplier."""
        return self._register(
            name, tags, MeterType.GAUGE, lambda meter_id: Gauge(meter_id, supplier)
        )

    def _register(
        self,
        name: str,
        tags: Optional[TagsLike],
        meter_type: MeterType,
        factory: Callable[[MeterId], Meter],
    ) -> Any:
        meter_id = MeterId(name=name, tags=Tags(tags), type=meter_type)

        with self._lock:
            existing = self._meters.get(meter_id.key)
            if existing is not None:
                if existing.id.type is not meter_type:
                    raise MeterTypeConflictError(
                        name, meter_id.tags, existing.id.type.value, meter_type.value
                    )
                return existing

            meter = factory(meter_id)
            self._meters[meter_id.key] = meter

        logger.debug(f"Registered {meter_type.value} {name} {meter_id.tags}")
        return meter

    def find(self, name: str, tags: Optional[TagsLike] = None) -> Optional[Meter]:
        with self._lock:
            return self._meters.get((name, Tags(tags)))

    def meters(self) -> List[Meter]:
        with self._lock:
            return list(self._meters.values())

    def clear(self) -> None:
        with self._lock:
            self._meters.clear()

    def snapshot(
        self, duration_unit: Union[str, DurationUnit] = DurationUnit.MILLISECONDS
    ) -> List[Dict[str, Any]]:
        """Current state of every meter as a list of flat records.

        Timer values are converted from seconds into ``duration_unit``.
        """
        unit = DurationUnit.parse(duration_unit)
        records = []

        for meter in sorted(self.meters(), key=lambda m: (m.id.name, tuple(m.id.tags))):
            record: Dict[str, Any] = {
                "name": meter.id.name,
                "type": meter.id.type.value,
                "tags": meter.id.tags.as_dict(),
            }
            if isinstance(meter, Counter):
                record["count"] = meter.count()
            elif isinstance(meter, Gauge):
                record["value"] = meter.value()
            elif isinstance(meter, Timer):
                record["count"] = meter.count()
                record[f"total_{unit.suffix}"] = unit.from_seconds(meter.total_time())
                record[f"max_{unit.suffix}"] = unit.from_seconds(meter.max())
                record[f"mean_{unit.suffix}"] = (
                    unit.from_seconds(meter.total_time() / meter.count()) if meter.count() else 0.0
                )
            elif isinstance(meter, DistributionSummary):
                record["count"] = meter.count()
                record["total"] = meter.total_amount()
            records.append(record)

        return records

    def summary_report(
        self,
        percentiles: Optional[List[float]] = None,
        duration_unit: Union[str, DurationUnit] = DurationUnit.MILLISECONDS,
    ) -> Dict[str, Any]:
        """Generate summary statistics for every meter, grouped by meter type.

        Args:
            percentiles: Percentiles to calculate for timers and summaries;
                defaults to the registry config or DEFAULT_PERCENTILES
            duration_unit: Unit for timer statistics

        Returns:
            Dictionary keyed by meter type, then by "name{tags}"
        """
        unit = DurationUnit.parse(duration_unit)
        if percentiles is None:
            percentiles = self.config.get("percentiles_to_calculate", DEFAULT_PERCENTILES)

        report: Dict[str, Dict[str, Any]] = {t.value: {} for t in MeterType}
        for meter in self.meters():
            label = _meter_label(meter.id)
            if isinstance(meter, Counter):
                report[MeterType.COUNTER.value][label] = meter.count()
            elif isinstance(meter, Gauge):
                report[MeterType.GAUGE.value][label] = meter.value()
            elif isinstance(meter, Timer):
                values = [unit.from_seconds(d) for d in meter.durations()]
                stats = self._calculate_stats(values, percentiles)
                stats["unit"] = unit.suffix
                report[MeterType.TIMER.value][label] = stats
            elif isinstance(meter, DistributionSummary):
                report[MeterType.DISTRIBUTION_SUMMARY.value][label] = self._calculate_stats(
                    meter.values(), percentiles
                )

        return report

    def _calculate_stats(self, values: List[float], percentiles: List[float]) -> Dict[str, float]:
        """Calculate statistics for a list of values."""
        if not values:
            return {"count": 0}

        stats = {
            "count": len(values),
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "min": float(np.min(values)),
            "max": float(np.max(values)),
        }

        for p in percentiles:
            stats[f"p{int(round(p * 100))}"] = float(np.percentile(values, p * 100))

        return stats

    def to_dataframe(
        self, duration_unit: Union[str, DurationUnit] = DurationUnit.MILLISECONDS
    ) -> pd.DataFrame:
        """Get the registry snapshot as a pandas DataFrame, one row per meter."""
        records = self.snapshot(duration_unit)
        if not records:
            return pd.DataFrame()

        rows = []
        for record in records:
            row = dict(record)
            row["tags"] = ",".join(f"{k}={v}" for k, v in sorted(record["tags"].items()))
            rows.append(row)
        return pd.DataFrame(rows)

    def dump_json(
        self,
        path: Union[str, Path],
        pretty_print: bool = True,
        duration_unit: Union[str, DurationUnit] = DurationUnit.MILLISECONDS,
    ) -> Path:
        """Write the summary report to ``path`` as JSON."""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            json.dump(
                self.summary_report(duration_unit=duration_unit),
                f,
                indent=2 if pretty_print else None,
                sort_keys=True,
            )
        logger.info(f"Saved meter registry report to {output}")
        return output


def _meter_label(meter_id: MeterId) -> str:
    if not len(meter_id.tags):
        return meter_id.name
    inner = ",".join(f"{k}={v}" for k, v in meter_id.tags)
    return f"{meter_id.name}{{{inner}}}"
