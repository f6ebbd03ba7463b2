from threading import Lock
from typing import Dict, Iterator, List, Sequence

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from cloudtag_exporter.modules.metrics.domain.models import MetricRecord

TAG_INFO_DOCUMENTATION = "Information about the tags of an AWS resource"


class TagInfoCollector(Collector):
    """
    Custom collector exposing the latest materialized tag batch.

    A scrape cycle calls `update` with the new batch; `collect` renders it as one
    gauge family per metric name.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._records: List[MetricRecord] = []

    def update(self, records: Sequence[MetricRecord]) -> None:
        with self._lock:
            self._records = list(records)

    def describe(self) -> List[GaugeMetricFamily]:
        # Families depend on discovered services; skip registration-time collection.
        return []

    def collect(self) -> Iterator[GaugeMetricFamily]:
        with self._lock:
            records = list(self._records)

        grouped: Dict[str, List[MetricRecord]] = {}
        for record in records:
            grouped.setdefault(record.name, []).append(record)

        for name, group in grouped.items():
            label_names: Dict[str, None] = {}
            for record in group:
                for label in record.labels:
                    label_names.setdefault(label, None)

            family = GaugeMetricFamily(name, TAG_INFO_DOCUMENTATION, labels=list(label_names))
            for record in group:
                family.add_metric(
                    [record.labels.get(label, "") for label in label_names],
                    record.value,
                )
            yield family
