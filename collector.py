"""Prometheus Exporter for collecting Cisco ACI fabric metrics."""
import json
import logging
import time

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

from collectors.fabric_collector import FabricHealthCollector, FabricNameCollector
from collectors.fault_collector import FaultCollector
from collectors.infra_collector import InfraNodeCollector
from collectors.model import MetricDescriptor, MetricFamily, MetricType
from collectors.node_collector import NodeHealthCollector
from collectors.tenant_collector import TenantHealthCollector

SCRAPE_DURATION = MetricDescriptor(
    "scrape_duration",
    "The duration, in seconds, of the last scrape of the fabric",
    MetricType.GAUGE,
    "seconds",
)

DOMAIN_COLLECTORS = [
    FabricHealthCollector,
    NodeHealthCollector,
    TenantHealthCollector,
    FaultCollector,
    InfraNodeCollector,
]


def scrape_duration(seconds):
    """Single sample family with the duration of a collection pass."""
    scrape_metrics = MetricFamily(SCRAPE_DURATION)
    scrape_metrics.add_sample({}, seconds)
    return scrape_metrics


class AciMetricsCollector:
    """
    Runs one collection pass against a fabric.

    collect_metrics() returns the normalized metric batch, collect() renders
    the same batch as prometheus_client metric families so an instance can be
    handed to generate_latest like a registry.
    """

    def __init__(self, connection, fabric, prefix="aci_"):
        self.connection = connection
        self.fabric = fabric
        self.prefix = prefix

    def query(self, name):
        """Run a logical query and parse it, None if the query failed."""
        result = self.connection.get_by_query(name)
        if result.error:
            logging.error("Fabric %s: %s not supported: %s", self.fabric, name, result.error)
            return None

        try:
            document = json.loads(result.data)
        except (TypeError, ValueError, RecursionError) as err:
            logging.error("Fabric %s: %s returned invalid json: %s", self.fabric, name, err)
            return None

        # a null or scalar body holds no records
        if not isinstance(document, (dict, list)):
            return {}
        return document

    def collect_metrics(self):
        """
        Collect all metrics of the fabric.

        Returns the name of the fabric, the list of metric families and
        whether the login to the fabric succeeded.
        """
        start_time = time.time()

        try:
            if not self.connection.login():
                logging.warning("Fabric %s: Login failed, no metrics collected.", self.fabric)
                return "", [], False

            fabric_name = FabricNameCollector(self).collect()

            metrics = []
            for domain_collector in DOMAIN_COLLECTORS:
                metrics.extend(domain_collector(self).collect())

        finally:
            self.connection.logout()

        duration = round(time.time() - start_time, 2)
        logging.info("Fabric %s: scrape duration: %s seconds", self.fabric, duration)
        metrics.append(scrape_duration(duration))

        return fabric_name, metrics, True

    def to_prometheus(self, family, fabric_name):
        """Translate a metric family into a prometheus_client metric family."""
        name = f"{self.prefix}{family.name}"
        if family.unit:
            name = f"{name}_{family.unit}"

        if family.type == MetricType.COUNTER:
            metric = CounterMetricFamily(name, family.help)
            sample_name = f"{name}_total"
        else:
            metric = GaugeMetricFamily(name, family.help)
            sample_name = name

        for sample in family.samples:
            labels = {"aci": fabric_name}
            labels.update(sample.labels)
            metric.add_sample(sample_name, value=sample.value, labels=labels)

        return metric

    def collect(self):
        """Collect the metrics."""
        fabric_name, metrics, status = self.collect_metrics()

        up_metrics = GaugeMetricFamily(
            f"{self.prefix}up",
            "ACI fabric monitoring availability",
        )
        up_metrics.add_sample(
            f"{self.prefix}up",
            value=1 if status else 0,
            labels={"fabric": self.fabric},
        )
        yield up_metrics

        for family in metrics:
            yield self.to_prometheus(family, fabric_name)
