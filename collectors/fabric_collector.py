"""Collects the fabric and pod health scores and the fabric name from the APIC."""
import logging

from collectors.model import MetricDescriptor, MetricFamily, MetricType
from collectors.utils import get_records, get_string, match_pod_id, to_ratio

FABRIC_HEALTH_OVERALL = MetricDescriptor(
    "fabric_health_overall",
    "Returns the health score of the overall fabric",
    MetricType.GAUGE,
    "ratio",
)
POD_HEALTH = MetricDescriptor(
    "pod_health",
    "Returns the health score of a pod",
    MetricType.GAUGE,
    "ratio",
)


class FabricHealthCollector:
    """
    Splits the fabricHealthTotal records into the overall fabric health
    and the health of the individual pods.
    """

    query_name = "fabric_health"

    def __init__(self, aci_metrics_collector):
        self.col = aci_metrics_collector

    def extract(self, document):
        """Build the overall and the per pod health families from a query result."""
        overall_metrics = MetricFamily(FABRIC_HEALTH_OVERALL)
        pod_metrics = MetricFamily(POD_HEALTH)

        for record in get_records(document):
            dn = get_string(record, "fabricHealthTotal.attributes.dn")
            value = to_ratio(get_string(record, "fabricHealthTotal.attributes.cur"))

            pod_id = match_pod_id(dn)
            if pod_id is None:
                overall_metrics.add_sample({}, value)
            else:
                pod_metrics.add_sample({"podid": pod_id}, value)

        return [overall_metrics, pod_metrics]

    def collect(self):
        """Collect the fabric health data."""
        logging.debug("Fabric %s: Get the fabric health data.", self.col.fabric)
        document = self.col.query(self.query_name)
        if document is None:
            return []
        return self.extract(document)


class FabricNameCollector:
    """Looks up the configured domain name of the fabric."""

    query_name = "fabric_name"

    def __init__(self, aci_metrics_collector):
        self.col = aci_metrics_collector

    def extract(self, document):
        """Get the fabric domain name from an infraCont query result."""
        return get_string(document, "imdata.0.infraCont.attributes.fbDmNm") or ""

    def collect(self):
        """Get the fabric name, an empty string if the APIC does not tell."""
        document = self.col.query(self.query_name)
        if document is None:
            return ""
        return self.extract(document)
