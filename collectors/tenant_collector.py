"""Collects the health score of the tenants."""
import logging

from collectors.model import MetricDescriptor, MetricFamily, MetricType
from collectors.utils import extract_labels, get_records, get_string, to_ratio

TENANT_HEALTH = MetricDescriptor(
    "tenant_health",
    "Returns the health score of a tenant",
    MetricType.GAUGE,
    "ratio",
)


class TenantHealthCollector:
    """Collects one health sample per tenant."""

    query_name = "tenant_health"

    def __init__(self, aci_metrics_collector):
        self.col = aci_metrics_collector

    def extract(self, document):
        tenant_metrics = MetricFamily(TENANT_HEALTH)

        for record in get_records(document):
            tenant_metrics.add_sample(
                extract_labels(record, {"domain": "fvTenant.attributes.name"}),
                to_ratio(get_string(record, "fvTenant.children.0.healthInst.attributes.cur")),
            )

        return [tenant_metrics]

    def collect(self):
        """Collect the tenant health data."""
        logging.debug("Fabric %s: Get the tenant health data.", self.col.fabric)
        document = self.col.query(self.query_name)
        if document is None:
            return []
        return self.extract(document)
