"""Collects the inventory of the APIC controllers of the fabric."""
import logging

from collectors.model import MetricDescriptor, MetricFamily, MetricType
from collectors.utils import extract_labels, get_records

INFRA_NODE = MetricDescriptor(
    "infra_node",
    "Returns the info of the infrastructure apic node",
    MetricType.COUNTER,
    "info",
)

INFRA_NODE_LABELS = {
    "name": "infraWiNode.attributes.nodeName",
    "address": "infraWiNode.attributes.addr",
    "health": "infraWiNode.attributes.health",
    "apicmode": "infraWiNode.attributes.apicMode",
    "adminstatus": "infraWiNode.attributes.adminSt",
    "operstatus": "infraWiNode.attributes.operSt",
    "failoverStatus": "infraWiNode.attributes.failoverStatus",
    "podid": "infraWiNode.attributes.podId",
}


class InfraNodeCollector:
    """Collects one info sample per APIC as seen by the infra cluster."""

    query_name = "infra_node_health"

    def __init__(self, aci_metrics_collector):
        self.col = aci_metrics_collector

    def extract(self, document):
        infra_metrics = MetricFamily(INFRA_NODE)

        for record in get_records(document):
            infra_metrics.add_sample(extract_labels(record, INFRA_NODE_LABELS), 1.0)

        return [infra_metrics]

    def collect(self):
        """Collect the infra node info."""
        logging.debug("Fabric %s: Get the infra node data.", self.col.fabric)
        document = self.col.query(self.query_name)
        if document is None:
            return []
        return self.extract(document)
