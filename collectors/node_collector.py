"""Collects health information of the leaf and spine switches."""
import logging

from collectors.model import MetricDescriptor, MetricFamily, MetricType
from collectors.utils import extract_labels, get_records, get_string, to_ratio

NODE_HEALTH = MetricDescriptor(
    "node_health",
    "Returns the health score of a fabric node",
    MetricType.GAUGE,
    "ratio",
)

NODE_LABELS = {
    "podid": "topSystem.attributes.podId",
    "state": "topSystem.attributes.state",
    "oobmgmtaddr": "topSystem.attributes.oobMgmtAddr",
    "nodeid": "topSystem.attributes.id",
    "name": "topSystem.attributes.name",
    "role": "topSystem.attributes.role",
}


class NodeHealthCollector:
    """Collects the health score of every fabric node except the controllers."""

    query_name = "node_health"

    def __init__(self, aci_metrics_collector):
        self.col = aci_metrics_collector

    def extract(self, document):
        """Build the node health family from a topSystem query result."""
        node_metrics = MetricFamily(NODE_HEALTH)

        for record in get_records(document):
            # the APICs are covered by the infra node metrics
            if get_string(record, "topSystem.attributes.role") == "controller":
                continue

            current_labels = extract_labels(record, NODE_LABELS)
            node_metrics.add_sample(
                current_labels,
                to_ratio(get_string(record, "topSystem.children.0.healthInst.attributes.cur")),
            )

        return [node_metrics]

    def collect(self):
        """Collect the node health data."""
        logging.debug("Fabric %s: Get the node health data.", self.col.fabric)
        document = self.col.query(self.query_name)
        if document is None:
            return []
        return self.extract(document)
