"""
Collects the fault counters of the fabric.

The APIC reports one faultTypeCounts record per fault type, each with a
counter per severity and the matching acknowledged counter, e.g.
``crit`` and ``critAcked``.
"""
import logging

from collectors.model import MetricDescriptor, MetricFamily, MetricType
from collectors.utils import get_path, get_records, get_string, to_float

FAULTS = MetricDescriptor(
    "faults",
    "Returns the total number of faults by type",
    MetricType.GAUGE,
)
FAULTS_ACKED = MetricDescriptor(
    "faults_acked",
    "Returns the total number of acknowledged faults by type",
    MetricType.GAUGE,
)

SEVERITIES = ["crit", "maj", "minor", "warn"]


class FaultCollector:
    """Collects the fault counters by type and severity."""

    query_name = "faults"

    def __init__(self, aci_metrics_collector):
        self.col = aci_metrics_collector

    @staticmethod
    def get_fault_type_counts(document):
        """Get the faultTypeCounts records, children of another kind are skipped."""
        fault_type_counts = []
        for child in get_records(document, "imdata.0.faultCountsWithDetails.children"):
            counts = get_path(child, "faultTypeCounts")
            if counts is not None:
                fault_type_counts.append(counts)
        return fault_type_counts

    def extract(self, document):
        """Build the faults and the acknowledged faults families."""
        fault_metrics = MetricFamily(FAULTS)
        acked_metrics = MetricFamily(FAULTS_ACKED)

        for counts in self.get_fault_type_counts(document):
            fault_type = get_string(counts, "attributes.type") or ""
            for severity in SEVERITIES:
                current_labels = {"type": fault_type, "severity": severity}
                fault_metrics.add_sample(
                    current_labels,
                    to_float(get_string(counts, f"attributes.{severity}")),
                )
                acked_metrics.add_sample(
                    current_labels,
                    to_float(get_string(counts, f"attributes.{severity}Acked")),
                )

        return [fault_metrics, acked_metrics]

    def collect(self):
        """Collect the fault counters."""
        logging.debug("Fabric %s: Get the fault counters.", self.col.fabric)
        document = self.col.query(self.query_name)
        if document is None:
            return []
        return self.extract(document)
