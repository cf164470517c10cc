"""Uniform metric model shared by the domain collectors and the exposition layer."""
from dataclasses import dataclass, field
from enum import Enum


class MetricType(str, Enum):
    """Metric family types understood by the exposition layer."""
    GAUGE = "gauge"
    COUNTER = "counter"


@dataclass(frozen=True)
class MetricDescriptor:
    """Static metadata of a metric family."""
    name: str
    help: str
    type: MetricType = MetricType.GAUGE
    unit: str = ""


@dataclass
class Sample:
    """One labeled observation of a metric family."""
    labels: dict
    value: float


@dataclass
class MetricFamily:
    """A descriptor plus its ordered samples."""
    descriptor: MetricDescriptor
    samples: list = field(default_factory=list)

    @property
    def name(self):
        return self.descriptor.name

    @property
    def help(self):
        return self.descriptor.help

    @property
    def type(self):
        return self.descriptor.type

    @property
    def unit(self):
        return self.descriptor.unit

    def add_sample(self, labels, value):
        """Append a sample, copying the labels so callers may reuse their dict."""
        self.samples.append(Sample(labels=dict(labels), value=float(value)))
