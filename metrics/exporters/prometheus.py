"""Prometheus text exposition format exporter"""
import math
import re
from typing import Dict, List, Tuple
from ..models import MetricFamily, Sample
from ..registry import MetricsRegistry
from logging_config import get_logger


logger = get_logger(__name__)

_SAMPLE_LINE = re.compile(r'^(?P<name>[a-zA-Z_:][a-zA-Z0-9_:]*)(?:\{(?P<labels>.*)\})?\s+(?P<value>\S+)$')
_LABEL_PAIR = re.compile(r'([a-zA-Z_][a-zA-Z0-9_]*)="((?:[^"\\]|\\.)*)"')


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def format_value(value: float) -> str:
    """Render a sample value, integral floats without a fractional part"""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _unescape_label_value(value: str) -> str:
    return re.sub(r'\\(.)', lambda m: "\n" if m.group(1) == "n" else m.group(1), value)


def _parse_value(text: str) -> float:
    if text == "+Inf":
        return math.inf
    if text == "-Inf":
        return -math.inf
    return float(text)


class PrometheusExporter:
    """Render metric registries in the Prometheus text exposition format"""

    def export_registry(self, registry: MetricsRegistry) -> str:
        """Render every family of a registry, in registration order"""
        return self.export_families(registry.collect())

    def export_families(self, families: List[MetricFamily]) -> str:
        lines = []

        for family in families:
            lines.append(f"# HELP {family.name} {escape_help(family.help_text)}")
            lines.append(f"# TYPE {family.name} {family.metric_type.value}")

            for sample in family.values():
                lines.append(self.format_sample(family, sample))

        logger.debug("Rendered metric families", families=len(families), lines=len(lines),
                     event_type="exposition_rendered")
        if not lines:
            return ""
        lines.append("")  # Final newline
        return "\n".join(lines)

    @staticmethod
    def format_sample(family: MetricFamily, sample: Sample) -> str:
        """Convert one sample to an exposition line"""
        label_names = family.label_names or tuple(sample.labels.keys())
        labels_str = ""
        if label_names:
            label_pairs = [f'{k}="{escape_label_value(sample.labels[k])}"' for k in label_names]
            labels_str = "{" + ",".join(label_pairs) + "}"

        return f"{family.name}{labels_str} {format_value(sample.value)}"


def parse_prometheus_text(text: str) -> List[Tuple[str, Dict[str, str], float]]:
    """Parse sample lines back into (name, labels, value) triples, skipping comments"""
    samples = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        match = _SAMPLE_LINE.match(line)
        if match is None:
            raise ValueError(f"Malformed exposition line: {line!r}")
        labels = {}
        if match.group("labels"):
            for key, value in _LABEL_PAIR.findall(match.group("labels")):
                labels[key] = _unescape_label_value(value)
        samples.append((match.group("name"), labels, _parse_value(match.group("value"))))
    return samples
