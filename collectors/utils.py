"""Helpers to turn raw APIC JSON records into metric values and labels."""
import re

POD_HEALTH_DN = re.compile(r"topology/pod-(.*?)/health")


def to_float(value):
    """Parse a controller supplied decimal string, 0.0 if it cannot be parsed."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def to_ratio(value):
    """Convert a health score percentage (0-100) into a ratio (0.0-1.0)."""
    return to_float(value) / 100.0


def get_path(document, path):
    """
    Walk a dotted path through a parsed JSON document.

    Numeric segments index into lists, e.g. ``topSystem.children.0.healthInst``.
    Returns None as soon as a segment is missing, so an absent field can be told
    apart from an empty string.
    """
    current = document
    for key in path.split("."):
        if isinstance(current, dict):
            if key not in current:
                return None
            current = current[key]
        elif isinstance(current, list):
            if not key.isdigit() or int(key) >= len(current):
                return None
            current = current[int(key)]
        else:
            return None
    return current


def get_string(document, path):
    """Get the scalar at path as a string, None if absent or not a scalar."""
    value = get_path(document, path)
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def extract_labels(record, label_paths):
    """Build a label dict from a record, missing paths become empty label values."""
    labels = {}
    for label_name, path in label_paths.items():
        value = get_string(record, path)
        labels[label_name] = "" if value is None else value
    return labels


def match_pod_id(dn):
    """Return the pod id of a pod health dn, None for the overall fabric health."""
    if not dn:
        return None
    match = POD_HEALTH_DN.search(dn)
    if not match:
        return None
    return match.group(1)


def get_records(document, path="imdata"):
    """Get the list of records at path, empty if absent or not a list."""
    records = get_path(document, path)
    if not isinstance(records, list):
        return []
    return records
