"""Internal constants shared across the package."""

import re

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

#: Retention sweep cadence and the age after which updates are dropped.
DEFAULT_SWEEP_INTERVAL_S: float = 60 * 60
DEFAULT_MAX_AGE_S: float = 48 * 60 * 60

MAX_BODY_BYTES = 1 << 20
MAX_DOMAIN_LENGTH = 255
DOMAIN_PATTERN = re.compile(r"[A-Za-z0-9.-]+")

#: Fixed-width UTC encoding; lexicographic order equals chronological order.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

YAML_CONTENT_TYPE = "application/yaml"
