"""YAML rendering of store read results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import yaml

from domainstatus.exceptions import SerializationError
from domainstatus.models import StatusUpdate


def _dump(document: Any) -> str:
    try:
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except yaml.YAMLError as exc:
        raise SerializationError(f"Could not render YAML: {exc}") from exc


def render_history(history: Sequence[StatusUpdate]) -> str:
    """Render one history as a YAML sequence of ``{status, timestamp}`` mappings."""
    return _dump([update.to_wire() for update in history])


def render_snapshot(snapshot: Mapping[str, Sequence[StatusUpdate]]) -> str:
    """Render a full snapshot as a YAML mapping of domain -> history (domains sorted)."""
    return _dump({domain: [update.to_wire() for update in snapshot[domain]] for domain in sorted(snapshot)})
