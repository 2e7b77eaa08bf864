"""Refresh a chart's dependencies with the helm binary."""

from __future__ import annotations

import logging
import os
import subprocess

from chart_selector.config.settings import settings
from chart_selector.core.errors import DependencyUpdateError

logger = logging.getLogger(__name__)


def update_chart_dependencies(home_path: str, chart_path: str, helm_binary: str | None = None) -> str:
    """Run ``helm dependency update`` for the chart at *chart_path*.

    ``HOME`` points at *home_path* so helm reads repository and registry
    configuration from there. Returns helm's combined output.
    """
    cmd = [helm_binary or settings.helm_binary, "dependency", "update", chart_path]
    env = dict(os.environ)
    env["HOME"] = home_path
    logger.debug("Running %s with HOME=%s", " ".join(cmd), home_path)

    context = f"error running `helm dependency update` for chart at {chart_path!r}"
    try:
        proc = subprocess.run(cmd, env=env, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise DependencyUpdateError(f"{context}: {exc}") from exc

    output = (proc.stdout or "") + (proc.stderr or "")
    if proc.returncode != 0:
        raise DependencyUpdateError(
            f"{context}: exit status {proc.returncode}: {output.strip()}"
        )
    return output
