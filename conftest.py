"""
Repository-level pytest configuration.

Nothing here touches the environment: settings come from config/config.yaml
and from variables the caller exports (APP_URL, BROWSER_NAME, ...).
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
