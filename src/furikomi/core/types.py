"""Type aliases used across Furikomi."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
