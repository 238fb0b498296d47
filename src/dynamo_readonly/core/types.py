"""Type aliases used across dynamo-readonly."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
Item = dict[str, Any]
