"""Shared test doubles: re-export the scripted boto3 fakes."""

from __future__ import annotations

from dynamo_readonly.persistence.memory_backend import ScriptedResource, ScriptedTable

__all__ = ["ScriptedResource", "ScriptedTable"]
