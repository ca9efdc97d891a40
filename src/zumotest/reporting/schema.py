"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "zumotest report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["plan", "total", "passed", "failed", "timeouts", "duration_s"],
            "properties": {
                "plan": {"type": "string"},
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "failed": {"type": "integer"},
                "timeouts": {"type": "integer"},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "group", "test", "status", "duration_ms", "logs"],
                "properties": {
                    "id": {"type": "string"},
                    "group": {"type": "string"},
                    "test": {"type": "string"},
                    "status": {"enum": ["passed", "failed", "timeout"]},
                    "duration_ms": {"type": "number"},
                    "logs": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
    },
}
