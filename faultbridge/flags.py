"""Connection and selector flags shared by every golang experiment."""

from __future__ import annotations

from faultbridge.models import FlagSchema

HOST = FlagSchema(
    name="host",
    desc="Golang application host, default value is localhost",
    default="localhost",
)

PORT = FlagSchema(
    name="port",
    desc="Port of injection for Golang application, default value is 9526",
    default="9526",
)

FUNC = FlagSchema(
    name="func",
    desc="Golang application function",
    required=True,
    required_when_destroyed=False,
)

# Never forwarded to the agent, whatever its value.
TIMEOUT_FLAG = "timeout"

# Dropped even for non-boolean flags.
FALSE_MARKER = "false"

CONNECTION_FLAGS = (HOST, PORT, FUNC)
