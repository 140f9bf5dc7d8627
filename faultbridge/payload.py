"""
Translation of an experiment into the agent's wire schema.

Example body for a ``modify`` experiment:

    {"action":"modify","target":"main.(*Business).Execute",
     "flags":{"userId":"1.3.0.1","value":"Hanmeimei","effect-count":"5"}}
"""

from __future__ import annotations

import json
from typing import Dict, Optional

from faultbridge.exceptions import PayloadBuildError
from faultbridge.flags import FALSE_MARKER, FUNC, HOST, PORT, TIMEOUT_FLAG
from faultbridge.models import ExperimentDescription, InjectionRequest


def build_request(description: ExperimentDescription) -> InjectionRequest:
    """Split the experiment flags into target selector and forwarded flags."""
    target: Optional[str] = None
    flags: Dict[str, str] = {}
    for name, value in description.flags.items():
        if value == "" or value == FALSE_MARKER or name == TIMEOUT_FLAG:
            continue
        if name == FUNC.name:
            target = value
            continue
        if name in (HOST.name, PORT.name):
            continue
        flags[name] = value
    return InjectionRequest(action=description.action, flags=flags, target=target)


def encode_request(request: InjectionRequest) -> bytes:
    """Serialize to compact UTF-8 JSON. Raises PayloadBuildError."""
    try:
        return json.dumps(
            request.to_dict(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise PayloadBuildError(
            f"build request body failed, {exc}", cause=exc
        ) from exc


def build_request_body(description: ExperimentDescription) -> bytes:
    return encode_request(build_request(description))
