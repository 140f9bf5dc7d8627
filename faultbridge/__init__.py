"""
faultbridge - Translate fault experiments into calls to an in-process golang agent.

Dispatch:
    from faultbridge import Dispatcher, ExperimentDescription, Intent

    result = Dispatcher().dispatch(
        ExperimentDescription(action="delay", flags={"func": "main.handler", "time": "200"}),
        Intent.INJECT,
    )
    print(result.outcome, result.response)

Catalog:
    from faultbridge import StaticAction, build_exp_models

    models = build_exp_models([StaticAction("delay")])
"""

# =============================================================================
# Dispatch
# =============================================================================
from faultbridge.dispatcher import Dispatcher, dispatch  # noqa: F401
from faultbridge.payload import build_request, build_request_body  # noqa: F401

# =============================================================================
# Catalog
# =============================================================================
from faultbridge.catalog import (  # noqa: F401
    Action,
    StaticAction,
    build_action_schemas,
    build_exp_models,
    common_matcher_flags,
    freeze_flag_map,
)

# =============================================================================
# Data types
# =============================================================================
from faultbridge.models import (  # noqa: F401
    ActionFlag,
    ActionFlagSchema,
    AgentResponse,
    ExperimentDescription,
    ExpModels,
    FlagSchema,
    InjectionRequest,
    InjectionResult,
    Intent,
    Outcome,
)
from faultbridge.config import Settings, get_settings  # noqa: F401
from faultbridge.exceptions import (  # noqa: F401
    AgentTransportError,
    FaultBridgeError,
    MissingParameterError,
    PayloadBuildError,
    ResultDecodeError,
)

__all__ = [
    "Dispatcher",
    "dispatch",
    "build_request",
    "build_request_body",
    "Action",
    "StaticAction",
    "build_action_schemas",
    "build_exp_models",
    "common_matcher_flags",
    "freeze_flag_map",
    "ActionFlag",
    "ActionFlagSchema",
    "AgentResponse",
    "ExperimentDescription",
    "ExpModels",
    "FlagSchema",
    "InjectionRequest",
    "InjectionResult",
    "Intent",
    "Outcome",
    "Settings",
    "get_settings",
    "FaultBridgeError",
    "MissingParameterError",
    "PayloadBuildError",
    "AgentTransportError",
    "ResultDecodeError",
]
