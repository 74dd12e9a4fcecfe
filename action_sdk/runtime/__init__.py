# =============================================================================
# Runtime Package - Session Context and Configuration
# =============================================================================

from action_sdk.runtime.context import ActionContext, PayloadLocation, mask_token
from action_sdk.runtime.parse_event import initialize, detect_payload_location, extract_payload
from action_sdk.runtime.config import Settings, get_settings, configure_logging

__all__ = [
    "ActionContext",
    "PayloadLocation",
    "mask_token",
    "initialize",
    "detect_payload_location",
    "extract_payload",
    "Settings",
    "get_settings",
    "configure_logging",
]
