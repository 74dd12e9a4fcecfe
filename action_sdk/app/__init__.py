# =============================================================================
# Application Entry Points
# =============================================================================

from action_sdk.app.handler import action_handler

__all__ = [
    "action_handler",
]
