# =============================================================================
# ActionContext - Per-Invocation Session Context
# =============================================================================
# Everything an action handler learns from the incoming event: who is calling
# (auth token, user context), where data lives (service address, sandbox) and
# what the action is operating on (action subject, params).
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class PayloadLocation(str, Enum):
    """Where the event keeps the action fields."""
    BODY = "body"              # API Gateway style: fields nested under "body"
    TOP_LEVEL = "top_level"    # Direct invoke: fields on the event itself


@dataclass(frozen=True)
class ActionContext:
    """
    Session context for a single action invocation.
    
    Created once by initialize() and passed explicitly to every data service
    and response formatting call. Instances are immutable, so two invocations
    handled by the same process never see each other's values.
    
    Attributes:
        auth_token: Bearer token for requests to the data service
        sandbox_key: Identifies the sandbox (solution) the action runs in
        service_address: Base URL of the data service
        action_subject: The object or context value the action operates on.
            Its shape depends on the caller:
            - form template actions: the data being edited on the form
            - page template actions: the page's context variables
            - object save actions: the object being saved
            - calculated field actions: the object holding the calculated field
            - single value actions: caller specific
        user_context: Information about the user executing the action
        params: Action parameters (input dialog values, when one is used)
        use_body: If True, responses are wrapped as {"statusCode", "body"}
        raw_event: Original unmodified event for debugging
    """
    auth_token: Optional[str] = None
    sandbox_key: Optional[str] = None
    service_address: Optional[str] = None
    action_subject: Any = None
    user_context: Any = None
    params: Any = None
    use_body: bool = False
    raw_event: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    
    @property
    def payload_location(self) -> PayloadLocation:
        """Where the action fields were read from."""
        return PayloadLocation.BODY if self.use_body else PayloadLocation.TOP_LEVEL
    
    @property
    def is_authenticated(self) -> bool:
        """Check if an auth token was supplied."""
        return bool(self.auth_token)
    
    def param(self, key: str, default: Any = None) -> Any:
        """Get a single action parameter."""
        if isinstance(self.params, dict):
            return self.params.get(key, default)
        return default
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert context to the platform's camelCase field names."""
        return {
            "authToken": self.auth_token,
            "sandboxKey": self.sandbox_key,
            "serviceAddress": self.service_address,
            "actionSubject": self.action_subject,
            "userContext": self.user_context,
            "params": self.params,
            "useBody": self.use_body,
        }
    
    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        use_body: bool = False,
        raw_event: Dict[str, Any] = None,
    ) -> "ActionContext":
        """Create context from an event payload. Missing fields stay None."""
        return cls(
            auth_token=payload.get("authToken"),
            sandbox_key=payload.get("sandboxKey"),
            service_address=payload.get("serviceAddress"),
            action_subject=payload.get("actionSubject"),
            user_context=payload.get("userContext"),
            params=payload.get("params"),
            use_body=use_body,
            raw_event=raw_event if raw_event is not None else payload,
        )


def mask_token(token: Optional[str]) -> str:
    """Shorten a token for log output."""
    if not token:
        return "<none>"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"
