# =============================================================================
# Event Parser - Build ActionContext from Lambda Events
# =============================================================================
# The platform invokes actions either directly (fields on the event itself)
# or through an HTTP integration (fields nested under "body"). Either way the
# result is one ActionContext.
# =============================================================================

import json
import logging
from typing import Any, Dict, Optional, Tuple
from action_sdk.runtime.context import ActionContext, PayloadLocation

logger = logging.getLogger(__name__)


def detect_payload_location(event: Optional[Dict[str, Any]]) -> PayloadLocation:
    """
    Detect where the action fields live in an event.
    
    A truthy "body" field means the event came through an HTTP integration
    and responses must be wrapped in a status code / body envelope.
    """
    if event and event.get("body"):
        return PayloadLocation.BODY
    return PayloadLocation.TOP_LEVEL


def _parse_body(body: Any) -> Dict[str, Any]:
    """Parse the body field, which may arrive as a JSON string."""
    if isinstance(body, dict):
        return body
    
    if isinstance(body, (str, bytes)):
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            logger.warning("Event body is not valid JSON, ignoring it")
            return {}
        if isinstance(parsed, dict):
            return parsed
    
    logger.warning(f"Unexpected event body type: {type(body).__name__}")
    return {}


def extract_payload(event: Optional[Dict[str, Any]]) -> Tuple[Dict[str, Any], PayloadLocation]:
    """
    Return the payload holding the action fields and where it was found.
    
    Returns:
        Tuple of (payload dict, payload location)
    """
    location = detect_payload_location(event)
    
    if location == PayloadLocation.BODY:
        return _parse_body(event["body"]), location
    
    return event or {}, location


def initialize(event: Optional[Dict[str, Any]]) -> ActionContext:
    """
    Initialize the SDK with incoming event data.
    
    Call this at the beginning of the action handler. It reads the auth
    token, sandbox key, service address, action subject, user context and
    params from the event. Missing fields are left as None; nothing here
    raises for incomplete events.
    
    Args:
        event: The event passed to the Lambda handler
        
    Returns:
        ActionContext to pass to data service and response calls
    """
    payload, location = extract_payload(event)
    use_body = location == PayloadLocation.BODY
    
    context = ActionContext.from_payload(payload, use_body=use_body, raw_event=event or {})
    
    logger.info(
        f"Initialized action context: sandbox={context.sandbox_key} "
        f"service={context.service_address} useBody={use_body}"
    )
    return context
