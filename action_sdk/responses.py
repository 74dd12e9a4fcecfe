# =============================================================================
# Action Responses
# =============================================================================
# Response shapes expected by the platform frameworks that call actions, and
# the formatters that turn them into the handler's return value.
#
# Direct invoke:   the response dict itself
# HTTP (useBody):  {"statusCode": 200|400, "body": "<json>"}
# =============================================================================

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union
from action_sdk.runtime.context import ActionContext


class ResponseType(str, Enum):
    """
    Discriminant of an action response.
    
    Pick the type matching where the action runs; single value actions are
    used by built-in platform events (e.g. shopping cart pricing).
    """
    LIST_ACTION = "listAction"
    FORM_TEMPLATE_ACTION = "formTemplateAction"
    PAGE_TEMPLATE_ACTION = "pageTemplateAction"
    OBJECT_SAVE_ACTION = "objectSaveAction"
    CALCULATED_FIELD_ACTION = "calculatedFieldAction"
    SINGLE_VALUE_ACTION = "singleValueAction"
    ERROR = "error"


def _compact(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def jdump(x: Any) -> str:
    """JSON dump with defaults for non-serializable types."""
    return json.dumps(x, ensure_ascii=False, default=str)


# =============================================================================
# NOTIFICATIONS
# =============================================================================

@dataclass
class EmailConfig:
    """Email channel of a notification."""
    recipient_user_proxy_type: str
    recipient_user_proxy_keys: List[str] = field(default_factory=list)
    from_email_address: Optional[str] = None
    from_name_view: Optional[str] = None
    reply_email_address: Optional[str] = None
    # Free-form address(es) for non user proxy recipients; comma separated
    recipient_email: Optional[str] = None
    
    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "recipientUserProxyType": self.recipient_user_proxy_type,
            "recipientUserProxyKeys": self.recipient_user_proxy_keys,
            "fromEmailAddress": self.from_email_address,
            "fromNameView": self.from_name_view,
            "replyEmailAddress": self.reply_email_address,
            "recipientEmail": self.recipient_email,
        })


@dataclass
class SmsConfig:
    """SMS channel of a notification."""
    recipient_user_proxy_type: str
    recipient_user_proxy_keys: List[str] = field(default_factory=list)
    # Comma separated list of phone numbers
    recipient_phone: str = ""
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipientUserProxyType": self.recipient_user_proxy_type,
            "recipientUserProxyKeys": self.recipient_user_proxy_keys,
            "recipientPhone": self.recipient_phone,
        }


@dataclass
class PushConfig:
    """Push channel of a notification."""
    recipient_user_proxy_type: str
    recipient_user_proxy_keys: List[str] = field(default_factory=list)
    navigation_data: Optional[Dict[str, str]] = None
    
    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "recipientUserProxyType": self.recipient_user_proxy_type,
            "recipientUserProxyKeys": self.recipient_user_proxy_keys,
            "navigationData": self.navigation_data,
        })


@dataclass
class NotificationConfig:
    """
    A notification the platform should trigger after a successful action.
    
    The SDK only carries this in the response; the platform sends it.
    
    Attributes:
        notification_definition_id: ID of a notification definition in the solution
        organization_proxy_key: Key of the organization proxy
        data_object_type: Object type of the data the notification is about
        data_object_key: Key of that data object
        params: Parameters passed to the notification
        email_config / sms_config / push_config: Optional channel settings
    """
    notification_definition_id: str
    organization_proxy_key: str
    data_object_type: str
    data_object_key: str
    params: Dict[str, Any] = field(default_factory=dict)
    email_config: Optional[EmailConfig] = None
    sms_config: Optional[SmsConfig] = None
    push_config: Optional[PushConfig] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the platform's camelCase shape."""
        return _compact({
            "notificationDefinitionId": self.notification_definition_id,
            "organizationProxyKey": self.organization_proxy_key,
            "dataObjectType": self.data_object_type,
            "dataObjectKey": self.data_object_key,
            "params": self.params,
            "emailConfig": self.email_config.to_dict() if self.email_config else None,
            "smsConfig": self.sms_config.to_dict() if self.sms_config else None,
            "pushConfig": self.push_config.to_dict() if self.push_config else None,
        })


# =============================================================================
# RESPONSE KINDS
# =============================================================================

@dataclass
class BaseActionResponse:
    """
    Fields shared by every successful action response.
    
    Subclasses set response_type and list their own fields in _wire_fields
    as (attribute, wire name) pairs. Attributes named in _optional_fields are
    left out of the wire shape when None.
    """
    response_type: ClassVar[ResponseType]
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = ()
    _optional_fields: ClassVar[Tuple[str, ...]] = ()
    
    is_error: bool = field(default=False, kw_only=True)
    notification_configs: Optional[List[NotificationConfig]] = field(default=None, kw_only=True)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the shape the calling framework expects."""
        data: Dict[str, Any] = {
            "responseType": self.response_type.value,
            "isError": self.is_error,
        }
        for attr, wire_name in self._wire_fields:
            value = getattr(self, attr)
            if value is None and attr in self._optional_fields:
                continue
            data[wire_name] = value
        if self.notification_configs:
            data["notificationConfigs"] = [
                n.to_dict() if isinstance(n, NotificationConfig) else n
                for n in self.notification_configs
            ]
        return data


@dataclass
class ListActionResponse(BaseActionResponse):
    """Response for actions run from a list."""
    response_type: ClassVar[ResponseType] = ResponseType.LIST_ACTION
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("updated_subject", "updatedSubject"),
        ("success_message", "successMessage"),
    )
    
    updated_subject: Any = None
    success_message: str = ""


@dataclass
class FormTemplateActionResponse(BaseActionResponse):
    """Response for actions run from a form template."""
    response_type: ClassVar[ResponseType] = ResponseType.FORM_TEMPLATE_ACTION
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("updated_subject", "updatedSubject"),
        ("success_message", "successMessage"),
    )
    
    updated_subject: Any = None
    success_message: str = ""


@dataclass
class PageTemplateActionResponse(BaseActionResponse):
    """Response for actions run from a page template."""
    response_type: ClassVar[ResponseType] = ResponseType.PAGE_TEMPLATE_ACTION
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("success_message", "successMessage"),
        ("context_variables", "contextVariables"),
        ("refresh_page", "refreshPage"),
    )
    _optional_fields: ClassVar[Tuple[str, ...]] = ("context_variables", "refresh_page")
    
    success_message: str = ""
    context_variables: Optional[Dict[str, Any]] = None
    refresh_page: Optional[bool] = None


@dataclass
class ObjectSaveActionResponse(BaseActionResponse):
    """Response for actions attached to object save events."""
    response_type: ClassVar[ResponseType] = ResponseType.OBJECT_SAVE_ACTION
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("updated_subject", "updatedSubject"),
        ("success_message", "successMessage"),
    )
    
    updated_subject: Any = None
    success_message: str = ""


@dataclass
class CalculatedFieldActionResponse(BaseActionResponse):
    """Response for actions that compute a calculated field value."""
    response_type: ClassVar[ResponseType] = ResponseType.CALCULATED_FIELD_ACTION
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("calculated_value", "calculatedValue"),
    )
    
    calculated_value: Any = None


@dataclass
class SingleValueActionResponse(BaseActionResponse):
    """Response for actions that produce one value for a platform event."""
    response_type: ClassVar[ResponseType] = ResponseType.SINGLE_VALUE_ACTION
    _wire_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("success_message", "successMessage"),
        ("value", "value"),
    )
    
    success_message: str = ""
    value: Any = None


@dataclass
class ErrorResponse:
    """Response for an unsuccessful action."""
    error_message: str
    response_type: ClassVar[ResponseType] = ResponseType.ERROR
    
    def to_dict(self) -> Dict[str, Any]:
        return {"responseType": self.response_type.value, "errorMessage": self.error_message}


ActionResponse = Union[
    ListActionResponse,
    FormTemplateActionResponse,
    PageTemplateActionResponse,
    ObjectSaveActionResponse,
    CalculatedFieldActionResponse,
    SingleValueActionResponse,
]


# =============================================================================
# FORMATTERS
# =============================================================================

def _payload(response: Any) -> Any:
    if isinstance(response, (BaseActionResponse, ErrorResponse)):
        return response.to_dict()
    return response


def prepare_success_response(
    context: ActionContext,
    success_response: Union[ActionResponse, Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Format a successful action response.
    
    If the context uses the body envelope, the response is JSON-encoded into
    {"statusCode": 200, "body": ...}. Otherwise it is returned directly;
    response dataclasses are converted to dicts and plain dicts are returned
    unchanged.
    
    Args:
        context: Session context from initialize()
        success_response: The response to return
        
    Returns:
        The handler's return value
    """
    payload = _payload(success_response)
    
    if context.use_body:
        return {
            "statusCode": 200,
            "body": jdump(payload),
        }
    
    return payload


def prepare_error_response(context: ActionContext, error_message: str) -> Dict[str, Any]:
    """
    Format an error response.
    
    If the context uses the body envelope, returns
    {"statusCode": 400, "body": '{"errorMessage": ...}'}. Otherwise returns
    {"responseType": "error", "errorMessage": ...}.
    """
    if context.use_body:
        return {
            "statusCode": 400,
            "body": jdump({"errorMessage": error_message}),
        }
    
    return ErrorResponse(error_message).to_dict()
