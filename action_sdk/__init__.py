# =============================================================================
# Action SDK
# =============================================================================
# SDK for Lambda-based platform actions: accept the incoming event, call the
# platform data service, and return structured action responses.
#
#   from action_sdk import initialize, get_related_objects, prepare_success_response
#
#   def handler(event, context):
#       ctx = initialize(event)
#       ...
#       return prepare_success_response(ctx, ListActionResponse(...))
# =============================================================================

from action_sdk.runtime import ActionContext, Settings, configure_logging, get_settings, initialize
from action_sdk.client import (
    DataServiceClient,
    SaveOptions,
    create_client,
    get_object,
    get_object_async,
    get_related_objects,
    get_related_objects_async,
    save_related_object,
    save_related_object_async,
)
from action_sdk.sorting import SortField, compare_values, get_value_from_object, sort_object_array
from action_sdk.responses import (
    ActionResponse,
    BaseActionResponse,
    CalculatedFieldActionResponse,
    EmailConfig,
    ErrorResponse,
    FormTemplateActionResponse,
    ListActionResponse,
    NotificationConfig,
    ObjectSaveActionResponse,
    PageTemplateActionResponse,
    PushConfig,
    ResponseType,
    SingleValueActionResponse,
    SmsConfig,
    prepare_error_response,
    prepare_success_response,
)
from action_sdk.app import action_handler

__version__ = "1.0.6"

__all__ = [
    "ActionContext",
    "Settings",
    "configure_logging",
    "get_settings",
    "initialize",
    "DataServiceClient",
    "SaveOptions",
    "create_client",
    "get_object",
    "get_object_async",
    "get_related_objects",
    "get_related_objects_async",
    "save_related_object",
    "save_related_object_async",
    "SortField",
    "compare_values",
    "get_value_from_object",
    "sort_object_array",
    "ActionResponse",
    "BaseActionResponse",
    "CalculatedFieldActionResponse",
    "EmailConfig",
    "ErrorResponse",
    "FormTemplateActionResponse",
    "ListActionResponse",
    "NotificationConfig",
    "ObjectSaveActionResponse",
    "PageTemplateActionResponse",
    "PushConfig",
    "ResponseType",
    "SingleValueActionResponse",
    "SmsConfig",
    "prepare_error_response",
    "prepare_success_response",
    "action_handler",
]
