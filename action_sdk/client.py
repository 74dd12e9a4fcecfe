# =============================================================================
# Data Service Client
# =============================================================================
# Authenticated requests to the platform data service. Objects are addressed
# by schema path:
#
#   {serviceAddress}/schema/sandboxes/{sandboxKey}/{elementId}/{key}
#   {serviceAddress}/schema/sandboxes/{sandboxKey}/{parentElementId}/{parentKey}/{elementId}
#
# Every call is a single request. Failures are raised as requests exceptions
# for the action handler to turn into an error response.
#
# Usage:
#   from action_sdk import initialize, get_related_objects
#
#   ctx = initialize(event)
#   purchases = get_related_objects(ctx, "customer", customer_key, "purchase")
# =============================================================================

import asyncio
import logging
import requests
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Union
from action_sdk.runtime.config import Settings, get_settings
from action_sdk.runtime.context import ActionContext, mask_token

logger = logging.getLogger(__name__)


@dataclass
class SaveOptions:
    """Options for save operations."""
    bypass_validation: bool = False
    
    @classmethod
    def coerce(cls, opts: Union["SaveOptions", Mapping[str, Any], None]) -> "SaveOptions":
        """Accept SaveOptions, a camelCase mapping, or None."""
        if opts is None:
            return cls()
        if isinstance(opts, cls):
            return opts
        return cls(bypass_validation=bool(opts.get("bypassValidation", opts.get("bypass_validation"))))


class DataServiceClient:
    """
    Client for the platform data service, bound to one ActionContext.
    
    The auth token, service address and sandbox key all come from the
    context. If any of them is missing the request still goes out: without a
    token it is unauthenticated and the service is expected to reject it,
    without an address or sandbox the URL is malformed.
    """
    
    def __init__(self, context: ActionContext, settings: Settings = None):
        """
        Initialize the client.
        
        Args:
            context: Session context from initialize()
            settings: SDK settings (defaults to the environment settings)
        """
        self.context = context
        self.settings = settings or get_settings()
    
    @property
    def base_url(self) -> str:
        """Schema URL prefix for the current sandbox."""
        return f"{self.context.service_address}/schema/sandboxes/{self.context.sandbox_key}"
    
    def object_url(self, data_element_id: str, key: str) -> str:
        """URL of a single object."""
        return f"{self.base_url}/{data_element_id}/{key}"
    
    def related_url(self, parent_element_id: str, parent_key: str, element_id: str) -> str:
        """URL of the objects related to a parent object."""
        return f"{self.base_url}/{parent_element_id}/{parent_key}/{element_id}"
    
    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {"Accept": "application/json"}
        if self.context.auth_token:
            headers["Authorization"] = f"Bearer {self.context.auth_token}"
        return headers
    
    def _request(
        self,
        method: str,
        url: str,
        params: Dict[str, str] = None,
        body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON response."""
        headers = self._headers()
        kwargs: Dict[str, Any] = {}
        
        if body is not None:
            if isinstance(body, (str, bytes)):
                headers["Content-Type"] = "application/json"
                kwargs["data"] = body
            else:
                kwargs["json"] = body
        
        logger.info(f"Sending {method} request to {url} with token {mask_token(self.context.auth_token)}")
        
        response = requests.request(
            method=method,
            url=url,
            headers=headers,
            params=params or None,
            timeout=self.settings.http_timeout,
            verify=self.settings.verify_ssl,
            **kwargs,
        )
        response.raise_for_status()
        
        if not response.content:
            return None
        return response.json()
    
    # =========================================================================
    # READ API
    # =========================================================================
    
    def get_related_objects(
        self,
        parent_element_id: str,
        parent_key: str,
        element_id: str,
        filter: str = None,
        fetched_relationships: List[str] = None,
    ) -> List[Any]:
        """
        Retrieve the objects related to a parent through a schema relationship.
        
        Typically used to fetch everything belonging to the current user
        proxy or organization proxy, e.g. all "purchase" objects of the
        current "customer". The auth token must have scope access to the
        parent object.
        
        Args:
            parent_element_id: Element ID of the parent
            parent_key: Key of the parent object
            element_id: Element ID of the related objects
            filter: Optional filter expression; all related objects when omitted
            fetched_relationships: Optional relationships to include as nested objects
            
        Returns:
            List of objects
        """
        params = {}
        if filter:
            params["filter"] = filter
        if fetched_relationships is not None:
            params["fetchedRelationships"] = ",".join(fetched_relationships)
        
        url = self.related_url(parent_element_id, parent_key, element_id)
        return self._request("GET", url, params=params)
    
    def get_object(
        self,
        data_element_id: str,
        key: str,
        fetched_relationships: List[str] = None,
    ) -> Dict[str, Any]:
        """
        Retrieve a single object by data element ID and key.
        
        Args:
            data_element_id: Element ID of the object
            key: Key of the object
            fetched_relationships: Optional relationships to include as nested objects
            
        Returns:
            The object
        """
        params = {}
        if fetched_relationships is not None:
            params["fetchedRelationships"] = ",".join(fetched_relationships)
        
        return self._request("GET", self.object_url(data_element_id, key), params=params)
    
    # =========================================================================
    # WRITE API
    # =========================================================================
    
    def save_related_object(
        self,
        parent_element_id: str,
        parent_key: str,
        element_id: str,
        object_to_save: Any,
        opts: Union[SaveOptions, Mapping[str, Any]] = None,
    ) -> Any:
        """
        Save an object and relate it to a parent object.
        
        The relationship is the one defined in the schema between the two
        elements, and the user must have scope access to the parent.
        
        Args:
            parent_element_id: Element ID of the parent
            parent_key: Key of the parent object
            element_id: Element ID of the object to save
            object_to_save: The object, as a dict or an already encoded JSON string
            opts: Optional SaveOptions
            
        Returns:
            The saved object as returned by the service, including any
            assigned objKey and calculated values
        """
        opts = SaveOptions.coerce(opts)
        
        url = self.related_url(parent_element_id, parent_key, element_id)
        if opts.bypass_validation:
            url += "?bypassValidation=true"
        
        return self._request("POST", url, body=object_to_save)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_client(context: ActionContext, settings: Settings = None) -> DataServiceClient:
    """Create a data service client for a context."""
    return DataServiceClient(context, settings=settings)


def get_related_objects(
    context: ActionContext,
    parent_element_id: str,
    parent_key: str,
    element_id: str,
    filter: str = None,
    fetched_relationships: List[str] = None,
) -> List[Any]:
    """See DataServiceClient.get_related_objects."""
    return create_client(context).get_related_objects(
        parent_element_id, parent_key, element_id, filter, fetched_relationships
    )


def get_object(
    context: ActionContext,
    data_element_id: str,
    key: str,
    fetched_relationships: List[str] = None,
) -> Dict[str, Any]:
    """See DataServiceClient.get_object."""
    return create_client(context).get_object(data_element_id, key, fetched_relationships)


def save_related_object(
    context: ActionContext,
    parent_element_id: str,
    parent_key: str,
    element_id: str,
    object_to_save: Any,
    opts: Union[SaveOptions, Mapping[str, Any]] = None,
) -> Any:
    """See DataServiceClient.save_related_object."""
    return create_client(context).save_related_object(
        parent_element_id, parent_key, element_id, object_to_save, opts
    )


# =============================================================================
# ASYNC VARIANTS
# =============================================================================
# Calling one of these only creates a coroutine; the request is sent when it
# is awaited. The blocking call runs on a worker thread.

async def get_related_objects_async(
    context: ActionContext,
    parent_element_id: str,
    parent_key: str,
    element_id: str,
    filter: str = None,
    fetched_relationships: List[str] = None,
) -> List[Any]:
    """Awaitable get_related_objects."""
    return await asyncio.to_thread(
        get_related_objects,
        context, parent_element_id, parent_key, element_id, filter, fetched_relationships,
    )


async def get_object_async(
    context: ActionContext,
    data_element_id: str,
    key: str,
    fetched_relationships: List[str] = None,
) -> Dict[str, Any]:
    """Awaitable get_object."""
    return await asyncio.to_thread(get_object, context, data_element_id, key, fetched_relationships)


async def save_related_object_async(
    context: ActionContext,
    parent_element_id: str,
    parent_key: str,
    element_id: str,
    object_to_save: Any,
    opts: Union[SaveOptions, Mapping[str, Any]] = None,
) -> Any:
    """Awaitable save_related_object."""
    return await asyncio.to_thread(
        save_related_object,
        context, parent_element_id, parent_key, element_id, object_to_save, opts,
    )


def error_message_from(exc: requests.RequestException) -> str:
    """
    Best-effort user message for a failed request.
    
    Uses the service's errorMessage/message field when the response body is
    JSON, otherwise the exception text.
    """
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            message = data.get("errorMessage") or data.get("message")
            if message:
                return str(message)
    return str(exc)
