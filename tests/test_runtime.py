#!/usr/bin/env python3
"""
Test suite for the runtime layer.

Tests:
- ActionContext creation and properties
- Event parsing (direct invoke, HTTP body, JSON string body)
- Settings from environment

Run with: pytest tests/test_runtime.py -v
"""
import os
import sys
import json
import logging
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


EVENT_PAYLOAD = {
    "authToken": "token-abc-123456",
    "sandboxKey": "sbx-1",
    "serviceAddress": "https://data.example.test",
    "actionSubject": {"objKey": "order-1", "total": 10},
    "userContext": {"userProxyKey": "cust-9"},
    "params": {"note": "rush"},
}


# =============================================================================
# TEST: ActionContext
# =============================================================================

class TestActionContext:
    """Tests for ActionContext."""
    
    def test_from_payload(self):
        """Test context creation from payload fields."""
        from action_sdk.runtime.context import ActionContext
        
        ctx = ActionContext.from_payload(EVENT_PAYLOAD)
        
        assert ctx.auth_token == "token-abc-123456"
        assert ctx.sandbox_key == "sbx-1"
        assert ctx.service_address == "https://data.example.test"
        assert ctx.action_subject == {"objKey": "order-1", "total": 10}
        assert ctx.user_context == {"userProxyKey": "cust-9"}
        assert ctx.params == {"note": "rush"}
        assert ctx.use_body is False
    
    def test_missing_fields_are_none(self):
        """Test that absent fields stay None."""
        from action_sdk.runtime.context import ActionContext
        
        ctx = ActionContext.from_payload({"sandboxKey": "sbx-1"})
        
        assert ctx.sandbox_key == "sbx-1"
        assert ctx.auth_token is None
        assert ctx.params is None
        assert ctx.is_authenticated is False
    
    def test_context_is_immutable(self):
        """Test that a context cannot be changed after creation."""
        import dataclasses
        import pytest
        from action_sdk.runtime.context import ActionContext
        
        ctx = ActionContext.from_payload(EVENT_PAYLOAD)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.auth_token = "other"
    
    def test_param_helper(self):
        """Test single parameter lookup."""
        from action_sdk.runtime.context import ActionContext
        
        ctx = ActionContext.from_payload(EVENT_PAYLOAD)
        assert ctx.param("note") == "rush"
        assert ctx.param("missing", "dflt") == "dflt"
        
        no_params = ActionContext()
        assert no_params.param("note") is None
    
    def test_to_dict(self):
        """Test camelCase serialization."""
        from action_sdk.runtime.context import ActionContext
        
        d = ActionContext.from_payload(EVENT_PAYLOAD, use_body=True).to_dict()
        assert d["sandboxKey"] == "sbx-1"
        assert d["useBody"] is True
        assert "rawEvent" not in d
    
    def test_mask_token(self):
        """Test token masking for logs."""
        from action_sdk.runtime.context import mask_token
        
        assert mask_token(None) == "<none>"
        assert mask_token("short") == "***"
        assert mask_token("token-abc-123456") == "toke...3456"


# =============================================================================
# TEST: Event Parser
# =============================================================================

class TestInitialize:
    """Tests for initialize() and payload detection."""
    
    def test_top_level_event(self):
        """Test direct invoke events with fields at the top level."""
        from action_sdk.runtime.parse_event import initialize
        from action_sdk.runtime.context import PayloadLocation
        
        ctx = initialize(dict(EVENT_PAYLOAD))
        
        assert ctx.use_body is False
        assert ctx.payload_location == PayloadLocation.TOP_LEVEL
        assert ctx.auth_token == "token-abc-123456"
        assert ctx.params == {"note": "rush"}
    
    def test_body_event(self):
        """Test HTTP events with fields nested under body."""
        from action_sdk.runtime.parse_event import initialize
        from action_sdk.runtime.context import PayloadLocation
        
        ctx = initialize({"body": dict(EVENT_PAYLOAD)})
        
        assert ctx.use_body is True
        assert ctx.payload_location == PayloadLocation.BODY
        assert ctx.sandbox_key == "sbx-1"
        assert ctx.action_subject["objKey"] == "order-1"
    
    def test_json_string_body(self):
        """Test bodies delivered as JSON strings."""
        from action_sdk.runtime.parse_event import initialize
        
        ctx = initialize({"body": json.dumps(EVENT_PAYLOAD)})
        
        assert ctx.use_body is True
        assert ctx.service_address == "https://data.example.test"
    
    def test_invalid_json_body(self):
        """Test that an undecodable body yields an empty context."""
        from action_sdk.runtime.parse_event import initialize
        
        ctx = initialize({"body": "not json"})
        
        assert ctx.use_body is True
        assert ctx.auth_token is None
        assert ctx.sandbox_key is None
    
    def test_empty_body_reads_top_level(self):
        """Test that a falsy body is ignored."""
        from action_sdk.runtime.parse_event import initialize
        
        event = dict(EVENT_PAYLOAD, body="")
        ctx = initialize(event)
        
        assert ctx.use_body is False
        assert ctx.sandbox_key == "sbx-1"
    
    def test_empty_event(self):
        """Test that empty or missing events do not raise."""
        from action_sdk.runtime.parse_event import initialize
        
        for event in (None, {}):
            ctx = initialize(event)
            assert ctx.use_body is False
            assert ctx.auth_token is None
    
    def test_raw_event_kept(self):
        """Test that the original event is preserved."""
        from action_sdk.runtime.parse_event import initialize
        
        event = {"body": dict(EVENT_PAYLOAD), "headers": {"x-test": "1"}}
        ctx = initialize(event)
        assert ctx.raw_event["headers"] == {"x-test": "1"}
    
    def test_token_not_logged(self, caplog):
        """Test that initialization logs do not leak the token."""
        from action_sdk.runtime.parse_event import initialize
        
        with caplog.at_level(logging.INFO, logger="action_sdk"):
            initialize(dict(EVENT_PAYLOAD))
        
        assert "sbx-1" in caplog.text
        assert "token-abc-123456" not in caplog.text
    
    def test_independent_contexts(self):
        """Test that two invocations do not share state."""
        from action_sdk.runtime.parse_event import initialize
        
        first = initialize(dict(EVENT_PAYLOAD))
        second = initialize({"body": {"sandboxKey": "sbx-2"}})
        
        assert first.sandbox_key == "sbx-1"
        assert first.use_body is False
        assert second.sandbox_key == "sbx-2"
        assert second.use_body is True


# =============================================================================
# TEST: Settings
# =============================================================================

class TestSettings:
    """Tests for environment configuration."""
    
    def test_defaults(self):
        """Test defaults when nothing is set."""
        from action_sdk.runtime.config import Settings
        
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        
        assert settings.http_timeout is None
        assert settings.log_level == "INFO"
        assert settings.verify_ssl is True
    
    def test_from_env(self):
        """Test reading values from the environment."""
        from action_sdk.runtime.config import Settings
        
        env = {
            "ACTION_SDK_HTTP_TIMEOUT": "12.5",
            "ACTION_SDK_LOG_LEVEL": "debug",
            "ACTION_SDK_VERIFY_SSL": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        
        assert settings.http_timeout == 12.5
        assert settings.log_level == "DEBUG"
        assert settings.verify_ssl is False
    
    def test_bad_timeout_ignored(self):
        """Test that a non-numeric timeout falls back to no timeout."""
        from action_sdk.runtime.config import Settings
        
        with patch.dict(os.environ, {"ACTION_SDK_HTTP_TIMEOUT": "soon"}, clear=True):
            assert Settings.from_env().http_timeout is None
    
    def test_get_settings_cached(self):
        """Test process default settings are created once."""
        from action_sdk.runtime.config import get_settings, reset_settings
        
        reset_settings()
        try:
            assert get_settings() is get_settings()
        finally:
            reset_settings()
    
    def test_configure_logging(self):
        """Test log level applied to the package logger."""
        from action_sdk.runtime.config import Settings, configure_logging
        
        sdk_logger = configure_logging(Settings(log_level="WARNING"))
        assert sdk_logger.name == "action_sdk"
        assert sdk_logger.level == logging.WARNING
        
        sdk_logger = configure_logging(Settings(log_level="NOPE"))
        assert sdk_logger.level == logging.INFO
