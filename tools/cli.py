#!/usr/bin/env python3
# =============================================================================
# CLI Tool for Local Action Invocation
# =============================================================================
# Runs an action handler locally with a hand-written event, the same way the
# platform would invoke it.
#
# Usage:
#   python tools/cli.py my_actions:handler --file event.json
#   python tools/cli.py my_actions:handler --json '{"authToken": "...", "params": {}}'
#   python tools/cli.py my_actions:handler --file event.json --body --pretty
# =============================================================================

import argparse
import importlib
import json
import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from action_sdk.runtime.config import configure_logging


def load_handler(target: str):
    """Import a handler given as "module:function"."""
    module_name, sep, func_name = target.partition(":")
    if not sep or not module_name or not func_name:
        raise ValueError(f"Handler must be given as module:function, got {target!r}")
    
    module = importlib.import_module(module_name)
    handler = getattr(module, func_name, None)
    if not callable(handler):
        raise ValueError(f"{target} is not callable")
    return handler


def build_event(payload: dict, wrap_in_body: bool = False) -> dict:
    """Build the event passed to the handler."""
    if wrap_in_body:
        return {"body": payload}
    return payload


def is_error_result(result) -> bool:
    """Check if a handler result represents a failure."""
    if not isinstance(result, dict):
        return False
    if result.get("responseType") == "error":
        return True
    status_code = result.get("statusCode", 200)
    return isinstance(status_code, int) and status_code >= 400


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Invoke an action handler locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s my_actions:handler --file event.json
  %(prog)s my_actions:handler --json '{"sandboxKey": "sbx", "params": {}}'
  %(prog)s my_actions:handler --file event.json --body --pretty
        """
    )
    
    parser.add_argument("handler", help="Handler to invoke, as module:function")
    parser.add_argument("--json", "-j", help="JSON event payload")
    parser.add_argument("--file", "-f", help="JSON file to load event payload from")
    parser.add_argument("--body", "-b", action="store_true", help="Nest the payload under 'body' (HTTP invocation)")
    parser.add_argument("--pretty", "-p", action="store_true", help="Pretty print output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log SDK activity to stderr")
    
    args = parser.parse_args(argv)
    
    if args.verbose:
        logging.basicConfig(level=logging.INFO)
        configure_logging()
    
    # Build payload
    payload = {}
    
    if args.file:
        with open(args.file, "r") as f:
            payload = json.load(f)
    elif args.json:
        payload = json.loads(args.json)
    
    handler = load_handler(args.handler)
    result = handler(build_event(payload, args.body), None)
    
    # Output
    if args.pretty:
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    else:
        print(json.dumps(result, ensure_ascii=False, default=str))
    
    # Exit with appropriate code
    if is_error_result(result):
        sys.exit(1)


if __name__ == "__main__":
    main()
