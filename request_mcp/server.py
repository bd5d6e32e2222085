#!/usr/bin/env python3
"""
request-mcp - Generic HTTP request proxy over MCP.

Callers register API templates (url, method, default params) and invoke
them by id with a JSON string of arguments.

## Tools
    before_request()                - list callable APIs
    register_api(config)            - register a template from a JSON string
    delete_api(id)                  - remove a template
    request(id, args)               - call an API, args is a JSON object string

## Usage
    request-mcp
    request-mcp --config-file ./api_configs.json --log-level DEBUG
"""

import argparse
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from request_mcp import __version__
from request_mcp.config import load_settings
from request_mcp.http_client import HttpClient
from request_mcp.logger import setup_logging
from request_mcp.store import JsonFileBackend, TemplateStore
from request_mcp.tools import ApiTools

log = logging.getLogger("request-mcp")

SERVER_NAME = "Request"

BEFORE_REQUEST_DESCRIPTION = """Before querying any data, this tool first retrieves a
list of available APIs that can be directly invoked.
It returns a list of interface definitions.
Based on the user's request match the appropriate API,
prompts the user to complete the required input parameters,
and then uses the request tool to make the call.
The first argument to request tool is the id field of the selected API from the list,
and complete other parameters that defined in the params field of the API using
a JSON string type as the second argument."""

REGISTER_API_DESCRIPTION = (
    "Register a new custom API. Complete API configuration information is required, "
    "including id, name, description, params, and api configuration."
)

REQUEST_DESCRIPTION = (
    "This is a general tool for sending requests. It takes 2 parameters: the first is "
    "the id of the API to call, and the second is the parameters required for the API "
    "request as a JSON object string"
)


def create_server(tools: ApiTools) -> FastMCP:
    """Build the MCP server with the four tools bound to `tools`."""
    mcp = FastMCP(SERVER_NAME, instructions=f"request-mcp {__version__}: call before_request first.")

    @mcp.tool(name="before_request", description=BEFORE_REQUEST_DESCRIPTION)
    def before_request() -> str:
        log.info("before_request")
        return tools.before_request()

    @mcp.tool(name="register_api", description=REGISTER_API_DESCRIPTION)
    def register_api(config: str) -> str:
        """config: API configuration JSON string"""
        log.info("register_api")
        return tools.register_api(config)

    @mcp.tool(name="delete_api", description="Delete a registered API.")
    def delete_api(id: str) -> str:
        """id: ID of the API to delete"""
        log.info("delete_api %s", id)
        return tools.delete_api(id)

    @mcp.tool(name="request", description=REQUEST_DESCRIPTION)
    def request(id: str, args: str) -> str:
        log.info("request %s", id)
        return tools.request(id, args)

    return mcp


def build_tools(settings) -> ApiTools:
    store = TemplateStore(JsonFileBackend(settings.config_file))
    store.initialize()
    return ApiTools(store, HttpClient(timeout=settings.timeout))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="request-mcp", description="Generic HTTP request proxy MCP server")
    parser.add_argument("--config-file", help="Path of the saved API configurations JSON file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--timeout", type=float, help="Outbound HTTP timeout in seconds")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings()
    if args.config_file:
        settings.config_file = Path(args.config_file)
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.timeout and args.timeout > 0:
        settings.timeout = args.timeout

    setup_logging(settings.logs_dir, settings.log_level)
    log.info("Starting %s (config: %s)", SERVER_NAME, settings.config_file)

    mcp = create_server(build_tools(settings))
    mcp.run()


if __name__ == "__main__":
    main()
