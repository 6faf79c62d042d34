import json
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ...atoms.errors.application_errors import RejectedRequestError
from ...atoms.logging.logger import get_logger
from ...error_handling import ErrorHandler
from ...pages.application.nvim_code_editor import NvimCodeEditor

logger = get_logger(__name__)

OPEN_FILE_TOOL = Tool(
    name="open_file",
    description="Open a file at a line and column in the workspace's Neovim server, starting the server and a client window if needed",
    inputSchema={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Path of the file to open. Leave empty to just bring up the editor at the project root",
                "default": "",
            },
            "line": {
                "type": "integer",
                "description": "Target line (1-indexed)",
                "default": 1,
            },
            "column": {
                "type": "integer",
                "description": "Target column (0-indexed)",
                "default": 0,
            },
        },
    },
)

SUPPORTS_EXTENSION_TOOL = Tool(
    name="supports_extension",
    description="Check whether the bridge opens files with the given path's extension",
    inputSchema={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "File path or name to check",
            }
        },
        "required": ["path"],
    },
)

RESET_ARGUMENTS_TOOL = Tool(
    name="reset_arguments",
    description="Reset the server, client and remote-control commands to their defaults",
    inputSchema={"type": "object", "properties": {}},
)

TOOLS = [OPEN_FILE_TOOL, SUPPORTS_EXTENSION_TOOL, RESET_ARGUMENTS_TOOL]


def handle_request(request: Dict[str, Any], editor: NvimCodeEditor) -> Dict[str, Any]:
    """
    Handle an MCP tool request.

    Args:
        request (Dict[str, Any]): The request JSON with 'name' and 'parameters'.
        editor (NvimCodeEditor): The editor integration to drive.

    Returns:
        Dict[str, Any]: The response JSON.
    """
    if "name" not in request:
        logger.error("Error: Received request missing 'name' field.")
        return {"success": False, "error": "Missing 'name' field in request"}

    request_type = request.get("name")
    params = request.get("parameters") or {}
    logger.info(f"Received request: Type='{request_type}'")

    try:
        if request_type == "open_file":
            result = editor.open_file(
                str(params.get("path", "")),
                int(params.get("line", 1)),
                int(params.get("column", 0)),
            )
            return result.to_response()
        elif request_type == "supports_extension":
            path = params.get("path")
            if not isinstance(path, str):
                raise RejectedRequestError("invalid_parameter", "'path' must be a string", {"path": repr(path)})
            return {"success": True, "supported": editor.supports_extension(path)}
        elif request_type == "reset_arguments":
            return {"success": True, "settings": editor.reset_arguments()}
        else:
            logger.warning(f"Warning: Unknown request type received: {request_type}")
            return {"success": False, "error": f"Unknown request type: {request_type}"}
    except Exception as e:
        return ErrorHandler.handle_exception(e, f"tool '{request_type}'", logger)


async def serve(editor: NvimCodeEditor) -> None:
    """
    Start the MCP server over stdio.

    Args:
        editor (NvimCodeEditor): The editor integration the tools drive.
    """
    logger.info("Starting Neovim editor bridge MCP server (stdio mode)")

    server: Server[List[TextContent]] = Server("nvim-editor-bridge")

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        logger.info(f"Received Tool Call (stdio): Name='{name}'")
        result_dict = handle_request({"name": name, "parameters": arguments}, editor)
        return [TextContent(type="text", text=json.dumps(result_dict))]

    try:
        options = server.create_initialization_options()
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server running. Waiting for requests...")
            await server.run(read_stream, write_stream, options)
    finally:
        logger.info("Neovim editor bridge MCP server shutting down.")
