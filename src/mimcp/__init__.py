"""mimcp: a small MCP tool server over stdio.

Usage:
    import asyncio
    import mimcp

    asyncio.run(mimcp.serve(mimcp.load_server_config()))

Or from a shell: ``mimcp serve``.
"""

from mimcp.core.config import load_server_config
from mimcp.core.dispatcher import Dispatcher, DispatcherState
from mimcp.core.engine import serve
from mimcp.core.server import ToolServer
from mimcp.tools.registry import ToolRegistration, ToolRegistry, build_default_registry
from mimcp.types.config import SERVER_VERSION, ServerConfig
from mimcp.types.errors import ErrorKind
from mimcp.types.tools import (
    BoundArguments,
    InvocationRequest,
    ParamType,
    ToolContext,
    ToolDef,
    ToolParam,
    ToolResultData,
)

__version__ = SERVER_VERSION

__all__ = [
    # Core API
    "serve",
    "load_server_config",
    "Dispatcher",
    "DispatcherState",
    "ToolServer",
    # Registry
    "ToolRegistration",
    "ToolRegistry",
    "build_default_registry",
    # Types
    "BoundArguments",
    "ErrorKind",
    "InvocationRequest",
    "ParamType",
    "ServerConfig",
    "ToolContext",
    "ToolDef",
    "ToolParam",
    "ToolResultData",
]
