"""
Tool-call dispatcher for the YouTube MCP Server.

The dispatcher is the only place where internal failures become
caller-visible messages. Nothing raised by an operation escapes dispatch():
every call ends in exactly one success or error response, and a failed call
never affects the next one.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config.settings import ConfigurationError
from services.projections import to_jsonable
from services.youtube_client import UpstreamError
from .tool_registry import (
    MCPToolRegistry,
    ToolArgumentError,
    UnknownToolError,
    to_parameter_name,
    validate_arguments,
)

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass
class ToolCallResponse:
    """MCP-level envelope: {type, content: [{type: "text", text: <JSON>}]}."""
    type: str
    content: List[Dict[str, str]] = field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def success(cls, payload: Any) -> "ToolCallResponse":
        text = json.dumps(to_jsonable(payload), ensure_ascii=False)
        return cls(type=SUCCESS, content=[{"type": "text", "text": text}])

    @classmethod
    def error(cls, message: str) -> "ToolCallResponse":
        text = json.dumps({"error": message}, ensure_ascii=False)
        return cls(type=ERROR, content=[{"type": "text", "text": text}], message=message)

    @property
    def is_error(self) -> bool:
        return self.type == ERROR

    @property
    def text(self) -> str:
        """Text of the first content item."""
        return self.content[0]["text"] if self.content else ""

    def payload(self) -> Any:
        """Decoded JSON payload of the first content item."""
        return json.loads(self.text) if self.text else None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "content": [dict(item) for item in self.content]}


class ToolDispatcher:
    """
    Routes tool calls to registered operations and wraps their results.

    Stateless across calls; the registry is read-only after startup.
    """

    def __init__(self, registry: MCPToolRegistry, validate: bool = True):
        """
        Initialize the dispatcher.

        Args:
            registry: Populated tool registry
            validate: Check arguments against the tool argument models before invoking operations
        """
        self.registry = registry
        self.validate = validate

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolCallResponse:
        """
        Execute one tool call.

        Args:
            name: Tool name ({service}_{operation})
            arguments: Caller-supplied arguments

        Returns:
            Success response with the serialized result, or error response with a message
        """
        arguments = {} if arguments is None else arguments
        logger.info("Tool call '%s' with args: %s", name, arguments)

        try:
            definition = self.registry.resolve(name)
            if self.validate:
                kwargs = validate_arguments(definition, arguments)
            else:
                kwargs = {
                    to_parameter_name(key): value
                    for key, value in arguments.items()
                    if value is not None
                }
            result = await definition.operation(**kwargs)
            response = ToolCallResponse.success(result)
        except UnknownToolError as e:
            logger.warning("Tool '%s' not found", name)
            return ToolCallResponse.error(str(e))
        except ToolArgumentError as e:
            logger.warning("Rejected arguments for tool '%s': %s", name, e)
            return ToolCallResponse.error(str(e))
        except ConfigurationError as e:
            logger.critical("Configuration error while executing '%s': %s", name, e)
            return ToolCallResponse.error(str(e))
        except UpstreamError as e:
            logger.warning("Tool '%s' failed: %s", name, e)
            return ToolCallResponse.error(str(e))
        except Exception as e:
            logger.error("Unexpected error executing tool '%s': %s", name, e, exc_info=True)
            return ToolCallResponse.error(f"Failed to execute tool '{name}': {e}")

        logger.info("Tool '%s' succeeded (%d bytes)", name, len(response.text))
        return response


def create_tool_dispatcher(registry: MCPToolRegistry, validate: bool = True) -> ToolDispatcher:
    """
    Factory function to create ToolDispatcher instance.

    Args:
        registry: Populated tool registry
        validate: Whether to validate arguments before dispatch

    Returns:
        Configured ToolDispatcher
    """
    return ToolDispatcher(registry, validate=validate)
