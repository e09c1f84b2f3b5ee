"""Name-based lookup of the batch tools."""

from __future__ import annotations

from typing import Dict, List

from .interfaces import BaseTool, BatchContext


class ToolRegistry:
    """Maps command names such as ``"compress"`` to tool classes."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class

    def create(self, name: str, context: BatchContext) -> BaseTool:
        try:
            tool_class = self._tools[name]
        except KeyError as exc:
            available = ", ".join(self.names()) or "none"
            raise KeyError(f"Unknown tool '{name}' (available: {available})") from exc
        return tool_class(context)

    def names(self) -> List[str]:
        return sorted(self._tools)


registry = ToolRegistry()


def register_tool(name: str):
    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool"]
