"""API node: simulated HTTP call with artificial latency, no network access."""
import asyncio
import json
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.graph import Node
from .base import BaseNode, RunContext, first_input
from .registry import NodeRegistry


@NodeRegistry.register(NodeType.API)
class ApiNode(BaseNode):
    CATEGORY = "API"
    DISPLAY_NAME = "API Request"
    DESCRIPTION = "Returns a mocked success response after a simulated network delay"
    DEFAULT_INPUTS = ["request"]
    DEFAULT_OUTPUTS = ["data"]
    BEHAVIORS = (BehaviorKind.HTTP_REQUEST,)

    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        url = getattr(node.config, "url", None) or "https://api.example.com/data"
        method = (getattr(node.config, "method", None) or "GET").upper()
        run.log(f"🌐 API Call: {method} {url}")

        await asyncio.sleep(run.options.api_latency())

        response = {
            "status": 200,
            "message": "API response data",
            "timestamp": run.timestamp(),
            "input": first_input(inputs),
            "processed": True,
        }
        run.log(f"📡 API Response: {json.dumps(response, default=str)}")
        return response
