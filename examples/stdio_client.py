#!/usr/bin/env python3
"""Example: talk to the tool server over stdio like an MCP host would.

Spawns ``python -m tool_server`` as a subprocess, lists its tools and
calls each of them once, including an unknown tool to show the error
envelope.

Run:
    API_KEY=demo-key SERVER_NAME=demo python examples/stdio_client.py
"""

import asyncio
import os
import sys

from mcp import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client

CALLS = [
    ("echo", {"message": "hello"}),
    ("get_time", {}),
    ("get_env", {"key": "SERVER_NAME"}),
    ("get_config", {}),
    ("bogus_tool", {}),
]


async def main():
    server_params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "tool_server"],
        env=dict(os.environ),
    )

    async with stdio_client(server_params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()

            listed = await session.list_tools()
            print(f"Discovered {len(listed.tools)} tool(s): {[t.name for t in listed.tools]}")

            for name, arguments in CALLS:
                result = await session.call_tool(name, arguments=arguments)
                texts = [c.text for c in result.content if hasattr(c, "text")]
                marker = "ERROR" if result.isError else "ok"
                print(f"  [{marker}] {name}({arguments}) -> {' '.join(texts)}")


if __name__ == "__main__":
    asyncio.run(main())
