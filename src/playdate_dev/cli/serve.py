from typing import Annotated

import typer
from rich.console import Console

# MCP stdio uses stdout for the protocol.
console = Console(stderr=True)


def serve(
    transport: Annotated[str, typer.Option(help="MCP transport: stdio, sse, or http.")] = "stdio",
    host: Annotated[str, typer.Option(help="Bind address for network transports.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port for network transports.")] = 8765,
) -> None:
    """Start the MCP server exposing the Playdate tools."""
    from playdate_dev.cli.common import get_settings
    from playdate_dev.mcp.server import create_mcp_server

    server = create_mcp_server(get_settings())
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    if transport == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=transport, host=host, port=port)  # type: ignore[arg-type]
