"""FastMCP server exposing the Playdate toolchain as agent tools."""

from __future__ import annotations

import asyncio
from typing import Any

from fastmcp import FastMCP

from playdate_dev.core.build import run_build
from playdate_dev.core.catalog import list_examples, list_templates
from playdate_dev.core.create import create_project
from playdate_dev.core.device import deploy_bundle, query_device
from playdate_dev.core.settings import Settings
from playdate_dev.core.simulator import launch_simulator

# Parameter names are camelCase to match the published tool schemas.


def create_mcp_server(settings: Settings) -> FastMCP:
    """Create a FastMCP server wired to the given settings.

    Every tool returns a result object; failures are reported inside it
    rather than as protocol errors.
    """

    mcp = FastMCP(
        "playdate-dev",
        instructions="Build, run, scaffold, and deploy Playdate games with the Playdate SDK.",
    )

    @mcp.tool(name="playdate_build")
    async def build(
        sourceDir: str | None = None,  # noqa: N803
        outputPath: str | None = None,  # noqa: N803
        projectDir: str | None = None,  # noqa: N803
    ) -> dict[str, Any]:
        """Compile Playdate Lua source to a .pdx bundle. Parses compiler errors into structured output."""
        result = await run_build(settings, projectDir, source_dir=sourceDir, output_path=outputPath)
        return result.to_payload()

    @mcp.tool(name="playdate_create")
    async def create(
        name: str,
        template: str | None = None,
        outputDir: str | None = None,  # noqa: N803
    ) -> dict[str, Any]:
        """Create a new Playdate project from a template (basic, crank-game, sprite-based)."""
        result = await asyncio.to_thread(create_project, settings, name, template, outputDir)
        return result.to_payload()

    @mcp.tool(name="playdate_run")
    async def run(pdxPath: str | None = None) -> dict[str, Any]:  # noqa: N803
        """Launch the Playdate Simulator with a .pdx bundle (defaults to output.pdx in cwd)."""
        result = await launch_simulator(settings, pdxPath)
        return result.to_payload()

    @mcp.tool(name="playdate_deploy")
    async def deploy(pdxPath: str | None = None) -> dict[str, Any]:  # noqa: N803
        """Install a .pdx bundle to a connected Playdate device via USB."""
        result = await deploy_bundle(settings, pdxPath)
        return result.to_payload()

    @mcp.tool(name="playdate_templates")
    async def templates() -> dict[str, Any]:
        """List available Playdate project templates."""
        return {"templates": [t.to_payload() for t in list_templates(settings)]}

    @mcp.tool(name="playdate_examples")
    async def examples() -> dict[str, Any]:
        """List available Playdate example projects."""
        return {"examples": [e.to_payload() for e in list_examples(settings)]}

    @mcp.tool(name="playdate_device_info")
    async def device_info() -> dict[str, Any]:
        """Get status and info of the connected Playdate device."""
        result = await query_device(settings)
        return result.to_payload()

    return mcp
