"""Tests for the MCP server tool definitions."""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from playdate_dev.core.exec import ExecResult
from playdate_dev.core.settings import Settings
from playdate_dev.mcp.server import create_mcp_server

_TOOL_NAMES = {
    "playdate_build",
    "playdate_create",
    "playdate_run",
    "playdate_deploy",
    "playdate_templates",
    "playdate_examples",
    "playdate_device_info",
}


async def _tool_fn(settings: Settings, name: str) -> Any:
    tools = await create_mcp_server(settings).get_tools()
    return tools[name].fn  # type: ignore[attr-defined]


class TestMcpServerCreation:
    def test_creates_server(self, settings: Settings) -> None:
        server = create_mcp_server(settings)
        assert server is not None
        assert server.name == "playdate-dev"

    @pytest.mark.asyncio
    async def test_server_has_tools(self, settings: Settings) -> None:
        tools = await create_mcp_server(settings).get_tools()
        tool_names = {t.name for t in tools.values()}
        assert tool_names == _TOOL_NAMES

    @pytest.mark.asyncio
    async def test_parameters_are_camel_case_and_optional(self, settings: Settings) -> None:
        build = inspect.signature(await _tool_fn(settings, "playdate_build"))
        assert list(build.parameters) == ["sourceDir", "outputPath", "projectDir"]
        assert all(p.default is None for p in build.parameters.values())

        create = inspect.signature(await _tool_fn(settings, "playdate_create"))
        assert create.parameters["name"].default is inspect.Parameter.empty
        assert create.parameters["outputDir"].default is None

        run = inspect.signature(await _tool_fn(settings, "playdate_run"))
        assert list(run.parameters) == ["pdxPath"]


class TestMcpTools:
    @pytest.mark.asyncio
    async def test_build_reports_failure_in_payload(self, settings: Settings, tmp_path: Path) -> None:
        empty = tmp_path / "Empty"
        empty.mkdir()

        tool = await _tool_fn(settings, "playdate_build")
        payload = await tool(projectDir=str(empty))

        assert payload["success"] is False
        assert payload["outputPath"] == ""
        assert payload["errors"][0]["line"] == 0
        assert payload["warnings"] == []

    @pytest.mark.asyncio
    async def test_build_success(self, settings: Settings, project_dir: Path, installed_pdc: Path) -> None:
        mock_run = AsyncMock(return_value=ExecResult(stdout="", stderr="", exit_code=0))

        with patch("playdate_dev.core.build.run_command", mock_run):
            tool = await _tool_fn(settings, "playdate_build")
            payload = await tool(projectDir=str(project_dir))

        assert payload == {
            "success": True,
            "outputPath": str((project_dir / "output.pdx").resolve()),
            "errors": [],
            "warnings": [],
        }

    @pytest.mark.asyncio
    async def test_create(self, settings: Settings, tmp_path: Path) -> None:
        tool = await _tool_fn(settings, "playdate_create")
        payload = await tool(name="MyGame", outputDir=str(tmp_path))
        assert payload["success"] is True
        assert payload["template"] == "basic"
        assert payload["projectPath"] == str((tmp_path / "MyGame").resolve())
        assert "error" not in payload

    @pytest.mark.asyncio
    async def test_create_unknown_template(self, settings: Settings, tmp_path: Path) -> None:
        tool = await _tool_fn(settings, "playdate_create")
        payload = await tool(name="X", template="nope", outputDir=str(tmp_path))
        assert payload == {"success": False, "projectPath": "", "template": "nope", "error": "Template not found: nope"}

    @pytest.mark.asyncio
    async def test_run_missing_bundle(self, settings: Settings, tmp_path: Path) -> None:
        tool = await _tool_fn(settings, "playdate_run")
        payload = await tool(pdxPath=str(tmp_path / "x.pdx"))
        assert payload["success"] is False
        assert payload["simulatorLaunched"] is False
        assert payload["error"].startswith("PDX not found")

    @pytest.mark.asyncio
    async def test_deploy_missing_bundle(self, settings: Settings, tmp_path: Path) -> None:
        tool = await _tool_fn(settings, "playdate_deploy")
        payload = await tool(pdxPath=str(tmp_path / "x.pdx"))
        assert payload["success"] is False
        assert payload["error"].startswith("PDX not found")

    @pytest.mark.asyncio
    async def test_templates(self, settings: Settings) -> None:
        tool = await _tool_fn(settings, "playdate_templates")
        payload = await tool()
        assert [t["name"] for t in payload["templates"]] == ["basic", "plain"]
        assert payload["templates"][0]["description"] == "Basic Playdate Game Template"

    @pytest.mark.asyncio
    async def test_examples(self, settings: Settings) -> None:
        tool = await _tool_fn(settings, "playdate_examples")
        payload = await tool()
        assert [(e["name"], e["hasBuiltPdx"]) for e in payload["examples"]] == [
            ("crank-demo", False),
            ("hello-world", True),
        ]

    @pytest.mark.asyncio
    async def test_device_info_without_pdutil(self, settings: Settings) -> None:
        tool = await _tool_fn(settings, "playdate_device_info")
        payload = await tool()
        assert payload["connected"] is False
        assert "serialNumber" not in payload
        assert payload["error"].startswith("pdutil not found")

    @pytest.mark.asyncio
    async def test_device_info_connected(self, settings: Settings, installed_pdutil: Path) -> None:
        output = ExecResult(stdout="Serial: PDU1-Y0\nVersion: 2.0.1\n", stderr="", exit_code=0)

        with patch("playdate_dev.core.device.run_command", AsyncMock(return_value=output)):
            tool = await _tool_fn(settings, "playdate_device_info")
            payload = await tool()

        assert payload == {"connected": True, "serialNumber": "PDU1-Y0", "firmwareVersion": "2.0.1"}
