"""Tests for the MCP server wiring (tool registry, errors, resource)."""

import json
from pathlib import Path
from typing import Any

import pytest
from mcp.server.fastmcp.exceptions import ToolError as MCPToolError

from src.ai.service import AIService
from src.core.config import AIConfig, ProviderConfig, ServerConfig, Settings
from src.server.mcp_server import TOOL_NAMES, build_mcp_server


def _payload(result: Any) -> Any:
    """JSON payload of a call_tool result (content list, or (content, structured))."""
    content = result[0] if isinstance(result, tuple) else result
    return json.loads(content[0].text)


def _server(fake_backends, tmp_path: Path, *names: str):  # type: ignore[no-untyped-def]
    config = AIConfig(**{n: ProviderConfig(api_key="k") for n in names})
    settings = Settings(server=ServerConfig(files_dir=str(tmp_path / "files")))
    return build_mcp_server(AIService(config, provider_factory=fake_backends), settings)


class TestRegistration:
    async def test_all_tools_listed(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path)
        tools = await server.list_tools()
        assert sorted(t.name for t in tools) == sorted(TOOL_NAMES)

    async def test_camel_case_parameters(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path)
        tools = {t.name: t for t in await server.list_tools()}
        props = tools["analyzeResume"].inputSchema["properties"]
        assert {"jobDescription", "resumeText", "provider"} <= set(props)
        assert tools["analyzeResume"].inputSchema["required"] == ["jobDescription", "resumeText"]

    async def test_server_info_resource(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path, "groq")
        contents = list(await server.read_resource("server://info"))
        text = contents[0].content
        assert "letsmcp MCP Server v2.0.0" in text
        assert "echoText" in text
        assert "AI Providers: groq" in text


class TestToolCalls:
    async def test_echo(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path)
        result = await server.call_tool("echoText", {"text": "ping"})
        assert _payload(result) == {"echoed": "ping"}

    async def test_tool_error_surfaces_message(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path)
        with pytest.raises(MCPToolError, match="empty text"):
            await server.call_tool("echoText", {"text": "  "})

    async def test_save_uses_files_dir(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path)
        result = await server.call_tool("saveToFile", {"content": "hi", "filename": "a.txt"})
        saved = Path(_payload(result)["path"])
        assert saved == (tmp_path / "files" / "a.txt").resolve()
        assert saved.read_text() == "hi"

    async def test_generate_text(self, fake_backends, tmp_path: Path) -> None:
        fake_backends.replies["claude"] = ["drafted"]
        server = _server(fake_backends, tmp_path, "groq", "claude")
        result = await server.call_tool("generateText", {"prompt": "hi", "provider": "claude"})
        assert _payload(result) == {"text": "drafted", "provider": "claude"}

    async def test_no_providers(self, fake_backends, tmp_path: Path) -> None:
        server = _server(fake_backends, tmp_path)
        with pytest.raises(MCPToolError, match="No AI providers configured"):
            await server.call_tool("generateText", {"prompt": "hi"})

    async def test_all_providers_failed(self, fake_backends, tmp_path: Path) -> None:
        fake_backends.replies["groq"] = [RuntimeError("quota exceeded")]
        server = _server(fake_backends, tmp_path, "groq")
        with pytest.raises(MCPToolError, match="All providers failed") as exc_info:
            await server.call_tool("generateText", {"prompt": "hi"})
        assert "groq: quota exceeded" in str(exc_info.value)

    async def test_draft_email_defaults(self, fake_backends, tmp_path: Path) -> None:
        fake_backends.replies["groq"] = ['{"subject": "Hi", "body": "Hello", "confidence": 70}']
        server = _server(fake_backends, tmp_path, "groq")
        result = await server.call_tool(
            "draftEmail", {"recipientName": "Ana", "companyName": "Acme", "jobTitle": "SRE"}
        )
        payload = _payload(result)
        assert payload["provider"] == "groq"
        assert payload["data"]["confidence"] == 70
        prompt = fake_backends.created["groq"].prompts[0]
        assert "Recipient: Ana, Team Member at Acme" in prompt
