import json

import pytest
from fastmcp import Client

from core.errors import SpecFetchError
from core.guide_cache import DEFAULT_DEPLOYMENT_GUIDE, GuideCache
from tools import mcp_server

TOOL_NAMES = {
    "get_api_specification",
    "get_deployment_guide",
    "explain_authentication_model",
    "get_auth_token",
    "create_env_file",
}


async def call(tool, arguments=None):
    async with Client(mcp_server.mcp) as client:
        return await client.call_tool(tool, arguments or {}, raise_on_error=False)


def payload(result):
    text = result.content[0].text
    return json.loads(text[text.index("{"):])


@pytest.fixture
def cache_over(monkeypatch, http_client, clock):
    """Route get_deployment_guide through a GuideCache backed by the fake remote."""

    def _guide_cache(settings):
        return GuideCache(
            cache_dir=settings.cache_dir,
            url=settings.guide_url,
            http_client=http_client,
            clock=clock,
        )

    monkeypatch.setattr(mcp_server, "_guide_cache", _guide_cache)


@pytest.mark.asyncio
async def test_lists_all_tools():
    async with Client(mcp_server.mcp) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    assert set(tools) == TOOL_NAMES
    assert tools["create_env_file"].inputSchema["required"] == ["target_dir"]
    assert "service_type" in tools["get_deployment_guide"].inputSchema["properties"]


@pytest.mark.asyncio
async def test_deployment_guide_from_remote_then_cache(cache_over, remote, clock):
    remote.body = "# Live guide"

    first = payload(await call("get_deployment_guide", {"service_type": "express"}))
    second = payload(await call("get_deployment_guide"))

    assert remote.calls == 1
    assert first["deployment_guide"] == "# Live guide"
    assert first["source"] == "remote"
    assert first["service_type"] == "express"
    assert first["cached_at"] == clock.now.isoformat()
    assert "AI_BUILDER_TOKEN" in first["authentication_note"]
    assert second["service_type"] == "fastapi"
    assert second["deployment_guide"] == first["deployment_guide"]


@pytest.mark.asyncio
async def test_deployment_guide_blank_service_type_defaults_to_fastapi(cache_over):
    body = payload(await call("get_deployment_guide", {"service_type": ""}))
    assert body["service_type"] == "fastapi"


@pytest.mark.asyncio
async def test_deployment_guide_never_errors(cache_over, remote):
    remote.refuse_connections()

    result = await call("get_deployment_guide")

    assert not result.is_error
    body = payload(result)
    assert body["source"] == "default"
    assert body["deployment_guide"] == DEFAULT_DEPLOYMENT_GUIDE


@pytest.mark.asyncio
async def test_api_specification(monkeypatch):
    seen = {}

    def fake_fetch(url, timeout):
        seen["url"] = url
        return {"openapi": "3.0.0", "servers": [{"url": "https://api.example.test"}]}

    monkeypatch.setenv("AI_BUILDERS_OPENAPI_URL", "https://mirror.test/openapi.json")
    monkeypatch.setattr(mcp_server, "fetch_openapi_spec", fake_fetch)

    body = payload(await call("get_api_specification"))

    assert seen["url"] == "https://mirror.test/openapi.json"
    assert body["endpoint_info"]["base_url"] == "https://api.example.test"
    assert body["openapi_spec"]["openapi"] == "3.0.0"


@pytest.mark.asyncio
async def test_api_specification_failure_is_tool_error(monkeypatch):
    def failing_fetch(url, timeout):
        raise SpecFetchError("Failed to fetch OpenAPI specification: HTTP 502")

    monkeypatch.setattr(mcp_server, "fetch_openapi_spec", failing_fetch)

    result = await call("get_api_specification")

    assert result.is_error
    assert payload(result) == {
        "error": "Failed to fetch OpenAPI specification: HTTP 502",
        "suggestion": "Check network connection or retry later",
    }


@pytest.mark.asyncio
async def test_explain_authentication_model():
    body = payload(await call("explain_authentication_model"))
    assert body["authentication_model"]["token_type"] == "AI_BUILDER_TOKEN"


@pytest.mark.asyncio
async def test_auth_token_masked_by_default(monkeypatch):
    monkeypatch.setenv("AI_BUILDER_TOKEN", "sk-abcdefgh1234")

    masked = payload(await call("get_auth_token"))
    clear = payload(await call("get_auth_token", {"masked": False}))

    assert masked == {
        "available": True,
        "token": "sk-a*******1234",
        "masked": True,
        "note": "Use this token to configure your .env as AI_BUILDER_TOKEN",
    }
    assert clear["token"] == "sk-abcdefgh1234"


@pytest.mark.asyncio
async def test_auth_token_never_logged_in_clear(monkeypatch, caplog):
    monkeypatch.setenv("AI_BUILDER_TOKEN", "sk-abcdefgh1234")

    with caplog.at_level("INFO"):
        await call("get_auth_token", {"masked": False})

    assert "sk-abcdefgh1234" not in caplog.text


@pytest.mark.asyncio
async def test_auth_token_missing():
    body = payload(await call("get_auth_token"))
    assert body["available"] is False
    assert body["token"] == ""


@pytest.mark.asyncio
async def test_create_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv("AI_BUILDER_TOKEN", "sk-secret")
    target = tmp_path / "app"

    created = payload(await call("create_env_file", {"target_dir": str(target)}))
    refused = payload(await call("create_env_file", {"target_dir": str(target)}))

    assert created == {"written": True, "path": str(target / ".env")}
    assert refused["written"] is False
    assert "overwrite=true" in refused["reason"]
    assert (target / ".env").read_text(encoding="utf-8") == "AI_BUILDER_TOKEN=sk-secret\n"


@pytest.mark.asyncio
async def test_create_env_file_without_token_is_tool_error(tmp_path):
    result = await call("create_env_file", {"target_dir": str(tmp_path)})

    assert result.is_error
    body = payload(result)
    assert body["error"] == "AI_BUILDER_TOKEN is not set in server environment"
    assert "AI_BUILDER_TOKEN" in body["suggestion"]
    assert not (tmp_path / ".env").exists()


@pytest.mark.asyncio
async def test_create_env_file_requires_target_dir():
    result = await call("create_env_file", {})
    assert result.is_error
