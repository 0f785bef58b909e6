"""Tests for the render helper dependency."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import pytest
import structlog
from fastapi import Depends, FastAPI, Response
from httpx import ASGITransport, AsyncClient

from pagesmith.config import Config
from pagesmith.dependencies.render import (
    RenderHelperDependency,
    render_helper_dependency,
)
from pagesmith.loader import TemplateConfig
from pagesmith.render import TemplateRenderHelper
from pagesmith.response import ResponseWriter


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/pages/{name}")
    def get_page(
        name: str,
        helper: Annotated[
            TemplateRenderHelper, Depends(render_helper_dependency)
        ],
    ) -> Response:
        writer = ResponseWriter()
        helper.render(writer, None, name, {"name": "world"})
        return writer.to_response()

    @app.get("/error")
    def get_error(
        helper: Annotated[
            TemplateRenderHelper, Depends(render_helper_dependency)
        ],
    ) -> Response:
        writer = ResponseWriter()
        helper.serve_error_template(
            writer, None, ValueError("secret"), "Not today", 503
        )
        return writer.to_response()

    return app


@pytest.mark.asyncio
async def test_render_helper(template_dir: Path) -> None:
    config = Config(
        template_dir=template_dir,
        site_title="Example",
        templates=[TemplateConfig(name="home", files=("home.html",))],
    )
    render_helper_dependency.initialize(config)
    assert render_helper_dependency.process_context.config is config

    transport = ASGITransport(app=build_app())
    base_url = "https://example.com"
    try:
        async with AsyncClient(transport=transport, base_url=base_url) as c:
            r = await c.get("/pages/home")
            assert r.status_code == 200
            assert r.headers["Content-Type"] == "text/html; charset=utf-8"
            assert r.text == "<h1>Hello world</h1>\n"

            r = await c.get("/pages/missing")
            assert r.status_code == 500
            assert r.headers["X-Content-Type-Options"] == "nosniff"
            assert r.text == "Please try again later\n"

            r = await c.get("/error")
            assert r.status_code == 503
            assert "<title>Example: Error 503</title>" in r.text
            assert "secret" not in r.text
    finally:
        await render_helper_dependency.aclose()


@pytest.mark.asyncio
async def test_uninitialized() -> None:
    dependency = RenderHelperDependency()
    logger = structlog.get_logger("pagesmith")
    with pytest.raises(RuntimeError):
        await dependency(logger)
    with pytest.raises(RuntimeError):
        dependency.process_context  # noqa: B018
