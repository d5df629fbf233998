"""FastAPI application entrypoint for tsdecgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional, Tuple

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import GeneratorConfig, merge_config
from ..diagnostics import Diagnostics
from ..generator import Generator


class GenerateRequest(BaseModel):
    source: str
    import_tag_name: Optional[str] = None
    export_tag_name: Optional[str] = None
    include_private: Optional[bool] = None
    expand_property_declaration_based_on_default: Optional[bool] = None


class ReportModel(BaseModel):
    type: str
    category: str
    message: str


class GenerateResponse(BaseModel):
    declarations: str
    exit_status: int
    diagnostics: List[ReportModel]


class HealthResponse(BaseModel):
    status: str


def create_app(
    config_factory: Callable[[], GeneratorConfig] = GeneratorConfig,
) -> FastAPI:
    """Create the FastAPI application exposing declaration generation."""

    app = FastAPI(title="tsdecgen Service", version="1.0.0")

    async def get_config() -> GeneratorConfig:
        # Fresh config per request so overrides never leak between callers.
        return config_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate_declarations(
        payload: GenerateRequest,
        base_config: GeneratorConfig = Depends(get_config),
    ) -> GenerateResponse:
        config = merge_config(
            base_config,
            payload.model_dump(exclude={"source"}, exclude_none=True),
        )

        def _run_generate() -> Tuple[str, Diagnostics]:
            diagnostics = Diagnostics()
            output = Generator(config=config, diagnostics=diagnostics).generate(payload.source)
            return output, diagnostics

        loop = asyncio.get_running_loop()
        output, diagnostics = await loop.run_in_executor(None, _run_generate)
        return GenerateResponse(
            declarations=output,
            exit_status=diagnostics.exit_status,
            diagnostics=[
                ReportModel(type=report.type, category=report.category, message=report.message)
                for report in diagnostics.reports
            ],
        )

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
