"""
Career Suggestions Gateway — FastAPI entrypoint.

Takes free-text career preferences from the browser, builds a prompt, and
relays it to the Gemini API through the model-fallback orchestrator.

Start:
    export GEMINI_API_KEY=...
    python -m uvicorn career_gateway.main:app --host 0.0.0.0 --port 3000
"""

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, configure_logging, load_settings
from .dashboard.metrics import MetricsCollector, RequestMetric
from .errors import ConfigurationError, GatewayError, UpstreamGenerationError, ValidationError
from .prompts import build_prompt, preferences_from_body
from .router.fallback import ModelFallbackOrchestrator, Transport
from .serving.gemini import GeminiClient

logger = logging.getLogger(__name__)

PROMPT_LOG_CHARS = 200
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def read_body(request: Request):
    """Parse a JSON or URL-encoded form body; None when it is neither."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        form = await request.form()
        return dict(form)
    try:
        return await request.json()
    except ValueError:
        return None


def create_app(
    settings: Settings | None = None,
    transport: Transport | None = None,
    sleep=None,
) -> FastAPI:
    """
    Build the app around an explicit Settings value.

    transport and sleep are injectable so tests can drive the orchestrator
    without network access or real delays.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    metrics = MetricsCollector()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.configured:
            logger.warning(
                "GEMINI_API_KEY is not set. Add it as an environment variable before using the AI routes."
            )

        client = None
        upstream = transport
        if upstream is None:
            client = GeminiClient(
                api_key=settings.api_key or "",
                api_base=settings.api_base,
                api_versions=settings.api_versions,
                timeout=settings.timeout_s,
            )
            upstream = client

        kwargs = {"sleep": sleep} if sleep is not None else {}
        app.state.orchestrator = ModelFallbackOrchestrator(
            upstream,
            settings.model_candidates,
            max_retries=settings.max_retries,
            **kwargs,
        )
        logger.info("Gateway ready. Model candidates: %s", list(settings.model_candidates))

        yield

        if client is not None:
            await client.close()

    app = FastAPI(
        title="Career Suggestions Gateway",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.metrics = metrics

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Server error %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc) or "Server error"})

    @app.get("/health")
    async def health():
        return {"status": "ok", "configured": settings.configured}

    @app.get("/metrics")
    async def get_metrics():
        """Returns success rate, models used, attempt counts and latency percentiles."""
        return metrics.summary()

    @app.post("/api/suggestions")
    async def suggestions(request: Request):
        body = await read_body(request)

        preferences = preferences_from_body(body)
        if not preferences:
            raise ValidationError("preferences (text) required in body")
        if not settings.configured:
            raise ConfigurationError("Server is not configured with GEMINI_API_KEY")

        prompt = build_prompt(preferences)
        logger.info("Calling Gemini with prompt: %s", prompt[:PROMPT_LOG_CHARS])

        start = time.perf_counter()
        result = await request.app.state.orchestrator.generate(prompt)
        total_ms = (time.perf_counter() - start) * 1000

        metrics.record(RequestMetric(
            timestamp=time.time(),
            model_used=result.model_used,
            attempts=result.attempts,
            total_time_ms=total_ms,
            ok=result.ok,
        ))

        if not result.ok:
            raise UpstreamGenerationError(result.reason or "AI generation failed")

        return JSONResponse(content={
            "modelUsed": result.model_used,
            "endpoint": result.endpoint_used,
            "suggestions": result.text,
        })

    if os.path.isdir(settings.static_dir):
        @app.get("/", include_in_schema=False)
        async def landing_page():
            for name in (settings.index_page, "index.html"):
                path = os.path.join(settings.static_dir, name)
                if os.path.isfile(path):
                    return FileResponse(path)
            return JSONResponse(status_code=404, content={"error": "Not Found"})

        # Mounted last so the API routes above take precedence
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="public")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
