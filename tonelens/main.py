import time
from typing import List, Optional

import requests
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from pydantic import ValidationError
from starlette.responses import Response

from .schemas import (
    AnalysisResult,
    AnalyzeResponse,
    LegendEntry,
    Projection,
    TextRequest,
    TextResponse,
)
from .logger import configure_logging, get_logger
from .metrics import REQUESTS, LATENCY
from .models import GeneratorService, ServiceNotConfigured, ToneService
from .projector import legend, project
from .settings import Settings, get_settings

log = get_logger(__name__)

UPSTREAM_FAILURES = (requests.RequestException, ValidationError, ValueError)


def create_app(
    settings: Optional[Settings] = None,
    tone_svc: Optional[ToneService] = None,
    writer_svc: Optional[GeneratorService] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="Tonelens", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.tone_svc = tone_svc or ToneService(settings)
    app.state.writer_svc = writer_svc or GeneratorService(settings)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        data = generate_latest()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    @app.get("/v1/legend", response_model=List[LegendEntry])
    def get_legend():
        return legend()

    @app.post("/v1/tone", response_model=AnalyzeResponse)
    def tone(req: TextRequest, request: Request):
        REQUESTS.labels("/v1/tone").inc()
        start = time.time()
        try:
            result = request.app.state.tone_svc.analyse(req.text)
        except ServiceNotConfigured as e:
            raise HTTPException(status_code=503, detail=str(e))
        except UPSTREAM_FAILURES as e:
            raise HTTPException(status_code=502, detail=f"Tone analyzer failed: {e.__class__.__name__}")
        finally:
            LATENCY.observe(time.time() - start)
        projection = project(result)
        return AnalyzeResponse(
            overall_tone=projection.overall_tone,
            spans=projection.spans,
            legend=projection.legend,
            analyzed=result is not None,
        )

    @app.post("/v1/project", response_model=Projection)
    def project_result(result: AnalysisResult):
        REQUESTS.labels("/v1/project").inc()
        return project(result)

    def _write(endpoint: str, req: TextRequest, request: Request) -> TextResponse:
        REQUESTS.labels(endpoint).inc()
        start = time.time()
        svc: GeneratorService = request.app.state.writer_svc
        run = svc.summarize if endpoint == "/v1/summarize" else svc.generate
        try:
            text, latency_ms = run(req.text)
        except ServiceNotConfigured as e:
            raise HTTPException(status_code=503, detail=str(e))
        except (requests.RequestException, ValueError, KeyError) as e:
            raise HTTPException(status_code=502, detail=f"All providers failed: {e.__class__.__name__}")
        finally:
            LATENCY.observe(time.time() - start)
        return TextResponse(output=text, latency_ms=latency_ms)

    @app.post("/v1/summarize", response_model=TextResponse)
    def summarize(req: TextRequest, request: Request):
        return _write("/v1/summarize", req, request)

    @app.post("/v1/generate", response_model=TextResponse)
    def generate(req: TextRequest, request: Request):
        return _write("/v1/generate", req, request)

    log.info(
        "app created",
        tone_configured=app.state.tone_svc.client is not None,
        text_providers=[p.name for p in app.state.writer_svc.providers],
    )
    return app


app = create_app()
