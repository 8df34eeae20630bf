"""FastAPI application exposing label gradients and text-fit scaling to the UI layer."""
from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .cache import MemoCache
from .config import Settings, get_settings
from .gradient import GradientConfig, GradientOptions, GradientShape
from .label import LabelTheme, cached_label_gradient, resolve_label_paint
from .presets import DEFAULT_THEME, SIZE_PRESETS, describe_size
from .text_fit import PRIMARY_LINE, compute_scale, fit_line_scales

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GradientRequest(_CamelModel):
    text: str = ""
    shape: Optional[GradientShape] = None
    options: Optional[GradientOptions] = None


class ScaleRequest(_CamelModel):
    natural_width: float
    container_width: float


class FitRequest(_CamelModel):
    natural_widths: List[float] = Field(default_factory=list)
    container_width: float
    primary_index: int = PRIMARY_LINE


class PaintRequest(_CamelModel):
    name: str = ""
    theme: Optional[LabelTheme] = None


def _create_lifespan(settings: Settings):
    """Create an application lifespan manager bound to the provided settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.enable_cache:
            app.state.gradient_cache = MemoCache[GradientConfig]("gradient", settings.cache_max_entries)
            app.state.scale_cache = MemoCache[float]("scale", settings.cache_max_entries)
        else:
            app.state.gradient_cache = None
            app.state.scale_cache = None
        logger.info("Label service ready (cache=%s)", settings.enable_cache)
        yield

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Instantiate the FastAPI application with the given settings."""

    settings = settings or get_settings()
    logging.getLogger("floppy_label").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Floppy Label Service",
        version="0.1.0",
        lifespan=_create_lifespan(settings),
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok"}

    @app.get("/api/sizes")
    async def sizes() -> Dict[str, Any]:
        profiles = [{"id": preset["id"], **describe_size(preset["id"])} for preset in SIZE_PRESETS]
        return {"sizes": profiles, "theme": DEFAULT_THEME}

    @app.get("/api/sizes/{size}")
    async def size_profile(size: str) -> Dict[str, Any]:
        try:
            value: Any = float(size)
        except ValueError:
            value = size
        else:
            if not math.isfinite(value):
                raise HTTPException(status_code=422, detail="Invalid size")
        return dict(describe_size(value))

    @app.post("/api/gradient")
    async def gradient(
        body: GradientRequest, request: Request, current_settings: Settings = Depends(get_settings)
    ) -> Dict[str, Any]:
        shape = body.shape or current_settings.default_gradient_shape
        config = cached_label_gradient(body.text, shape, body.options, request.app.state.gradient_cache)
        return config.model_dump(mode="json", by_alias=True)

    @app.post("/api/scale")
    async def scale(
        body: ScaleRequest, request: Request, current_settings: Settings = Depends(get_settings)
    ) -> Dict[str, Any]:
        def compute() -> float:
            return compute_scale(
                body.natural_width,
                body.container_width,
                current_settings.label_width_ratio,
                current_settings.scale_min,
                current_settings.scale_max,
            )

        cache: Optional[MemoCache[float]] = request.app.state.scale_cache
        if cache is None:
            return {"scale": compute()}
        return {"scale": cache.get_or_compute((body.natural_width, body.container_width), compute)}

    @app.post("/api/label/fit")
    async def fit(body: FitRequest, current_settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
        scales = fit_line_scales(
            body.natural_widths,
            body.container_width,
            body.primary_index,
            current_settings.label_width_ratio,
            current_settings.scale_min,
            current_settings.scale_max,
        )
        return {"scales": scales}

    @app.post("/api/label/paint")
    async def paint(body: PaintRequest, request: Request) -> Dict[str, Any]:
        result = resolve_label_paint(body.name, body.theme, request.app.state.gradient_cache)
        return result.model_dump(mode="json", by_alias=True)

    @app.get("/api/cache")
    async def cache_stats(request: Request, current_settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
        if not current_settings.enable_cache:
            raise HTTPException(status_code=404, detail="Caching disabled")
        caches = [request.app.state.gradient_cache, request.app.state.scale_cache]
        return {"caches": [cache.stats().model_dump() for cache in caches]}

    return app


app = create_app()
