"""Filter selection, parameterisation and re-render orchestration."""

from __future__ import annotations

from .catalog import (
    FILTER_CATALOG,
    FilterDescriptor,
    FilterVariant,
    ParameterName,
    descriptor_for,
    parse_variant,
)
from .engine import EngineState, FilterEngine
from .filter_backend import Extent, FilterBackend, FilteredImage, PillowFilterBackend
from .parameter_mapper import clamp_intensity, map_intensity
from .rendering import CpuRenderContext, RenderContext, RenderingPipeline, create_render_context

__all__ = [
    "FILTER_CATALOG",
    "CpuRenderContext",
    "EngineState",
    "Extent",
    "FilterBackend",
    "FilterDescriptor",
    "FilterEngine",
    "FilterVariant",
    "FilteredImage",
    "ParameterName",
    "PillowFilterBackend",
    "RenderContext",
    "RenderingPipeline",
    "clamp_intensity",
    "create_render_context",
    "descriptor_for",
    "map_intensity",
    "parse_variant",
]
