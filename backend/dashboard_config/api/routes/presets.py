"""Preset routes."""

from fastapi import APIRouter, HTTPException, Request, status

from dashboard_config.core.presets import get_preset, list_business_presets, list_presets, preset_to_dict
from dashboard_config.core.rate_limit import limiter
from dashboard_config.core.responses import list_response

router = APIRouter()


@router.get("/")
@limiter.limit("120/minute")
def list_all_presets(request: Request, include_custom: bool = True):
    """List presets. ``include_custom=false`` hides the empty custom preset."""
    presets = list_presets() if include_custom else list_business_presets()
    return list_response([preset_to_dict(p) for p in presets])


@router.get("/{name}")
@limiter.limit("120/minute")
def get_one_preset(request: Request, name: str):
    preset = get_preset(name)
    if preset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Preset '{name}' not found",
        )
    return preset_to_dict(preset)
