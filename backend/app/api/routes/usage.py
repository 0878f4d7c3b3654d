"""Storage usage routes — summary and quota chart."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.api.deps import get_current_user, usage_service
from app.schemas.auth import CurrentUser
from app.schemas.usage import UsageChart, UsageSummary
from app.services.usage_service import UsageService
from app.ui.usage_chart import build_usage_chart, render_usage_chart_svg

router = APIRouter()


@router.get("", response_model=UsageSummary)
async def total_space_used(
    current_user: CurrentUser = Depends(get_current_user),
    service: UsageService = Depends(usage_service),
):
    """Per-category usage of the current user's own files."""
    return await service.get_total_space_used(current_user)


@router.get("/chart", response_model=UsageChart)
async def usage_chart(
    current_user: CurrentUser = Depends(get_current_user),
    service: UsageService = Depends(usage_service),
):
    summary = await service.get_total_space_used(current_user)
    return build_usage_chart(summary.used)


@router.get("/chart.svg")
async def usage_chart_svg(
    current_user: CurrentUser = Depends(get_current_user),
    service: UsageService = Depends(usage_service),
):
    summary = await service.get_total_space_used(current_user)
    svg = render_usage_chart_svg(build_usage_chart(summary.used))
    return Response(content=svg, media_type="image/svg+xml")
