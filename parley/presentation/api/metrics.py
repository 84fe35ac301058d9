"""
Prometheus Metrics Endpoint.

Exposes the counters and histograms defined in observability/metrics.py in
the Prometheus text format.

    curl http://localhost:5001/metrics
"""

from fastapi import APIRouter, Response

from parley.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
