"""Health check endpoints for monitoring and deployment verification."""

from fastapi import APIRouter, Response, status

from printshop.api.deps import OrderServiceDep
from printshop.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check() -> HealthResponse:
    """Return basic health status.

    This endpoint should always return 200 if the service is running.
    It does not check storage.

    Returns:
        HealthResponse: Current health status with timestamp.
    """
    return HealthResponse(status=HealthStatus.HEALTHY)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Storage available"},
        503: {"description": "Upload directory or orders snapshot not writable"},
    },
    summary="Readiness check",
)
async def readiness_check(response: Response, service: OrderServiceDep) -> ReadinessResponse:
    """Check that uploads and orders can be written.

    Returns 503 if either location is unusable.

    Args:
        response: FastAPI response object for setting status code.
        service: The application's order service.

    Returns:
        ReadinessResponse: Status of all storage checks.
    """
    uploads_ok = service.file_store.is_writable()
    orders_ok = service.repository.is_writable()

    checks = [
        CheckResult(
            name="upload_dir",
            healthy=uploads_ok,
            error=None if uploads_ok else f"{service.file_store.root} is not writable",
        ),
        CheckResult(
            name="orders_file",
            healthy=orders_ok,
            error=None if orders_ok else f"{service.repository.orders_file.parent} is not writable",
        ),
    ]

    all_healthy = all(check.healthy for check in checks)
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=HealthStatus.HEALTHY if all_healthy else HealthStatus.UNHEALTHY,
        checks=checks,
    )
