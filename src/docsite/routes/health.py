"""Health check endpoints for liveness and readiness probes."""
from pathlib import Path
from typing import Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from docsite.config import Settings
from docsite.content.walker import build_tree, iter_documents

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe.

    Attributes:
        status: Always 'alive' when process is running.
    """

    status: Literal["alive"]


class ReadinessCheck(BaseModel):
    """Individual dependency check result.

    Attributes:
        name: Identifier for the dependency being checked.
        status: Result of the check ('ok' or 'failed').
        message: Error details when status is 'failed'.
    """

    name: str
    status: Literal["ok", "failed"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Response model for readiness probe.

    Attributes:
        status: Overall readiness ('ready' or 'not_ready').
        checks: List of individual dependency check results.
    """

    status: Literal["ready", "not_ready"]
    checks: list[ReadinessCheck]


def _check_content_root(root: Path) -> ReadinessCheck:
    """Verify the content root can be listed and count its documents.

    An empty root is still ready; the sidebar serves its fallback then.

    Args:
        root: Configured content root.

    Returns:
        Check result, with the indexed document count when it passes.
    """
    name = "content_root"
    try:
        if not root.is_dir():
            return ReadinessCheck(
                name=name, status="failed", message=f"Content root not found: {root}"
            )
        next(root.iterdir(), None)
    except PermissionError as e:
        return ReadinessCheck(
            name=name, status="failed", message=f"Content root not readable: {e}"
        )
    except OSError as e:
        return ReadinessCheck(name=name, status="failed", message=str(e))

    count = sum(1 for _ in iter_documents(build_tree(root)))
    if not count:
        return ReadinessCheck(
            name=name, status="ok", message="No documents; navigation uses fallback"
        )
    return ReadinessCheck(name=name, status="ok", message=f"{count} documents indexed")


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe endpoint.

    Checks that the content root is present and listable and reports how
    many documents it holds. Returns 200 if it is, 503 otherwise.

    Args:
        request: FastAPI request (provides access to settings).

    Returns:
        Readiness status with individual check results.
    """
    settings: Settings = request.app.state.settings
    checks = [_check_content_root(settings.content_root)]
    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        checks=checks,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
