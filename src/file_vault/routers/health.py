from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and store readiness.

    Returns status of the API and the store along with the deployment mode.
    """
    settings = request.app.state.settings
    store = request.app.state.store

    health_status = {
        "status": "ok",
        "deployment_mode": settings.deployment_mode,
        "components": {
            "api": "ready",
            "store": "ready",
        },
        "ready": False
    }

    if not store.ping():
        health_status["components"]["store"] = "unreachable"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return health_status
