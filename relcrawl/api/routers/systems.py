from fastapi import APIRouter

# Never echoed back by /systems/config
SECRET_KEYS = {"API_COOKIE"}


def create_systems_router(container_env: dict):
    """Create systems router with access to container environment config."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/config")
    def get_config():
        """Return current environment configuration values."""
        return {
            "environment": {
                key: ("***" if key in SECRET_KEYS else str(value)) if value is not None else None
                for key, value in container_env.items()
            }
        }

    return router
