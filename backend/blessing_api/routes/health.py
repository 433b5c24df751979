from fastapi import APIRouter


router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint"""
    from blessing_api.providers.registry import provider_registry

    return {
        "status": "healthy",
        "provider": provider_registry.provider_name,
    }
