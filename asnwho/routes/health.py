from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["Service"], summary="Liveness check")
async def health():
    return {"status": "ok"}
