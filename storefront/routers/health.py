from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
