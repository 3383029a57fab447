from fastapi import APIRouter, Request

from gradverify import __version__

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    rid = getattr(request.state, "request_id", None)
    return {"status": "ok", "version": __version__, "request_id": rid}
