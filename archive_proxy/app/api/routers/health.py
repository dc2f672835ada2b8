from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

@router.get("/", response_class=PlainTextResponse)
def index():
    return "Archive proxy is running. Use /search or /work/:id endpoints."

@router.get("/status")
def status():
    return {"status": "online", "message": "Archive proxy is operational"}
