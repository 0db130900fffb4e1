"""
VeganScan FastAPI application.

Endpoints:
    GET    /                       Health check
    GET    /lexicon                Base lexicon entry counts
    POST   /classify               OCR text -> normalize -> match -> verdict
    POST   /extensions             Merge lexicon extensions, re-classify last text
    DELETE /sessions/{session_id}  Drop a scan session
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, List, Optional
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars
load_dotenv(Path(__file__).parent / ".env")

# Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from veganscan.config import log_config, get_extension_urls, get_local_extensions_enabled
from veganscan.extensions.fetcher import fetch_extension_fragments
from veganscan.lexicon.lexicon_loader import load_lexicon, load_local_fragments
from veganscan.lexicon.merger import merge_lexicons
from veganscan.session import SessionStore

log_config()

# Initialize App
app = FastAPI(title="VeganScan Label Classifier API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _build_base_lexicon():
    base = load_lexicon()
    if base is not None and get_local_extensions_enabled():
        local = load_local_fragments()
        if local:
            base = merge_lexicons(base, *local)
    return base


sessions = SessionStore(base_lexicon=_build_base_lexicon())


# --- Request/Response Models ---
class ClassifyRequest(BaseModel):
    text: str
    session_id: Optional[str] = None


class ExtensionRequest(BaseModel):
    session_id: str
    fragments: List[Any] = Field(default_factory=list)
    fetch_remote: bool = False


class ScanResponse(BaseModel):
    session_id: str
    verdict: str
    label: str
    blacklistHits: List[str]
    greylistHits: List[str]
    codeHits: List[str]
    unknownTokens: List[str]


def _scan_response(session_id: str, result) -> dict:
    return {"session_id": session_id, "label": result.verdict.label, **result.to_dict()}


# --- Endpoints ---

@app.get("/")
def health_check():
    return {"status": "ok", "service": "VeganScan"}


@app.get("/lexicon")
def lexicon_info():
    base = sessions.base_lexicon
    if base is None:
        return {"loaded": False, "counts": {"blacklist": 0, "greylist": 0, "enumbers": 0}}
    return {"loaded": True, "counts": base.counts()}


@app.post("/classify", response_model=ScanResponse)
def classify_text(request: ClassifyRequest):
    """Classify OCR text; retains text and result in the session for later re-scans."""
    session = sessions.get_or_create(request.session_id)
    logger.info("Classify request session_id=%s chars=%d", session.session_id, len(request.text))
    try:
        result = session.scan(request.text)
    except Exception as e:
        logger.error("Classify failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return _scan_response(session.session_id, result)


@app.post("/extensions", response_model=ScanResponse)
def apply_extensions(request: ExtensionRequest):
    """Merge inline and (optionally) remote fragments into the session lexicon, then re-classify."""
    session = sessions.get(request.session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    if not request.fragments and not (request.fetch_remote and get_extension_urls()):
        raise HTTPException(status_code=400, detail="No extension sources configured")

    fragments = list(request.fragments)
    if request.fetch_remote:
        fragments.extend(fetch_extension_fragments())
    try:
        result = session.apply_extensions(fragments)
    except Exception as e:
        logger.error("Extension merge failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return _scan_response(session.session_id, result)


@app.delete("/sessions/{session_id}")
def drop_session(session_id: str):
    if not sessions.discard(session_id):
        raise HTTPException(status_code=404, detail="Unknown session")
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
