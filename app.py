from __future__ import annotations

import os
import re
import time
import urllib.parse
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

# .env は lib の設定値より先に読む
load_dotenv()

from fastapi import (
    FastAPI,
    HTTPException,
    UploadFile,
    File,
    Form,
    Request,
)
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware
from pydantic import BaseModel
import logging

from lib.cache_manager import (
    SESSION_CACHE_TTL_S,
    session_cache_get,
    session_cache_pop,
    session_cache_set,
)
from lib.tracklist import (
    TracklistSession,
    TracklistUploadError,
    format_tracklist,
    parse_tracklist,
    read_upload_text,
)
from lib.tracklist.upload import MAX_UPLOAD_SIZE
from html_renderer import render_upload_page, render_session_page

# Basic logging configuration to ensure logger outputs appear in the terminal
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("uvicorn.error")


# =========================
# Pydantic models
# =========================

class ParseBody(BaseModel):
    text: str = ""


class ParseResponse(BaseModel):
    headers: List[str]
    tracks: List[Dict[str, Optional[str]]]


class FormatBody(BaseModel):
    tracks: List[Dict[str, Optional[str]]] = []
    show_numbers: bool = True


class FormatResponse(BaseModel):
    tracklist: str


class TracklistResponse(BaseModel):
    filename: Optional[str] = None
    headers: List[str]
    tracks: List[Dict[str, Optional[str]]]
    tracklist: str
    show_numbers: bool = True
    track_count: int = 0


class SessionResponse(BaseModel):
    session_id: str
    filename: Optional[str] = None
    headers: List[str]
    tracks: List[Dict[str, Optional[str]]]
    show_numbers: bool
    formatted: str
    track_count: int


class NumberingBody(BaseModel):
    show_numbers: bool


# =========================
# FastAPI app & CORS
# =========================

app = FastAPI(
    title="Tracklist Generator",
    version="1.0.0",
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.method in ("POST", "PUT", "PATCH"):
            content_length = request.headers.get("content-length")
            try:
                size = int(content_length) if content_length else 0
            except ValueError:
                logger.warning(f"[RequestSizeLimit] Rejected malformed content-length: {content_length!r} from {request.client}")
                return JSONResponse(
                    status_code=400,
                    content={"detail": "Malformed Content-Length header"}
                )
            # multipart の枠の分だけ余裕を持たせる
            if size > MAX_UPLOAD_SIZE + 64 * 1024:
                logger.warning(f"[RequestSizeLimit] Rejected oversized request: {content_length} bytes from {request.client}")
                return JSONResponse(
                    status_code=413,
                    content={"detail": f"Request body too large (max {MAX_UPLOAD_SIZE} bytes)"}
                )
        return await call_next(request)


app.add_middleware(RequestSizeLimitMiddleware)

# デフォルトの許可オリジン
default_origins = [
    "http://localhost:3000",
    "http://localhost:8000",
]

# 環境変数 ALLOWED_ORIGINS があればそれを優先（カンマ区切り）
env_origins = os.getenv("ALLOWED_ORIGINS")
if env_origins:
    origins = [o.strip() for o in env_origins.split(",") if o.strip()]
else:
    origins = default_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _log_startup():
    logger.info("tracklist-generator: startup event triggered")


# =========================
# Health check
# =========================

@app.get("/health", tags=["system"])
def health() -> Dict[str, Any]:
    return {
        "ok": True,
        "status": "ok",
        "build_commit": os.getenv("RENDER_GIT_COMMIT", "local")[:7],
        "session_ttl_s": SESSION_CACHE_TTL_S,
    }


# =========================
# Core helpers
# =========================

async def _read_upload(file: UploadFile | None) -> str:
    """UploadFile を読み、テキストにする。拒否は HTTPException に変換。"""
    if file is None:
        raise HTTPException(status_code=400, detail="Send the exported .txt file in the 'file' field.")

    try:
        contents = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read the uploaded file: {e}")

    try:
        return read_upload_text(contents, filename=file.filename, content_type=file.content_type)
    except TracklistUploadError as e:
        logger.info(f"[upload] rejected filename={file.filename} content_type={file.content_type} status={e.status_code}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))


def _store_session(session: TracklistSession) -> TracklistSession:
    # 再代入で TTL も延びる
    session_cache_set(session.session_id, session)
    return session


def _get_session(session_id: str) -> TracklistSession:
    session = session_cache_get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found or expired. Upload the file again.")
    return session


def _drop_session(session_id: str) -> None:
    session_cache_pop(session_id)


def _attachment_disposition(filename: str | None) -> str:
    """
    Content-Disposition を組み立てる。
    ヘッダーは latin-1 で送られるので、元のファイル名は RFC 5987 の filename* に入れ、
    filename= には ASCII だけのフォールバックを入れる。
    """
    stem = os.path.splitext(os.path.basename(filename or ""))[0] or "tracklist"
    download_name = f"{stem}-tracklist.txt"
    ascii_stem = re.sub(r'[^A-Za-z0-9._ -]', "_", stem).strip() or "tracklist"
    quoted = urllib.parse.quote(download_name, safe="")
    return f'attachment; filename="{ascii_stem}-tracklist.txt"; filename*=UTF-8\'\'{quoted}'


def _parse_bool(raw: str | None, default: bool = True) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# =========================
# Stateless endpoints
# =========================

@app.post("/api/parse", response_model=ParseResponse)
def api_parse(body: ParseBody):
    """テキストを (headers, tracks) にするだけ。"""
    parsed = parse_tracklist(body.text)
    return {"headers": parsed.headers, "tracks": parsed.tracks}


@app.post("/api/format", response_model=FormatResponse)
def api_format(body: FormatBody):
    """パース済みの tracks を表示用文字列にするだけ。"""
    return {"tracklist": format_tracklist(body.tracks, body.show_numbers)}


@app.post("/api/tracklist", response_model=TracklistResponse)
async def api_tracklist(
    file: UploadFile | None = File(None, description="Rekordbox playlist export (.txt)"),
    show_numbers: Optional[str] = Form(None, description="1/true to prefix track numbers (default true)"),
):
    """
    .txt をアップロードして、プレビュー用の表と整形済みトラックリストをまとめて返す。
    """
    t0_total = time.time()
    text = await _read_upload(file)

    numbers = _parse_bool(show_numbers)
    parsed = parse_tracklist(text)
    tracklist = format_tracklist(parsed.tracks, numbers)

    total_ms = (time.time() - t0_total) * 1000
    logger.info(
        f"[PERF] endpoint=api/tracklist filename={file.filename} bytes={len(text)} "
        f"headers={len(parsed.headers)} tracks={len(parsed.tracks)} total_ms={total_ms:.1f}"
    )
    return {
        "filename": file.filename,
        "headers": parsed.headers,
        "tracks": parsed.tracks,
        "tracklist": tracklist,
        "show_numbers": numbers,
        "track_count": len(parsed.tracks),
    }


# =========================
# Session endpoints
# =========================

@app.post("/api/sessions", response_model=SessionResponse)
async def create_session(
    file: UploadFile | None = File(None, description="Rekordbox playlist export (.txt)"),
):
    text = await _read_upload(file)
    session = _store_session(TracklistSession().load(text, filename=file.filename))
    logger.info(f"[session] created id={session.session_id} filename={session.filename} tracks={len(session.tracks)}")
    return session.to_dict()


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: str):
    return _get_session(session_id).to_dict()


@app.post("/api/sessions/{session_id}/numbering", response_model=SessionResponse)
def set_session_numbering(session_id: str, body: NumberingBody):
    session = _get_session(session_id)
    session.set_show_numbers(body.show_numbers)
    return _store_session(session).to_dict()


@app.get("/api/sessions/{session_id}/tracklist.txt", response_class=PlainTextResponse)
def download_session_tracklist(session_id: str):
    session = _get_session(session_id)
    return PlainTextResponse(
        session.formatted,
        headers={"Content-Disposition": _attachment_disposition(session.filename)},
    )


@app.delete("/api/sessions/{session_id}")
def delete_session(session_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    session.reset()
    _drop_session(session_id)
    logger.info(f"[session] reset id={session_id}")
    return {"ok": True, "session_id": session_id}


# =========================
# HTML pages
# =========================

@app.get("/", response_class=HTMLResponse)
def index():
    return render_upload_page()


@app.post("/upload", response_class=HTMLResponse)
async def upload_page(file: UploadFile | None = File(None)):
    try:
        text = await _read_upload(file)
    except HTTPException as e:
        # ページ上で通知として出す（落とさない）
        return HTMLResponse(render_upload_page(notice=str(e.detail)), status_code=e.status_code)

    session = _store_session(TracklistSession().load(text, filename=file.filename))
    logger.info(f"[session] created id={session.session_id} filename={session.filename} tracks={len(session.tracks)}")
    return RedirectResponse(url=f"/sessions/{session.session_id}", status_code=303)


@app.get("/sessions/{session_id}", response_class=HTMLResponse)
def session_page(session_id: str):
    try:
        session = _get_session(session_id)
    except HTTPException as e:
        return HTMLResponse(render_upload_page(notice=str(e.detail)), status_code=e.status_code)

    notice = None
    if session.is_empty:
        notice = "No tracks found in this file."
    return render_session_page(session, notice=notice)


@app.post("/sessions/{session_id}/numbering")
def session_page_numbering(session_id: str, show_numbers: str = Form("true")):
    session = _get_session(session_id)
    session.set_show_numbers(_parse_bool(show_numbers))
    _store_session(session)
    return RedirectResponse(url=f"/sessions/{session_id}", status_code=303)


@app.post("/sessions/{session_id}/reset")
def session_page_reset(session_id: str):
    _drop_session(session_id)
    logger.info(f"[session] reset id={session_id}")
    return RedirectResponse(url="/", status_code=303)


# =========================
# Local dev entrypoint
# =========================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
