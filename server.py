import logging
import os
import re
import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Depends, File, Header, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.login_manager import AuthError, login, public_user, signup
from auth.token_manager import sign_token, verify_token
from database.db_manager import DBManager
from models.job import MalformedJobError
from models.resume_matcher import matcher
from utils.letters import align_cv, cover_letter
from utils.resume_parser import parse_resume_bytes

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger(__name__)

PORT = int(os.getenv("PORT", "8787"))
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
UPLOAD_PATH = "/api/match/upload"

db = DBManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    db.ensure_data_file()
    log.info("Atlas backend ready (data file %s)", db.path)
    yield


app = FastAPI(title="Atlas Match API", lifespan=lifespan)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    limit = MAX_UPLOAD_BYTES if request.url.path == UPLOAD_PATH else MAX_BODY_BYTES
    length = request.headers.get("content-length", "")
    if length.isdigit() and int(length) > limit:
        return JSONResponse({"error": "Request body too large"}, status_code=413)
    return await call_next(request)


# CORS is the outermost middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)

# ---------------------- Request bodies ----------------------

class SignupPayload(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginPayload(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class MatchPayload(BaseModel):
    # any JSON value; non-strings are rejected with a specific message
    cvText: Any = None


class AlignPayload(BaseModel):
    cvText: Optional[str] = None
    targetJobId: Any = None


class CoverLetterPayload(BaseModel):
    name: Optional[str] = None
    targetJobId: Any = None

# ---------------------- Error handlers ----------------------

@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        field = ".".join(str(p) for p in errors[0].get("loc", ()) if p != "body")
        message = f"{field}: {errors[0].get('msg')}" if field else errors[0].get("msg")
    else:
        message = "Invalid request body"
    return JSONResponse({"error": message}, status_code=400)


@app.exception_handler(AuthError)
async def auth_error(request: Request, exc: AuthError):
    return JSONResponse({"error": str(exc)}, status_code=exc.status_code)


@app.exception_handler(MalformedJobError)
async def malformed_job(request: Request, exc: MalformedJobError):
    log.error("Malformed job catalog: %s", exc)
    return JSONResponse({"error": "Job catalog is malformed"}, status_code=500)

# ---------------------- Helpers ----------------------

def current_user(authorization: Optional[str] = Header(None)) -> dict:
    m = re.match(r"^Bearer (.+)$", authorization or "", re.IGNORECASE)
    if not m:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    return verify_token(m.group(1))


def _job_id(value: Any) -> Optional[int]:
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _target_job(target_job_id: Any):
    job = db.get_job(_job_id(target_job_id))
    if job is None:
        raise HTTPException(status_code=404, detail="No jobs available")
    return job


def _rank(cv_text: str) -> dict:
    jobs = db.list_jobs()
    results = matcher.rank(cv_text, jobs)
    log.info("Scored resume against %d jobs", len(jobs))
    return {"results": [r.to_dict() for r in results]}

# ---------------------- Routes ----------------------

@app.get("/api/health")
async def health():
    return {"ok": True}


@app.post("/api/auth/signup")
def api_signup(payload: Optional[SignupPayload] = None):
    payload = payload or SignupPayload()
    if not (payload.name and payload.email and payload.password):
        raise HTTPException(status_code=400, detail="name, email, password are required")
    user = signup(db, name=payload.name, email=payload.email, password=payload.password)
    return {"token": sign_token(user), "user": public_user(user)}


@app.post("/api/auth/login")
def api_login(payload: Optional[LoginPayload] = None):
    payload = payload or LoginPayload()
    if not (payload.email and payload.password):
        raise HTTPException(status_code=400, detail="email, password are required")
    user = login(db, email=payload.email, password=payload.password)
    return {"token": sign_token(user), "user": public_user(user)}


@app.get("/api/auth/me")
async def api_me(claims: dict = Depends(current_user)):
    user = db.get_user_by_id(claims["uid"])
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": public_user(user)}


@app.get("/api/jobs")
async def api_jobs():
    return db.list_job_records()


@app.post("/api/match")
def api_match(payload: Optional[MatchPayload] = None, claims: dict = Depends(current_user)):
    cv_text = payload.cvText if payload else None
    if not cv_text or not isinstance(cv_text, str):
        raise HTTPException(status_code=400, detail="cvText (string) is required")
    return _rank(cv_text)


@app.post(UPLOAD_PATH)
async def api_match_upload(resume: UploadFile = File(...), claims: dict = Depends(current_user)):
    content = await resume.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Request body too large")
    cv_text = await run_in_threadpool(parse_resume_bytes, resume.filename, content)
    if not cv_text.strip():
        raise HTTPException(status_code=400, detail="Could not extract text from resume")
    return await run_in_threadpool(_rank, cv_text)


@app.post("/api/align-cv")
async def api_align_cv(payload: Optional[AlignPayload] = None, claims: dict = Depends(current_user)):
    payload = payload or AlignPayload()
    job = _target_job(payload.targetJobId)
    return {"aligned": align_cv(payload.cvText, job)}


@app.post("/api/cover-letter")
async def api_cover_letter(payload: Optional[CoverLetterPayload] = None, claims: dict = Depends(current_user)):
    payload = payload or CoverLetterPayload()
    job = _target_job(payload.targetJobId)
    return {"letter": cover_letter(payload.name, job)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host="0.0.0.0", port=PORT)
