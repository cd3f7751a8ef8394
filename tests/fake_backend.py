"""In-process stand-in for the ResearchConnect REST backend.

A FastAPI app with just enough behaviour to exercise the client end to end:
JWT issuance and refresh, bearer checks, projects with pagination,
applications and a couple of profile / roadmap routes.  Everything is held in
:class:`BackendState` on ``app.state.backend`` so tests can inspect and
steer it (revoke tokens, fail refreshes, slow them down).

Mount it on the client with ``httpx.ASGITransport(app=create_app())``.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from dataclasses import dataclass, field
from typing import Any

import jwt
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse

SECRET = "test-secret"
BASE_URL = "http://testserver/v1"

_jti = itertools.count(1)


def mint_token(user: dict[str, Any], ttl: float = 3600.0, now: float | None = None) -> str:
    """Sign a token with the same claims the real backend uses."""
    issued = time.time() if now is None else now
    claims = {
        "userId": user["uid"],
        "name": user["name"],
        "email": user["email"],
        "type": user["type"],
        "iat": int(issued),
        "exp": int(issued + ttl),
        "sub": user["uid"],
        "iss": "feels-like-summer",
        "jti": str(next(_jti)),
    }
    return jwt.encode(claims, SECRET, algorithm="HS256")


@dataclass
class BackendState:
    users: dict[str, dict[str, Any]] = field(default_factory=dict)
    valid_tokens: set[str] = field(default_factory=set)
    issued_tokens: set[str] = field(default_factory=set)
    projects: dict[str, dict[str, Any]] = field(default_factory=dict)
    applications: list[dict[str, Any]] = field(default_factory=list)
    # "METHOD /path" of every authenticated request, accepted or not.
    calls: list[str] = field(default_factory=list)
    last_query: dict[str, str] = field(default_factory=dict)
    last_body: Any = None
    refresh_calls: int = 0
    refresh_delay: float = 0.0
    fail_refresh: bool = False
    reject_all: bool = False

    def add_user(self, uid: str, name: str, email: str, password: str, type: str) -> dict:
        user = {"uid": uid, "name": name, "email": email, "password": password, "type": type}
        self.users[email] = user
        return user

    def issue(self, user: dict[str, Any], ttl: float = 3600.0, now: float | None = None) -> str:
        token = mint_token(user, ttl=ttl, now=now)
        self.issued_tokens.add(token)
        self.valid_tokens.add(token)
        return token

    def revoke(self, token: str) -> None:
        """Server stops accepting ``token`` but will still refresh it."""
        self.valid_tokens.discard(token)

    def user_by_uid(self, uid: str) -> dict[str, Any]:
        return next(u for u in self.users.values() if u["uid"] == uid)


def _bearer(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    return header[len("Bearer ") :].strip() if header.startswith("Bearer ") else ""


async def current_user(request: Request) -> dict[str, Any]:
    state: BackendState = request.app.state.backend
    state.calls.append(f"{request.method} {request.url.path}")
    state.last_query = dict(request.query_params)
    token = _bearer(request)
    if state.reject_all or token not in state.valid_tokens:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    return state.user_by_uid(claims["userId"])


def _public(user: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in user.items() if k != "password"}


router = APIRouter()

# ── Auth ───────────────────────────────────────────────────────────────────


@router.post("/auth/signup", status_code=201)
async def signup(request: Request) -> dict:
    state: BackendState = request.app.state.backend
    body = await request.json()
    if body.get("email") in state.users:
        raise HTTPException(status_code=409, detail="User already exists")
    uid = f"u{len(state.users) + 1:03d}"
    state.add_user(uid, body["name"], body["email"], body["password"], body["type"])
    return {"message": "User registered successfully. Please verify your email."}


@router.post("/auth/login")
async def login(request: Request) -> dict:
    state: BackendState = request.app.state.backend
    state.calls.append("POST /auth/login")
    body = await request.json()
    user = state.users.get(body.get("email", ""))
    if user is None or user["password"] != body.get("password"):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"message": "Login successful", "token": state.issue(user)}


@router.post("/auth/refresh")
async def refresh(request: Request) -> dict:
    state: BackendState = request.app.state.backend
    state.refresh_calls += 1
    if state.refresh_delay:
        await asyncio.sleep(state.refresh_delay)

    token = _bearer(request)
    if state.fail_refresh or token not in state.issued_tokens:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    new_token = state.issue(state.user_by_uid(claims["userId"]))
    return {"message": "Token refreshed successfully", "token": new_token}


@router.get("/auth/me")
async def me(user: dict = Depends(current_user)) -> dict:
    return _public(user)


# ── Projects ───────────────────────────────────────────────────────────────


def _with_owner(state: BackendState, project: dict[str, Any]) -> dict[str, Any]:
    return {**project, "user": _public(state.user_by_uid(project["uid"]))}


@router.get("/projects")
async def list_projects(request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    projects = [_with_owner(state, p) for p in state.projects.values()]
    return {"projects": projects, "count": len(projects)}


@router.post("/projects", status_code=201)
async def create_project(request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    if user["type"] != "fac":
        raise HTTPException(status_code=403, detail="Faculty access required")
    body = await request.json()
    state.last_body = body
    pid = f"p{len(state.projects) + 1:04d}"
    project = {"ID": len(state.projects) + 1, "pid": pid, "uid": user["uid"], "tags": [], **body}
    state.projects[pid] = project
    return project


@router.get("/projects/student")
async def list_for_student(
    request: Request, page: int = 1, pageSize: int = 20, user: dict = Depends(current_user)
) -> dict:
    state: BackendState = request.app.state.backend
    active = [p for p in state.projects.values() if p.get("isActive")]
    start = (page - 1) * pageSize
    chunk = [_with_owner(state, p) for p in active[start : start + pageSize]]
    return {
        "projects": chunk,
        "count": len(chunk),
        "total": len(active),
        "page": page,
        "pageSize": pageSize,
        "totalPages": (len(active) + pageSize - 1) // pageSize,
    }


@router.get("/projects/my")
async def my_projects(request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    mine = [p for p in state.projects.values() if p["uid"] == user["uid"]]
    return {"projects": mine, "count": len(mine)}


@router.get("/projects/{pid}")
async def get_project(pid: str, request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    if pid not in state.projects:
        raise HTTPException(status_code=404, detail="Project not found")
    return _with_owner(state, state.projects[pid])


@router.put("/projects/{pid}")
async def update_project(pid: str, request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    if pid not in state.projects:
        raise HTTPException(status_code=404, detail="Project not found")
    body = await request.json()
    state.last_body = body
    state.projects[pid].update(body)
    return {"message": "Project updated successfully", "project": state.projects[pid]}


@router.delete("/projects/{pid}")
async def delete_project(pid: str, request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    if state.projects.pop(pid, None) is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project deleted successfully", "projectId": pid}


# ── Applications ───────────────────────────────────────────────────────────


@router.post("/projects/{pid}/apply", status_code=201)
async def apply(pid: str, request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    body = await request.json()
    state.last_body = body
    application = {
        "ID": len(state.applications) + 1,
        "PID": pid,
        "uid": user["uid"],
        "status": "under_review",
        "timeCreated": "2026-01-15T10:00:00Z",
        **body,
    }
    state.applications.append(application)
    return {"message": "Application submitted successfully", "application": application}


@router.delete("/projects/{pid}/retract")
async def retract(pid: str, request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    for app in state.applications:
        if app["PID"] == pid and app["uid"] == user["uid"]:
            if app["status"] == "accepted":
                raise HTTPException(
                    status_code=400, detail="Cannot retract an accepted application"
                )
            state.applications.remove(app)
            return {"message": "Application retracted successfully"}
    raise HTTPException(status_code=404, detail="Application not found")


@router.get("/applications/my")
async def my_applications(request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    mine = [a for a in state.applications if a["uid"] == user["uid"]]
    return {"applications": mine, "count": len(mine)}


@router.put("/projects/{pid}/applications/{app_id}")
async def update_status(
    pid: str, app_id: int, request: Request, user: dict = Depends(current_user)
) -> dict:
    state: BackendState = request.app.state.backend
    body = await request.json()
    for app in state.applications:
        if app["ID"] == app_id and app["PID"] == pid:
            app["status"] = body["status"]
            return {"message": "Application status updated successfully", "application": app}
    raise HTTPException(status_code=404, detail="Application not found")


# ── Profile / roadmap ──────────────────────────────────────────────────────


@router.put("/profile/student")
async def update_profile(request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    state.last_body = await request.json()
    return {"message": "Profile updated successfully"}


@router.get("/profile/explore")
async def explore(request: Request, user: dict = Depends(current_user)) -> dict:
    state: BackendState = request.app.state.backend
    users = [_public(u) for u in state.users.values()]
    if "type" in request.query_params:
        users = [u for u in users if u["type"] == request.query_params["type"]]
    return {"users": users, "count": len(users)}


@router.post("/roadmap/generate")
async def generate_roadmap(request: Request, user: dict = Depends(current_user)) -> dict:
    return {
        "message": "Roadmap generated successfully",
        "cached": False,
        "roadmapId": 1,
        "roadmap": {
            "title": "Machine Learning Research Path",
            "description": "From foundations to a first paper",
            "total_time": "6 months",
            "nodes": [
                {
                    "id": "n1",
                    "title": "Linear algebra",
                    "description": "Vectors, matrices, decompositions",
                    "category": "foundation",
                    "duration": "3 weeks",
                    "resources": ["MIT 18.06"],
                    "skills": ["linear algebra"],
                    "next_nodes": ["n2"],
                },
                {
                    "id": "n2",
                    "title": "Reproduce a paper",
                    "category": "core",
                    "duration": "6 weeks",
                    "skills": ["pytorch"],
                },
            ],
        },
    }


@router.get("/roadmap/history")
async def roadmap_history(user: dict = Depends(current_user)) -> list:
    return [
        {
            "id": 1,
            "user_id": user["uid"],
            "roadmap_type": "research",
            "title": "Machine Learning Research Path",
            "roadmap_data": "{}",
            "created_at": "2026-01-15T10:00:00Z",
        }
    ]


@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "DELETE"])
async def echo(path: str, request: Request) -> dict:
    """Any other route: accept and describe the request."""
    state: BackendState = request.app.state.backend
    state.calls.append(f"{request.method} {request.url.path}")
    state.last_query = dict(request.query_params)
    body = await request.body()
    state.last_body = (await request.json()) if body else None
    return {
        "method": request.method,
        "path": f"/{path}",
        "authorization": request.headers.get("Authorization"),
        "body": state.last_body,
    }


# ── App factory ────────────────────────────────────────────────────────────


def create_app() -> FastAPI:
    """Create the fake backend with a student and a professor account."""
    application = FastAPI(title="ResearchConnect fake backend")
    state = BackendState()
    state.add_user("stu001", "Ada Student", "ada@uni.edu", "pw-ada", "stu")
    state.add_user("fac001", "Grace Professor", "grace@uni.edu", "pw-grace", "fac")
    application.state.backend = state

    @application.exception_handler(HTTPException)
    async def _error_body(request: Request, exc: HTTPException) -> JSONResponse:
        # The real backend reports failures as {"error": "..."}.
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    application.include_router(router, prefix="/v1")
    return application
