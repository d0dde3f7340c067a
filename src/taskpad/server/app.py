# src/taskpad/server/app.py

"""
FastAPI application for the task API.

Endpoints (base path /api/tasks):
    POST   /          create a task              -> 201 Task
    GET    /          list tasks, newest first   -> 200 [Task]
    PUT    /{id}      toggle `completed`         -> 200 Task | 404
    DELETE /{id}      delete (idempotent)        -> 200 {"message": "Task deleted"}

Every error body is {"message": "..."}.
"""

import logging
from collections.abc import Sequence

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.ports import TaskRepo
from ..tasks.task_models import TaskNotFoundError, TaskStoreError
from ..tasks.task_service import TaskService
from .schemas import MessageOut, TaskCreateRequest, TaskOut

logger = logging.getLogger(__name__)

API_PREFIX = "/api/tasks"

router = APIRouter(prefix=API_PREFIX, tags=["tasks"])


def get_service(request: Request) -> TaskService:
    return request.app.state.service


# Both "/api/tasks" and "/api/tasks/" are served without a redirect.
@router.post("", status_code=201, response_model=TaskOut)
@router.post("/", status_code=201, response_model=TaskOut, include_in_schema=False)
def create_task(body: TaskCreateRequest, service: TaskService = Depends(get_service)) -> TaskOut:
    return TaskOut.from_task(service.create(body.text))


@router.get("", response_model=list[TaskOut])
@router.get("/", response_model=list[TaskOut], include_in_schema=False)
def list_tasks(service: TaskService = Depends(get_service)) -> list[TaskOut]:
    return [TaskOut.from_task(t) for t in service.list_tasks()]


@router.put("/{task_id}", response_model=TaskOut)
def toggle_task(task_id: str, service: TaskService = Depends(get_service)) -> TaskOut:
    return TaskOut.from_task(service.toggle(task_id))


@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(task_id: str, service: TaskService = Depends(get_service)) -> MessageOut:
    return MessageOut(message=service.delete(task_id))


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskNotFoundError)
    async def _not_found(_request: Request, exc: TaskNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": "Task not found"})

    @app.exception_handler(TaskStoreError)
    async def _store_error(request: Request, exc: TaskStoreError) -> JSONResponse:
        logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"message": str(exc)})

    # Unknown paths and wrong methods (404/405) use the same body shape.
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _bad_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg")))
        return JSONResponse(status_code=422, content={"message": "; ".join(parts) or "Invalid request"})


def create_app(*, store: TaskRepo, cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    """Create the FastAPI application around an already-built store.

    Args:
        store: Task store backing the service.
        cors_origins: Allowed browser origins ("*" allows any).

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title="taskpad", description="Task list API", version="0.1.0")
    app.state.service = TaskService(store)

    origins = list(cors_origins) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(router)
    return app
