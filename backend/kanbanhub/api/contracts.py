"""Route contracts shared by the API routers and ``kanbanhub.client``.

Each contract names the HTTP method, the path template (relative to the
API prefix), the request body schema and the response schema for every
status code the route may return. Routers register their handlers through
``route()`` so the server validates against the same table the client
uses to check responses.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional

from fastapi import APIRouter
from fastapi.responses import Response
from pydantic import BaseModel

from kanbanhub.api.schemas import (
    ColumnCreate,
    ColumnOrderUpdate,
    ColumnResponse,
    CommentCreate,
    CommentResponse,
    ErrorResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectWithColumns,
    SeedResponse,
    SubtasksRequest,
    SummarizeRequest,
    SummaryResponse,
    TaskCreate,
    TaskMove,
    TaskResponse,
    TaskUpdate,
    TaskWithDetails,
    UserResponse,
    VelocityPoint,
    WorkspaceCreate,
    WorkspaceResponse,
)

HTTPMethod = Literal["GET", "POST", "PATCH", "PUT", "DELETE"]

_PARAM_RE = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class RouteContract:
    """Typed description of one API route.

    Attributes:
        name: Dotted identifier, e.g. ``tasks.move``
        method: HTTP method
        path: Path template with ``{param}`` placeholders
        input: Request body schema, if the route takes a body
        responses: Status code to schema; ``None`` means an empty body
    """
    name: str
    method: HTTPMethod
    path: str
    responses: dict[int, Any]
    input: Optional[type[BaseModel]] = None

    @property
    def success_status(self) -> int:
        return min(code for code in self.responses if code < 400)

    @property
    def success_schema(self) -> Any:
        return self.responses[self.success_status]

    @property
    def error_statuses(self) -> list[int]:
        return sorted(code for code in self.responses if code >= 400)

    @property
    def path_params(self) -> list[str]:
        return _PARAM_RE.findall(self.path)

    def url(self, **params: Any) -> str:
        """Fill in the path template.

        Raises:
            KeyError: If a placeholder has no value
        """
        missing = [p for p in self.path_params if p not in params]
        if missing:
            raise KeyError(f"Missing path parameters for {self.name}: {missing}")
        return _PARAM_RE.sub(lambda m: str(params[m.group(1)]), self.path)


def route(router: APIRouter, contract: RouteContract, **kwargs: Any) -> Callable:
    """Register the decorated handler on ``router`` according to ``contract``."""
    schema = contract.success_schema
    options: dict[str, Any] = {
        "methods": [contract.method],
        "status_code": contract.success_status,
        "name": contract.name,
        "responses": {code: {"model": contract.responses[code]} for code in contract.error_statuses},
    }
    if schema is None:
        options["response_class"] = Response
        options["response_model"] = None
    else:
        options["response_model"] = schema
    options.update(kwargs)
    return router.api_route(contract.path, **options)


def _group(*contracts: RouteContract) -> dict[str, RouteContract]:
    return {c.name.split(".", 1)[1]: c for c in contracts}


@dataclass(frozen=True)
class _Registry:
    workspaces: dict[str, RouteContract] = field(default_factory=dict)
    projects: dict[str, RouteContract] = field(default_factory=dict)
    columns: dict[str, RouteContract] = field(default_factory=dict)
    tasks: dict[str, RouteContract] = field(default_factory=dict)
    comments: dict[str, RouteContract] = field(default_factory=dict)
    analytics: dict[str, RouteContract] = field(default_factory=dict)
    ai: dict[str, RouteContract] = field(default_factory=dict)
    seed: dict[str, RouteContract] = field(default_factory=dict)
    auth: dict[str, RouteContract] = field(default_factory=dict)

    def all(self) -> list[RouteContract]:
        return [
            contract
            for group in (
                self.workspaces, self.projects, self.columns, self.tasks,
                self.comments, self.analytics, self.ai, self.seed, self.auth,
            )
            for contract in group.values()
        ]


api = _Registry(
    workspaces=_group(
        RouteContract(
            name="workspaces.list",
            method="GET",
            path="/workspaces",
            responses={200: list[WorkspaceResponse]},
        ),
        RouteContract(
            name="workspaces.create",
            method="POST",
            path="/workspaces",
            input=WorkspaceCreate,
            responses={201: WorkspaceResponse, 400: ErrorResponse},
        ),
        RouteContract(
            name="workspaces.get",
            method="GET",
            path="/workspaces/{workspace_id}",
            responses={200: WorkspaceResponse, 404: ErrorResponse},
        ),
    ),
    projects=_group(
        RouteContract(
            name="projects.list",
            method="GET",
            path="/workspaces/{workspace_id}/projects",
            responses={200: list[ProjectResponse]},
        ),
        RouteContract(
            name="projects.create",
            method="POST",
            path="/workspaces/{workspace_id}/projects",
            input=ProjectCreate,
            responses={201: ProjectResponse, 400: ErrorResponse, 404: ErrorResponse},
        ),
        RouteContract(
            name="projects.board",
            method="GET",
            path="/projects/{project_id}/board",
            responses={200: ProjectWithColumns, 404: ErrorResponse},
        ),
    ),
    columns=_group(
        RouteContract(
            name="columns.create",
            method="POST",
            path="/projects/{project_id}/columns",
            input=ColumnCreate,
            responses={201: ColumnResponse, 400: ErrorResponse, 404: ErrorResponse},
        ),
        RouteContract(
            name="columns.update_order",
            method="PATCH",
            path="/projects/{project_id}/columns/order",
            input=ColumnOrderUpdate,
            responses={200: None, 400: ErrorResponse},
        ),
    ),
    tasks=_group(
        RouteContract(
            name="tasks.create",
            method="POST",
            path="/projects/{project_id}/tasks",
            input=TaskCreate,
            responses={201: TaskResponse, 400: ErrorResponse, 404: ErrorResponse},
        ),
        RouteContract(
            name="tasks.get",
            method="GET",
            path="/tasks/{task_id}",
            responses={200: TaskWithDetails, 404: ErrorResponse},
        ),
        RouteContract(
            name="tasks.update",
            method="PATCH",
            path="/tasks/{task_id}",
            input=TaskUpdate,
            responses={200: TaskResponse, 400: ErrorResponse, 404: ErrorResponse},
        ),
        RouteContract(
            name="tasks.delete",
            method="DELETE",
            path="/tasks/{task_id}",
            responses={204: None, 404: ErrorResponse},
        ),
        RouteContract(
            name="tasks.move",
            method="PATCH",
            path="/tasks/{task_id}/move",
            input=TaskMove,
            responses={200: TaskResponse, 400: ErrorResponse, 404: ErrorResponse},
        ),
    ),
    comments=_group(
        RouteContract(
            name="comments.list",
            method="GET",
            path="/tasks/{task_id}/comments",
            responses={200: list[CommentResponse], 404: ErrorResponse},
        ),
        RouteContract(
            name="comments.create",
            method="POST",
            path="/tasks/{task_id}/comments",
            input=CommentCreate,
            responses={201: CommentResponse, 400: ErrorResponse, 404: ErrorResponse},
        ),
    ),
    analytics=_group(
        RouteContract(
            name="analytics.velocity",
            method="GET",
            path="/projects/{project_id}/analytics/velocity",
            responses={200: list[VelocityPoint]},
        ),
    ),
    ai=_group(
        RouteContract(
            name="ai.subtasks",
            method="POST",
            path="/ai/subtasks",
            input=SubtasksRequest,
            responses={200: list[str], 400: ErrorResponse, 403: ErrorResponse, 500: ErrorResponse},
        ),
        RouteContract(
            name="ai.summarize",
            method="POST",
            path="/ai/summarize",
            input=SummarizeRequest,
            responses={200: SummaryResponse, 400: ErrorResponse, 403: ErrorResponse, 500: ErrorResponse},
        ),
    ),
    seed=_group(
        RouteContract(
            name="seed.demo",
            method="POST",
            path="/seed",
            responses={200: SeedResponse},
        ),
    ),
    auth=_group(
        RouteContract(
            name="auth.me",
            method="GET",
            path="/auth/me",
            responses={200: UserResponse},
        ),
    ),
)
