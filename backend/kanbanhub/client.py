"""Typed HTTP client for the Kanbanhub API.

Requests are built from ``kanbanhub.api.contracts`` and every response is
validated against the schema the contract declares for its status code
before it is returned.
"""

from typing import Any, Optional, Sequence

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from kanbanhub.api.contracts import RouteContract, api
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
    SubtasksRequest,
    SummarizeRequest,
    TaskCreate,
    TaskMove,
    TaskResponse,
    TaskUpdate,
    TaskWithDetails,
    WorkspaceCreate,
    WorkspaceResponse,
)

logger = structlog.get_logger()


class ClientError(Exception):
    """Base exception for client failures."""


class ApiError(ClientError):
    """The server answered with an error status."""

    def __init__(self, status_code: int, error: ErrorResponse):
        self.status_code = status_code
        self.error = error
        super().__init__(f"HTTP {status_code}: {error.message}")


class ContractViolation(ClientError):
    """The server answered with a status or body the contract does not allow."""

    def __init__(self, contract: RouteContract, status_code: int, detail: str):
        self.contract = contract
        self.status_code = status_code
        super().__init__(f"{contract.name} returned {status_code}: {detail}")


class KanbanClient:
    """Async client for the board API.

    Example:
        ```python
        async with KanbanClient("https://kanban.example.com", token=token) as client:
            board = await client.get_board(project_id=3)
            for column in board.columns:
                print(column.name, [t.title for t in column.tasks])
        ```
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.api_prefix = api_prefix.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "KanbanClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(
        self,
        contract: RouteContract,
        body: BaseModel | dict[str, Any] | None = None,
        **path_params: Any,
    ) -> Any:
        """Issue the request described by ``contract`` and return the validated body.

        Raises:
            ApiError: On a declared (or 401/403) error status
            ContractViolation: On an undeclared status or a body that does not match
        """
        json_body = None
        if contract.input is not None:
            payload = body if isinstance(body, BaseModel) else contract.input.model_validate(body or {})
            json_body = payload.model_dump(mode="json", by_alias=True, exclude_unset=True)

        url = self.api_prefix + contract.url(**path_params)
        response = await self._http.request(contract.method, url, json=json_body)
        logger.debug("api_call", route=contract.name, status_code=response.status_code)

        if response.status_code >= 400:
            raise self._error(contract, response)

        if response.status_code not in contract.responses:
            raise ContractViolation(contract, response.status_code, "undeclared status")

        schema = contract.responses[response.status_code]
        if schema is None:
            return None
        try:
            return TypeAdapter(schema).validate_python(response.json())
        except (PydanticValidationError, ValueError) as e:
            raise ContractViolation(contract, response.status_code, str(e))

    def _error(self, contract: RouteContract, response: httpx.Response) -> ClientError:
        try:
            error = ErrorResponse.model_validate(response.json())
        except (PydanticValidationError, ValueError):
            return ContractViolation(contract, response.status_code, "malformed error body")
        if response.status_code not in contract.responses and response.status_code not in (401, 403):
            return ContractViolation(contract, response.status_code, error.message)
        return ApiError(response.status_code, error)

    # -------------------------------------------------------------------------
    # Workspaces and projects
    # -------------------------------------------------------------------------

    async def list_workspaces(self) -> list[WorkspaceResponse]:
        return await self.call(api.workspaces["list"])

    async def create_workspace(self, name: str, slug: str) -> WorkspaceResponse:
        return await self.call(api.workspaces["create"], WorkspaceCreate(name=name, slug=slug))

    async def get_workspace(self, workspace_id: int) -> WorkspaceResponse:
        return await self.call(api.workspaces["get"], workspace_id=workspace_id)

    async def list_projects(self, workspace_id: int) -> list[ProjectResponse]:
        return await self.call(api.projects["list"], workspace_id=workspace_id)

    async def create_project(
        self, workspace_id: int, name: str, key: str, description: Optional[str] = None
    ) -> ProjectResponse:
        body = ProjectCreate(name=name, key=key, description=description)
        return await self.call(api.projects["create"], body, workspace_id=workspace_id)

    async def get_board(self, project_id: int) -> ProjectWithColumns:
        return await self.call(api.projects["board"], project_id=project_id)

    # -------------------------------------------------------------------------
    # Columns
    # -------------------------------------------------------------------------

    async def create_column(self, project_id: int, name: str, order: int) -> ColumnResponse:
        body = ColumnCreate(name=name, order=order)
        return await self.call(api.columns["create"], body, project_id=project_id)

    async def reorder_columns(self, project_id: int, column_ids: Sequence[int]) -> None:
        body = ColumnOrderUpdate(column_ids=list(column_ids))
        await self.call(api.columns["update_order"], body, project_id=project_id)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    async def create_task(self, project_id: int, task: TaskCreate | dict[str, Any]) -> TaskResponse:
        return await self.call(api.tasks["create"], task, project_id=project_id)

    async def get_task(self, task_id: int) -> TaskWithDetails:
        return await self.call(api.tasks["get"], task_id=task_id)

    async def update_task(self, task_id: int, changes: TaskUpdate | dict[str, Any]) -> TaskResponse:
        return await self.call(api.tasks["update"], changes, task_id=task_id)

    async def delete_task(self, task_id: int) -> None:
        await self.call(api.tasks["delete"], task_id=task_id)

    async def move_task(self, task_id: int, column_id: int, order: Optional[int] = None) -> TaskResponse:
        body = TaskMove(column_id=column_id) if order is None else TaskMove(column_id=column_id, order=order)
        return await self.call(api.tasks["move"], body, task_id=task_id)

    async def add_comment(self, task_id: int, content: str) -> CommentResponse:
        return await self.call(api.comments["create"], CommentCreate(content=content), task_id=task_id)

    async def list_comments(self, task_id: int) -> list[CommentResponse]:
        return await self.call(api.comments["list"], task_id=task_id)

    # -------------------------------------------------------------------------
    # AI assist
    # -------------------------------------------------------------------------

    async def generate_subtasks(self, task_description: str) -> list[str]:
        return await self.call(api.ai["subtasks"], SubtasksRequest(task_description=task_description))

    async def summarize_task(self, content: str) -> str:
        result = await self.call(api.ai["summarize"], SummarizeRequest(content=content))
        return result.summary
