# 할 일 라우터 (모든 경로에 Bearer 토큰 필요)
# - GET    /todos       : 페이지 목록, completed 필터, 최신순
# - POST   /todos       : 생성 (소유자는 호출자)
# - GET    /todos/{id}  : 단건 조회
# - PUT    /todos/{id}  : 부분 수정
# - DELETE /todos/{id}  : 삭제

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...core.security import TokenClaims, get_current_claims
from ...schemas.envelope import Deleted, Envelope
from ...schemas.todo_schema import TodoCreate, TodoOut, TodoPage, TodoUpdate, to_out
from ...services.todo_service import MAX_LIMIT, MAX_PAGE, TodoService, get_todo_service

router = APIRouter(prefix="/todos", tags=["todos"])


@router.get("", response_model=Envelope[TodoPage], summary="List the caller's todos")
async def list_todos(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(20, ge=1, le=MAX_LIMIT),
    completed: Optional[bool] = Query(None),
    claims: TokenClaims = Depends(get_current_claims),
    service: TodoService = Depends(get_todo_service),
):
    items, total = await service.list(claims, page=page, limit=limit, completed=completed)
    return Envelope(data=TodoPage(items=[to_out(t) for t in items], total=total, page=page, limit=limit))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[TodoOut], summary="Create a todo")
async def create_todo(
    payload: TodoCreate,
    claims: TokenClaims = Depends(get_current_claims),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.create(claims, payload.title, payload.description, payload.due_date)
    return Envelope(data=to_out(todo))


@router.get("/{todo_id}", response_model=Envelope[TodoOut], summary="Read one todo")
async def get_todo(
    todo_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.get(claims, todo_id)
    return Envelope(data=to_out(todo))


@router.put("/{todo_id}", response_model=Envelope[TodoOut], summary="Update a todo (only fields sent are changed)")
async def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.update(claims, todo_id, payload.model_dump(exclude_unset=True))
    return Envelope(data=to_out(todo))


@router.delete("/{todo_id}", response_model=Envelope[Deleted], summary="Delete a todo")
async def delete_todo(
    todo_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    service: TodoService = Depends(get_todo_service),
):
    await service.delete(claims, todo_id)
    return Envelope(data=Deleted())
