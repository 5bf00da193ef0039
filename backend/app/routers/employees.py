"""Employee endpoints for the FastAPI backend."""
import logging
from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_user, get_db_session
from ..models import Employee, User
from ..schemas import EmployeeRead, EmployeeWrite

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])

_EDITABLE_FIELDS = (
    "name",
    "email",
    "designation",
    "department",
    "salary",
    "date_of_joining",
    "last_day_of_working",
)


def _check_owner(payload: EmployeeWrite, current_user: User) -> None:
    if payload.user_id is not None and payload.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="user_id must match the signed-in user",
        )


async def _get_scoped(session: AsyncSession, employee_id: int, current_user: User) -> Employee:
    result = await session.execute(
        select(Employee).where(
            Employee.id == employee_id,
            Employee.account_id == current_user.account_id,
        )
    )
    employee = result.scalar_one_or_none()
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return employee


@router.get("/", response_model=list[EmployeeRead])
async def list_employees(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Employee]:
    """Return every employee in the caller's account, newest first."""

    result = await session.execute(
        select(Employee)
        .where(Employee.account_id == current_user.account_id)
        .order_by(Employee.created_at.desc(), Employee.id.desc())
    )
    return list(result.scalars().all())


@router.post("/", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeWrite,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    """Insert an employee owned by the caller."""

    _check_owner(payload, current_user)
    employee = Employee(
        account_id=current_user.account_id,
        user_id=current_user.id,
        **payload.model_dump(include=set(_EDITABLE_FIELDS)),
    )
    session.add(employee)
    await session.commit()
    await session.refresh(employee)
    logger.info("Created employee %s in account %s", employee.id, employee.account_id)
    return employee


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    """Return a single employee from the caller's account."""

    return await _get_scoped(session, employee_id, current_user)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    payload: EmployeeWrite,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    """Overwrite every editable field; the owner never changes."""

    _check_owner(payload, current_user)
    employee = await _get_scoped(session, employee_id, current_user)
    for field in _EDITABLE_FIELDS:
        setattr(employee, field, getattr(payload, field))
    await session.commit()
    await session.refresh(employee)
    logger.info("Updated employee %s", employee.id)
    return employee


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Permanently remove an employee."""

    employee = await _get_scoped(session, employee_id, current_user)
    await session.delete(employee)
    await session.commit()
    logger.info("Deleted employee %s", employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
