"""Company API routes.

Endpoints (mounted under /api/v1):
- GET /companies: List companies (search, sort_by, limit)
- GET /companies/{id}: Show one company
- POST /companies: Create a company
- PATCH|PUT /companies/{id}: Partial update
- DELETE /companies/{id}: erase, trash or restore
- GET /companies/{id}/users: Users employed by the company
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_company_repo, get_employment_repo
from api.models import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    DeleteRequest,
    UserResponse,
)
from port.company_repository import CompanyRepository
from port.employment_repository import EmploymentRepository
from services import company_service, employment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=list[CompanyResponse])
def list_companies(
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    limit: Optional[int] = None,
    repo: CompanyRepository = Depends(get_company_repo),
):
    companies = company_service.list_companies(repo, search=search, sort_by=sort_by, limit=limit)
    return [CompanyResponse.model_validate(c) for c in companies]


@router.get("/{company_id}", response_model=CompanyResponse)
def show_company(company_id: str, repo: CompanyRepository = Depends(get_company_repo)):
    return CompanyResponse.model_validate(company_service.get_company(repo, company_id))


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def store_company(request: CompanyCreate, repo: CompanyRepository = Depends(get_company_repo)):
    company = company_service.create_company(repo, name=request.name, since=request.since)
    return CompanyResponse.model_validate(company)


@router.api_route("/{company_id}", methods=["PATCH", "PUT"], response_model=CompanyResponse)
def update_company(
    company_id: str,
    request: CompanyUpdate,
    repo: CompanyRepository = Depends(get_company_repo),
):
    company = company_service.update_company(repo, company_id, name=request.name, since=request.since)
    return CompanyResponse.model_validate(company)


@router.delete(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={204: {"description": "Company erased"}},
)
def delete_company(
    company_id: str,
    request: DeleteRequest,
    repo: CompanyRepository = Depends(get_company_repo),
):
    company = company_service.delete_company(repo, company_id, request.mode)
    if company is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return CompanyResponse.model_validate(company)


@router.get("/{company_id}/users", response_model=list[UserResponse])
def list_company_users(
    company_id: str,
    companies: CompanyRepository = Depends(get_company_repo),
    employments: EmploymentRepository = Depends(get_employment_repo),
):
    users = employment_service.users_of(employments, companies, company_id)
    return [UserResponse.model_validate(u) for u in users]
