"""역할 기반 가시 범위 및 권한 판정 모듈.

Role-based visibility scope and authorization rules.
Everything here is a pure function of the principal: no database access,
no exceptions. Callers translate the results into responses.

Role hierarchy (priority, lower = higher authority):
    1 = operator (전체 운영자, sees every company)
    2 = company_manager (회사 관리자, whole company)
    3 = manager (부서 관리자, company reads, own department writes)
    4 = user (일반 직원, own company and department)
"""

import uuid
from dataclasses import dataclass, replace
from typing import Any, Iterable

OPERATOR: str = "operator"
COMPANY_MANAGER: str = "company_manager"
MANAGER: str = "manager"
USER: str = "user"

ROLE_PRIORITY: dict[str, int] = {
    OPERATOR: 1,
    COMPANY_MANAGER: 2,
    MANAGER: 3,
    USER: 4,
}

ALL_ROLES: frozenset[str] = frozenset(ROLE_PRIORITY)
# 미션/프로젝트/KPI 쓰기 허용 역할 (Roles allowed to write missions, projects, KPIs)
MANAGING_ROLES: frozenset[str] = frozenset({OPERATOR, COMPANY_MANAGER, MANAGER})


@dataclass(frozen=True)
class Principal:
    """인증된 요청 주체.

    Authenticated identity of a request, rebuilt from the session token.
    Immutable for the token's lifetime.
    """

    id: uuid.UUID
    email: str
    employee_name: str
    role: str
    company_id: uuid.UUID
    company_name: str
    department: str | None = None

    def to_claims(self) -> dict[str, Any]:
        """JWT 페이로드로 직렬화 (Serialize to session token claims)."""
        return {
            "sub": str(self.id),
            "email": self.email,
            "name": self.employee_name,
            "role": self.role,
            "company_id": str(self.company_id),
            "company_name": self.company_name,
            "department": self.department,
        }

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        """JWT 페이로드에서 복원합니다.

        Raises:
            KeyError: 필수 클레임 누락 (Missing claim)
            ValueError: 잘못된 UUID 또는 역할 (Malformed UUID or unknown role)
        """
        role: str = claims["role"]
        if role not in ALL_ROLES:
            raise ValueError(f"unknown role: {role}")
        return cls(
            id=uuid.UUID(claims["sub"]),
            email=claims["email"],
            employee_name=claims["name"],
            role=role,
            company_id=uuid.UUID(claims["company_id"]),
            company_name=claims["company_name"],
            department=claims.get("department"),
        )


@dataclass(frozen=True)
class Scope:
    """(회사, 부서) 가시 범위. None은 해당 차원 제한 없음.

    Visibility restriction; None on a dimension means unrestricted.
    """

    company_id: uuid.UUID | None = None
    department: str | None = None

    def allows(self, company_id: uuid.UUID | None, department: str | None) -> bool:
        """행이 범위 안에 있는지 확인 (Whether a row falls inside the scope)."""
        if self.company_id is not None and company_id != self.company_id:
            return False
        if self.department is not None and department != self.department:
            return False
        return True


def resolve_scope(principal: Principal) -> Scope:
    """읽기 범위를 계산합니다.

    Compute the read scope of a principal. Managers read their whole company;
    only plain users are pinned to their department.

    Args:
        principal: 요청 주체 (Authenticated principal)

    Returns:
        Scope: 역할에서 유도된 범위 (Role-derived scope)
    """
    if principal.role == OPERATOR:
        return Scope()
    if principal.role == USER:
        return Scope(company_id=principal.company_id, department=principal.department)
    return Scope(company_id=principal.company_id)


def resolve_employee_write_scope(principal: Principal) -> Scope:
    """직원 생성/수정 시 강제되는 범위를 계산합니다.

    Scope forced onto employee writes. Same as the read scope except that a
    manager is pinned to their own department. The non-None fields of the
    result overwrite whatever the client sent.
    """
    if principal.role == MANAGER:
        return Scope(company_id=principal.company_id, department=principal.department)
    return resolve_scope(principal)


def narrow_scope(
    scope: Scope,
    company_id: uuid.UUID | None = None,
    department: str | None = None,
) -> Scope | None:
    """쿼리 파라미터로 범위를 좁힙니다.

    Layer client query parameters on top of a role scope. A parameter can
    narrow an unrestricted dimension; a parameter that contradicts a forced
    dimension makes the result empty, signalled by None. Parameters never
    widen the scope.

    Args:
        scope: 역할 범위 (Role-derived scope)
        company_id: 요청된 회사 필터 (Requested company filter)
        department: 요청된 부서 필터 (Requested department filter)

    Returns:
        Scope | None: 좁혀진 범위, 교집합이 없으면 None
                      (Narrowed scope, or None when the intersection is empty)
    """
    if company_id is not None:
        if scope.company_id is not None and scope.company_id != company_id:
            return None
        scope = replace(scope, company_id=company_id)
    if department:
        if scope.department is not None and scope.department != department:
            return None
        scope = replace(scope, department=department)
    return scope


def authorize(principal: Principal | None, allowed_roles: Iterable[str]) -> bool:
    """역할 게이트. 주체가 없거나 허용 역할이 아니면 False.

    Pure role predicate; never raises.
    """
    if principal is None:
        return False
    return principal.role in set(allowed_roles)


def can_assign_role(principal: Principal, target_role: str) -> bool:
    """주체가 대상 역할을 부여할 수 있는지 확인합니다.

    Operators may assign any role; everyone else only roles strictly below
    their own priority.
    """
    if target_role not in ROLE_PRIORITY:
        return False
    if principal.role == OPERATOR:
        return True
    return ROLE_PRIORITY[target_role] > ROLE_PRIORITY[principal.role]
