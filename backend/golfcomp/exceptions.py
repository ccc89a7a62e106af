from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class RoundNotFound(DomainException):
    def __init__(self, round_id: str) -> None:
        super().__init__(
            status_code=404,
            title="Round not found",
            detail=f"round '{round_id}' not found",
            code="round_not_found",
        )


class InvalidScoreEntry(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=400,
            title="Invalid score entry",
            detail=detail,
            code="invalid_score_entry",
        )


class RoundLocked(DomainException):
    def __init__(self, round_id: str) -> None:
        super().__init__(
            status_code=409,
            title="Round locked",
            detail=f"round '{round_id}' has been posted and can no longer be edited",
            code="round_locked",
        )


class InvalidTeamAssignment(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=400,
            title="Invalid team assignment",
            detail=detail,
            code="invalid_team_assignment",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
