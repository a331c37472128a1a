"""공통 Pydantic 응답 스키마.

Common response schemas shared across API domains.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic confirmation message for actions without a resource body.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str
