from __future__ import annotations
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field
from typing_extensions import Annotated


class RejectionReason(str, Enum):
    TOO_SHORT = 'too_short'
    SAME_AS_ROOT = 'same_as_root'
    NOT_ORIGINAL = 'not_original'
    NOT_POSSIBLE = 'not_possible'
    NOT_REAL = 'not_real'


class Accepted(BaseModel):
    kind: Literal['accepted'] = 'accepted'
    word: str
    points: int


class Rejected(BaseModel):
    kind: Literal['rejected'] = 'rejected'
    word: str
    reason: RejectionReason
    title: str
    message: str


SubmissionResult = Annotated[Union[Accepted, Rejected], Field(discriminator='kind')]

SessionStatus = Literal['idle', 'in_round']


class SessionState(BaseModel):
    id: str
    status: SessionStatus = 'idle'
    rootWord: Optional[str] = None
    usedWords: List[str] = []
    score: int = 0


class WordSubmission(BaseModel):
    word: str = ''


class SubmissionResponse(BaseModel):
    result: Optional[SubmissionResult] = None
    state: SessionState


class ErrorDetail(BaseModel):
    error: str
    message: str
