# Folder: rtl_api/schemas
# File:   schemas.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Literal
from pydantic import BaseModel, Field, field_validator

from rtl_core.block_6_transactions.b6f1_transaction_apply import STEP_OPS

Direction = Literal["ltr", "rtl"]


class EditorOptions(BaseModel):
    types: Optional[List[str]] = None
    auto_detect: Optional[bool] = None
    default_direction: Optional[Direction] = None
    rtl_threshold: Optional[float] = Field(default=None, ge=0.0, lt=1.0)
    preserve_explicit: Optional[bool] = None
    leaf_types: Optional[List[str]] = None


class Selection(BaseModel):
    from_: int = Field(alias="from", ge=0)
    to: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class DocumentCreateRequest(BaseModel):
    doc_id: str
    doc: Optional[Dict[str, Any]] = None
    options: Optional[EditorOptions] = None


class Step(BaseModel):
    op: str
    pos: Optional[int] = None
    attrs: Optional[Dict[str, Any]] = None
    text: Optional[str] = None
    node: Optional[Dict[str, Any]] = None
    doc: Optional[Dict[str, Any]] = None

    @field_validator("op")
    @classmethod
    def _known_op(cls, v: str) -> str:
        if v not in STEP_OPS:
            raise ValueError(f"op must be one of {list(STEP_OPS)}")
        return v


class TransactionRequest(BaseModel):
    steps: List[Step]
    origin: str = "user"
    selection: Optional[Selection] = None


class SetDirectionRequest(BaseModel):
    # required; send null to clear
    direction: Optional[Direction]
    from_: Optional[int] = Field(default=None, alias="from", ge=0)
    to: Optional[int] = Field(default=None, ge=0)
    dispatch: bool = True

    model_config = {"populate_by_name": True}


class ToggleDirectionRequest(BaseModel):
    pos: Optional[int] = Field(default=None, ge=0)
    dispatch: bool = True


class DocumentDirectionRequest(BaseModel):
    direction: Direction
    dispatch: bool = True


class KeyRequest(BaseModel):
    chord: str
    pos: Optional[int] = Field(default=None, ge=0)


class ClassifyRequest(BaseModel):
    texts: List[str]
    rtl_threshold: Optional[float] = Field(default=None, ge=0.0, lt=1.0)
