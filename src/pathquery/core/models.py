from typing import Dict, Optional

from pydantic import BaseModel, field_validator


class ExplodeSpec(BaseModel):
    path: str
    emit_root_when_empty: bool = True

    @field_validator("path")
    @classmethod
    def _non_empty_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("explode.path must be a non-empty string")
        return v


class SelectionSpec(BaseModel):
    columns: Dict[str, str]
    explode: Optional[ExplodeSpec] = None

    @field_validator("columns")
    @classmethod
    def _non_empty_columns(cls, v: Dict[str, str]) -> Dict[str, str]:
        if not v:
            raise ValueError("columns must be a non-empty object")
        for name in v:
            if not name:
                raise ValueError("column names must be non-empty strings")
        return v
