# agri_advisor/api/validation.py
"""
Request body checks shared by the v1 endpoints
"""
from typing import Any, Dict, Iterable, Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

ModelType = TypeVar("ModelType", bound=BaseModel)

def require_fields(payload: Optional[Dict[str, Any]], fields: Iterable[str]) -> Dict[str, Any]:
    """Reject the request with 400 unless every field is present and non-empty"""
    payload = payload or {}
    missing = [field for field in fields if payload.get(field) in (None, "", {}, [])]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}"
        )
    return payload

def parse_body(model: Type[ModelType], payload: Dict[str, Any]) -> ModelType:
    """Build the request model, turning schema errors into a 400"""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise HTTPException(status_code=400, detail=f"Invalid request: {problems}")
