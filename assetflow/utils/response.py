# assetflow/utils/response.py

from typing import TypeVar, Generic, Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
    }


def paginated_response(
    message: str,
    data: List[T],
    *,
    page: int,
    limit: int,
    total: int,
) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": -(-total // limit),
    }


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class PaginatedResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    data: List[T]
    page: int
    limit: int
    total: int
    total_pages: int
