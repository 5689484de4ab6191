from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ProblemDetails(BaseModel):
    """RFC 7807 error body"""

    type: Optional[str] = None
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None
    errors: Optional[List[Dict[str, Any]]] = None
    exception: Optional[str] = None
