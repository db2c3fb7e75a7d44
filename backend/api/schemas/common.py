"""
API — 共用/通用 Response Schemas。
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """GET /health 回應。"""

    status: str
    service: str
