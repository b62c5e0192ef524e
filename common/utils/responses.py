"""
Success envelope shared by every endpoint.

Example:
    from common.utils import success_response

    @router.get("/streak")
    async def get_streak(...):
        return success_response({"currentCheckinStreak": 4})
"""

from typing import Any, Optional, Dict


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """
    Wrap endpoint output as {"success": True, "data": ..., "message": ...}.

    data and message are omitted when not given; errors never use this
    envelope (they surface as HTTPException detail).
    """
    response: Dict[str, Any] = {"success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    return response
