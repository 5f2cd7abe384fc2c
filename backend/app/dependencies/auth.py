"""Caller identity for protected routes.

Authentication happens upstream; the proxy forwards the authenticated user
id in a header (settings.user_id_header, X-User-Id by default).
"""

from fastapi import HTTPException, Request, status

from app.config import settings


def get_current_user_id(request: Request) -> str:
    """
    Get the authenticated user id forwarded by the proxy.

    Usage:
        @router.get("/protected")
        def protected_route(user_id: str = Depends(get_current_user_id)):
            return {"user_id": user_id}
    """
    user_id = request.headers.get(settings.user_id_header, "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.user_id_header} header",
        )
    return user_id
