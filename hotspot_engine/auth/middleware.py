"""Authentication dependencies.

Users sign in through the account service, which shares the session
secret and stores the signed-in user's id in the session cookie. This
service only reads that identity.
"""

from fastapi import Depends, HTTPException, Request, status

from hotspot_engine.schemas.auth import CallerIdentity


async def get_current_user_optional(request: Request) -> CallerIdentity | None:
    """Get the caller from the session, or None if not authenticated."""
    user_id = request.session.get("user_id")
    if not user_id:
        return None
    return CallerIdentity(user_id=str(user_id))


async def get_current_user(
    user: CallerIdentity | None = Depends(get_current_user_optional),
) -> CallerIdentity:
    """Get the caller, or raise 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthenticated",
        )
    return user
