from typing import Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from storefront.db.session import get_db
from storefront.db.models import Customer, User, UserRole
from storefront.core.config import settings
from storefront.core.security import verify_token
from storefront.services.session import SessionCredentials

security = HTTPBearer(auto_error=False)


def get_session_credentials(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> SessionCredentials:
    """
    Collect the session tokens the client presented. The access token may come
    from the cookie or a bearer header; the cookie wins when both are sent.
    """
    access_token = request.cookies.get(settings.ACCESS_TOKEN_COOKIE)
    if not access_token and credentials:
        access_token = credentials.credentials

    return SessionCredentials(
        access_token=access_token,
        refresh_token=request.cookies.get(settings.REFRESH_TOKEN_COOKIE),
    )


async def get_current_customer(
    session: SessionCredentials = Depends(get_session_credentials),
    db: AsyncSession = Depends(get_db),
) -> Customer:
    if not session.access_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    payload = verify_token(session.access_token)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    result = await db.execute(
        select(Customer)
        .join(User, Customer.user_id == User.id)
        .where(
            and_(
                User.id == str(payload["sub"]),
                User.role == UserRole.CUSTOMER,
                User.is_active == True,
            )
        )
    )
    customer = result.scalar_one_or_none()

    if not customer:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return customer
