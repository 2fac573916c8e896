from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from spa_api.core.config import settings
from spa_api.models.user import Role

security = HTTPBearer()


class Identity(BaseModel):
    """Caller attached to a request: who they are and what role they hold."""
    worker_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def decode_identity(token: str) -> Identity:
    """Verify a bearer token and read the caller's id (sub) and role."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception

    worker_id = payload.get("sub")
    if worker_id is None:
        raise credentials_exception
    try:
        return Identity(worker_id=str(worker_id), role=payload.get("role", Role.WORKER.value))
    except ValidationError:
        raise credentials_exception


async def get_identity(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Identity:
    """Get the calling identity from the Authorization header."""
    return decode_identity(credentials.credentials)


async def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return identity
