from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.core.config import settings


# merchant sessions are issued by the storefront platform, we only verify them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/session")
# optional bearer for endpoints that answer anonymous requests too
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/session", auto_error=False)


def create_access_token(shop_id: str, role: str = "merchant", expires_delta: Optional[timedelta] = None) -> str:
    to_encode = {
        "sub": shop_id,
        "role": role,
        "iat": int(datetime.now(tz=timezone.utc).timestamp()),
    }
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRES_MIN))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm="HS256")


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from e


def get_current_shop(token: str = Depends(oauth2_scheme)) -> str:
    payload = decode_token(token)
    shop_id = payload.get("sub")
    if not shop_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return shop_id


def get_optional_shop(token: Optional[str] = Depends(optional_oauth2_scheme)) -> Optional[str]:
    """resolve the session shop, or None for anonymous / bad tokens."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError:
        return None
    return payload.get("sub") or None
