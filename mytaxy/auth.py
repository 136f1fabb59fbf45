# mytaxy/auth.py
"""
Bearer-token identity for receipt owners.

Accounts and logins live in the surrounding application; this module only
issues and decodes the JWTs it hands out.
"""
from datetime import datetime, timedelta
from typing import Union

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from mytaxy.core.config import settings
from mytaxy.database import models
from mytaxy.database.stores import AccountStore, get_account_store

# =====================================
# ✅ Configurations
# =====================================
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

ROLES = ("user", "captain")

# =====================================
# ✅ JWT Helpers
# =====================================
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def create_access_token(data: dict) -> str:
    """Create a new JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_account_token(account: Union[models.User, models.Captain]) -> str:
    return create_access_token({"sub": str(account.id), "role": account.role})


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT token."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

# =====================================
# ✅ Current Account Fetcher
# =====================================
def get_current_account(
    token: str = Depends(oauth2_scheme),
    accounts: AccountStore = Depends(get_account_store),
) -> Union[models.User, models.Captain]:
    """Return the current user or captain from the token."""
    payload = decode_access_token(token)
    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or role not in ROLES:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    try:
        account_id = int(subject)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if role == "user":
        user = accounts.get_user(account_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    captain = accounts.get_captain(account_id)
    if not captain:
        raise HTTPException(status_code=404, detail="Captain not found")
    return captain


def get_current_user(account=Depends(get_current_account)) -> models.User:
    """Restrict a route to riders."""
    if getattr(account, "role", None) != "user":
        raise HTTPException(status_code=403, detail="Access forbidden: user role required")
    return account


def get_current_captain(account=Depends(get_current_account)) -> models.Captain:
    """Restrict a route to captains."""
    if getattr(account, "role", None) != "captain":
        raise HTTPException(status_code=403, detail="Access forbidden: captain role required")
    return account
