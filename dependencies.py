# dependencies.py
"""
Shared FastAPI dependencies: bearer-token auth and the owner role guard.
"""
from fastapi import Depends, HTTPException, Request
from jose import JWTError, jwt

import config

OWNER_ROLES = ("owner", "admin")


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
          return payload
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


def require_owner(token: dict = Depends(verify_token)) -> dict:
     """Only owners and admins may manage finances."""
     if token.get("role") not in OWNER_ROLES:
          raise HTTPException(status_code=403, detail="Owner access required")
     return token
