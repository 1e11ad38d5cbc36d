"""Dépendances d'authentification partagées par tous les routers.

Le token est décodé une seule fois en un ``AuthContext`` typé, injecté
ensuite dans chaque handler. Le ``User`` est résolu par l'email porté par
la session, comme le faisait le provider de session.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from taskdeck.core.database import get_db
from taskdeck.core.security import verify_token
from taskdeck.models.user import User


class AuthContext(BaseModel):
    user_id: int
    name: Optional[str] = None
    email: str
    image: Optional[str] = None


def get_auth_context(authorization: Optional[str] = Header(None)) -> AuthContext:
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = authorization.replace("Bearer ", "")
    payload = verify_token(token)
    if not payload or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    # une session sans email ne permet pas de retrouver l'utilisateur
    if not payload.get("email") or payload.get("user_id") is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    return AuthContext(
        user_id=payload["user_id"],
        name=payload.get("name"),
        email=payload["email"],
        image=payload.get("image"),
    )


def get_current_user(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
) -> User:
    user = db.query(User).filter(User.email == auth.email).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
