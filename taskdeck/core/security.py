from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from taskdeck.core.config import settings


def _encode(claims: dict, token_type: str, expire_min: int) -> str:
    payload = dict(claims)
    payload["exp"] = datetime.utcnow() + timedelta(minutes=expire_min)
    payload["type"] = token_type
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def session_claims(user) -> dict:
    # les infos de profil embarquées dans le token (id, name, email, image)
    return {
        "user_id": user.id,
        "name": user.name,
        "email": user.email,
        "image": user.image,
    }


def create_access_token(user_id: int, email: str, name: Optional[str] = None, image: Optional[str] = None) -> str:
    # token d'accès JWT de 15 minutes
    claims = {"user_id": user_id, "name": name, "email": email, "image": image}
    return _encode(claims, "access", settings.JWT_EXPIRE_MIN)


def create_refresh_token(user_id: int, email: str, name: Optional[str] = None, image: Optional[str] = None) -> str:
    # token de rafraîchissement JWT de 30 jours
    claims = {"user_id": user_id, "name": name, "email": email, "image": image}
    return _encode(claims, "refresh", settings.JWT_REFRESH_EXPIRE_MIN)


def create_session_tokens(user) -> dict:
    claims = session_claims(user)
    return {
        "access_token": create_access_token(**claims),
        "refresh_token": create_refresh_token(**claims),
        "token_type": "bearer",
    }


def verify_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None
