import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from taskdeck.core.config import settings
from taskdeck.core.database import get_db
from taskdeck.core.deps import AuthContext, get_auth_context
from taskdeck.core.security import create_access_token, create_session_tokens, session_claims, verify_token
from taskdeck.models.user import User
from taskdeck.schemas.user import UserCreate, UserResponse, LoginRequest, RefreshRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Créer un nouvel utilisateur"""

    # Vérifie si l'email existe déjà
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

    if len(user_data.password) < settings.PASSWORD_MIN_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
        )

    new_user = User(email=user_data.email, name=user_data.name)
    new_user.set_password(user_data.password)

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"User {new_user.id} signed up")
    return new_user


@router.post("/signin", response_model=TokenResponse)
def signin(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Se connecter (email + password) et recevoir les tokens"""

    user = db.query(User).filter(User.email == credentials.email).first()

    # même message pour un email inconnu, un compte sans password ou un mauvais password
    if not user or not user.verify_password(credentials.password):
        logger.warning(f"Failed sign-in for {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    return create_session_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
def refresh(body: RefreshRequest, db: Session = Depends(get_db)):
    """Utiliser un refresh_token pour obtenir un nouvel access_token"""

    payload = verify_token(body.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = db.query(User).filter(User.id == payload.get("user_id")).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    # claims reconstruits depuis le profil courant (email modifié entre-temps)
    access_token = create_access_token(**session_claims(user))

    return {
        "access_token": access_token,
        "refresh_token": body.refresh_token,
        "token_type": "bearer"
    }


@router.post("/session", response_model=TokenResponse)
def update_session(auth: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)):
    """Ré-émettre les tokens avec le profil à jour (après un PUT /user/profile).

    Le user est retrouvé par son id: l'email de la session peut être celui
    d'avant la modification.
    """
    user = db.query(User).filter(User.id == auth.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info(f"Session refreshed for user {user.id}")
    return create_session_tokens(user)
