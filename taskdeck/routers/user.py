from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskdeck.core.database import get_db
from taskdeck.core.deps import get_current_user
from taskdeck.models.user import User
from taskdeck.schemas.user import UserResponse, ProfileUpdate, ClientPreferences
from taskdeck.services.user_service import (
    ProfileError,
    EmailTakenError,
    update_profile,
    delete_account
)

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def put_profile(
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Maj du profil.

    - name et email obligatoires
    - email déjà pris par un autre user -> 409, rien n'est modifié
    - image absente -> on garde l'actuelle
    - password non vide -> min 6 caractères puis re-hash, sinon hash inchangé
    """
    try:
        return update_profile(db, current_user, profile_data.model_dump(exclude_unset=True))
    except EmailTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ProfileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/profile")
def delete_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Suppression réelle du compte (tâches, sous-tâches, catégories comprises)"""
    delete_account(db, current_user)
    return {"success": True}


@router.get("/preferences", response_model=ClientPreferences)
def get_preferences(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/preferences", response_model=ClientPreferences)
def update_preferences(
    preferences: ClientPreferences,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    current_user.theme = preferences.theme
    db.commit()
    db.refresh(current_user)
    return current_user
