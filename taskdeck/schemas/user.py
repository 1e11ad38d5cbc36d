from pydantic import BaseModel, EmailStr, ConfigDict
from datetime import datetime
from typing import Literal, Optional

# Schemas utilisateur / session

class UserCreate(BaseModel):
    email: EmailStr
    password: str
    name: Optional[str] = None

class UserResponse(BaseModel):
    id: int
    name: Optional[str]
    email: str
    image: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class ProfileUpdate(BaseModel):
    """Maj du profil: name et email obligatoires (vérifiés dans le router)"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    image: Optional[str] = None
    password: Optional[str] = None

class ClientPreferences(BaseModel):
    """Config lue par le client avant le premier rendu"""
    theme: Literal["light", "dark", "system"] = "system"

    model_config = ConfigDict(from_attributes=True)
