"""User service"""

import logging

from sqlalchemy.orm import Session
from taskdeck.core.config import settings
from taskdeck.models.user import User
from taskdeck.models.category import Category
from taskdeck.models.task import Task
from taskdeck.models.subtask import Subtask

logger = logging.getLogger(__name__)


class ProfileError(ValueError):
    """Maj de profil refusée (message renvoyé tel quel au client)"""


class EmailTakenError(ProfileError):
    pass


def email_taken_by_other(db: Session, email: str, user_id: int) -> bool:
    existing = db.query(User).filter(User.email == email, User.id != user_id).first()
    return existing is not None


def update_profile(db: Session, user: User, changes: dict) -> User:
    """Applique une maj de profil, rien n'est écrit si une vérification échoue.

    ``changes`` ne contient que les champs envoyés par le client.
    """
    name = changes.get("name")
    email = changes.get("email")
    password = changes.get("password")

    if not name or not email:
        raise ProfileError("Name and email are required")

    if email != user.email and email_taken_by_other(db, email, user.id):
        raise EmailTakenError("Email already in use")

    if password and len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ProfileError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")

    user.name = name
    user.email = email

    # image absente -> on garde l'actuelle, null -> effacée
    if "image" in changes:
        user.image = changes["image"]

    if password:
        user.set_password(password)

    db.commit()
    db.refresh(user)

    logger.info(f"Profile updated for user {user.id}")
    return user


def delete_account(db: Session, user: User) -> None:
    """Supprime le compte et toutes ses données dans une seule transaction.

    Ordre: sous-tâches, tâches, catégories puis le user.
    """
    user_id = user.id
    task_ids = db.query(Task.id).filter(Task.user_id == user_id)

    subtasks_deleted = db.query(Subtask).filter(
        Subtask.task_id.in_(task_ids.scalar_subquery())
    ).delete(synchronize_session=False)
    tasks_deleted = db.query(Task).filter(Task.user_id == user_id).delete(synchronize_session=False)
    categories_deleted = db.query(Category).filter(Category.user_id == user_id).delete(synchronize_session=False)

    db.delete(user)
    db.commit()

    logger.info(
        f"Account {user_id} deleted ({tasks_deleted} tasks, "
        f"{subtasks_deleted} subtasks, {categories_deleted} categories)"
    )
