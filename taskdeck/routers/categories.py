import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from taskdeck.core.database import get_db
from taskdeck.core.deps import get_current_user
from taskdeck.models.user import User
from taskdeck.models.category import Category
from taskdeck.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])

logger = logging.getLogger(__name__)


def get_owned_category(category_id: int, db: Session, current_user: User) -> Category:
    # 404 si absente, 403 si elle appartient à un autre user
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    if category.user_id != current_user.id:
        logger.warning(f"User {current_user.id} denied access to category {category_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this category"
        )

    return category


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Category).filter(
        Category.user_id == current_user.id
    ).order_by(Category.created_at.desc(), Category.id.desc()).all()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not category_data.name or not category_data.name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required")

    new_category = Category(
        user_id=current_user.id,
        name=category_data.name,
        color=category_data.color or None
    )
    db.add(new_category)
    db.commit()
    db.refresh(new_category)

    logger.info(f"Category {new_category.id} created by user {current_user.id}")
    return new_category


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_owned_category(category_id, db, current_user)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    category = get_owned_category(category_id, db, current_user)

    update_data = category_data.model_dump(exclude_unset=True)

    if "name" in update_data:
        name = update_data["name"]
        if not name or not name.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name cannot be empty")
        category.name = name

    if "color" in update_data:
        category.color = update_data["color"] or None

    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    category = get_owned_category(category_id, db, current_user)

    # les tâches liées sont gardées, leur category_id passe à NULL (relation ORM)
    db.delete(category)
    db.commit()

    logger.info(f"Category {category_id} deleted by user {current_user.id}")
    return {"success": True}
