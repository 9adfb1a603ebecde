import logging
import uuid

from fastapi import APIRouter, Depends, Form
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.passwords import hash_password
from backend.core.errors import DatabaseError, DuplicateEmail, InternalError
from backend.database import get_db
from backend.models.user import User
from backend.uploads import accepted_photo, photo_url

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)

NO_USERS_MESSAGE = 'No users found'
USER_ADDED_MESSAGE = 'User added successfully'
USER_DELETED_MESSAGE = 'Staff member deleted successfully'


class UserRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    email: str
    password: str
    role: str | None = None
    photo: str | None = None


class MessageResponse(BaseModel):
    message: str


class UpdateResult(BaseModel):
    affectedRows: int


class UserPatch(BaseModel):
    """Columns to change on an existing user; unset fields are left alone."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    photo: str | None = None

    @field_validator('name', 'email', 'role', 'photo')
    @classmethod
    def drop_empty_values(cls, value: str | None) -> str | None:
        return value or None

    def as_values(self) -> dict[str, str]:
        # Field declaration order fixes the SET clause order.
        return self.model_dump(exclude_none=True)


def email_in_use(db: Session, email: str) -> bool:
    count = db.query(func.count(User.id)).filter(User.email == email).scalar()
    return count > 0


@router.get('/users', response_model=list[UserRecord] | MessageResponse)
def list_users(db: Session = Depends(get_db)):
    try:
        users = db.query(User).all()
    except SQLAlchemyError as exc:
        logger.exception('Error querying users')
        raise DatabaseError() from exc

    if not users:
        return MessageResponse(message=NO_USERS_MESSAGE)
    return users


@router.post('/users', response_model=MessageResponse)
def create_user(
    email: str = Form(...),
    password: str = Form(...),
    name: str | None = Form(None),
    role: str | None = Form(None),
    photo: str | None = Depends(accepted_photo),
    db: Session = Depends(get_db),
):
    try:
        duplicate = email_in_use(db, email)
    except SQLAlchemyError as exc:
        logger.exception('Error checking email uniqueness')
        raise DatabaseError() from exc

    if duplicate:
        raise DuplicateEmail()

    try:
        hashed_password = hash_password(password)
    except (TypeError, ValueError) as exc:
        logger.exception('Error hashing password')
        raise InternalError() from exc

    # An uploaded photo stays on disk only; it is linked through update.
    user = User(
        id=str(uuid.uuid4()),
        name=name,
        email=email,
        password=hashed_password,
        role=role,
    )

    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning('Insert for %s hit the unique email constraint', email)
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Error inserting user')
        raise DatabaseError() from exc

    logger.info('Created user %s (photo upload: %s)', user.id, photo or 'none')
    return MessageResponse(message=USER_ADDED_MESSAGE)


@router.put('/users/{user_id}', response_model=UpdateResult)
def update_user(
    user_id: str,
    name: str | None = Form(None),
    email: str | None = Form(None),
    role: str | None = Form(None),
    photo: str | None = Depends(accepted_photo),
    db: Session = Depends(get_db),
):
    patch = UserPatch(
        name=name,
        email=email,
        role=role,
        photo=photo_url(photo) if photo else None,
    )
    values = patch.as_values()

    if not values:
        logger.info('Update for user %s carried no fields', user_id)
        return UpdateResult(affectedRows=0)

    try:
        affected_rows = (
            db.query(User)
            .filter(User.id == user_id)
            .update(values, synchronize_session=False)
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning('Update for user %s hit the unique email constraint', user_id)
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Error updating user %s', user_id)
        raise DatabaseError() from exc

    logger.info('Updated %s on user %s (%d rows)', ', '.join(values), user_id, affected_rows)
    return UpdateResult(affectedRows=affected_rows)


@router.delete('/users/{user_id}', response_model=MessageResponse)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    try:
        deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Error deleting user %s', user_id)
        raise DatabaseError() from exc

    logger.info('Deleted user %s (%d rows)', user_id, deleted)
    return MessageResponse(message=USER_DELETED_MESSAGE)
