import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.passwords import verify_password
from backend.core.errors import AuthenticationError, DatabaseError, InvalidCredentials
from backend.database import get_db
from backend.models.user import User
from backend.routes.user_routes import UserRecord

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')


class LoginRequest(BaseModel):
    email: str
    password: str


async def read_login_request(request: Request) -> LoginRequest:
    """Accept credentials either as a JSON body or as a URL-encoded form."""
    content_type = request.headers.get('content-type', '').lower()
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            payload = dict(await request.form())
        else:
            payload = await request.json()
    except ValueError as exc:
        raise RequestValidationError(
            [{'type': 'json_invalid', 'loc': ('body',), 'msg': 'Malformed request body', 'input': None}]
        ) from exc

    try:
        return LoginRequest.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


@router.post('/login', response_model=UserRecord)
def login(credentials: LoginRequest = Depends(read_login_request), db: Session = Depends(get_db)):
    try:
        user = db.query(User).filter(User.email == credentials.email).first()
    except SQLAlchemyError as exc:
        logger.exception('Error looking up user for login')
        raise DatabaseError() from exc

    if user is None:
        raise InvalidCredentials()

    try:
        is_match = verify_password(credentials.password, user.password)
    except ValueError as exc:
        logger.exception('Error comparing passwords for user %s', user.id)
        raise AuthenticationError() from exc

    if not is_match:
        raise InvalidCredentials()

    logger.info('User %s logged in', user.id)
    return user
