import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flightwatch.exceptions import NotFound, UniquenessViolation
from flightwatch.models import User
from flightwatch.schemas import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def create_user(self, data: UserCreate) -> User:
        user = User(
            email=data.email,
            telegram_chat_id=data.telegram_chat_id,
            notification_enabled=data.notification_enabled,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Rejected duplicate user email {data.email}")
            raise UniquenessViolation(f"User with email {data.email} already exists") from e

        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User", user_id)
        return user
