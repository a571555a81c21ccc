import uuid
from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from ..models.author import Author
from ..models.genre import Genre
from ..models.publisher import Publisher
from ..models.user import User

ModelT = TypeVar("ModelT", bound=SQLModel)


class SoftDeleteRepository(Generic[ModelT]):
    """Persistence for tables carrying a ``deleted_at`` column.

    Every read hides soft-deleted rows unless the caller passes
    ``include_deleted=True``. Nothing is ever removed physically.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def _select(self, include_deleted: bool = False):
        statement = select(self.model)
        if not include_deleted:
            statement = statement.where(self.model.deleted_at.is_(None))
        return statement

    def get(self, entity_id: uuid.UUID, include_deleted: bool = False) -> Optional[ModelT]:
        statement = self._select(include_deleted).where(self.model.id == entity_id)
        return self.session.exec(statement).first()

    def exists(self, entity_id: uuid.UUID) -> bool:
        return self.get(entity_id) is not None

    def find_first(self, *criteria, include_deleted: bool = False) -> Optional[ModelT]:
        return self.session.exec(self._select(include_deleted).where(*criteria)).first()

    def list(self, *criteria, order_by=None) -> List[ModelT]:
        statement = self._select().where(*criteria)
        if order_by is not None:
            statement = statement.order_by(order_by)
        return list(self.session.exec(statement).all())

    def save(self, entity: ModelT, touch: bool = True) -> ModelT:
        if touch:
            entity.updated_at = datetime.utcnow()
        self.session.add(entity)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(entity)
        return entity

    def soft_delete(self, entity: ModelT) -> ModelT:
        entity.deleted_at = datetime.utcnow()
        return self.save(entity)


class UserRepository(SoftDeleteRepository[User]):
    model = User

    def find_by_email(self, email: str, include_deleted: bool = False) -> Optional[User]:
        return self.find_first(User.email == email, include_deleted=include_deleted)


class AuthorRepository(SoftDeleteRepository[Author]):
    model = Author


class PublisherRepository(SoftDeleteRepository[Publisher]):
    model = Publisher


class GenreRepository(SoftDeleteRepository[Genre]):
    model = Genre
