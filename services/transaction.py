from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from models import db
from services.errors import StorageError


@contextmanager
def unit_of_work():
    """
    Scope one all-or-nothing write.

    Commits when the block exits normally. Any exception rolls back every
    write made in the block; database errors come out as StorageError.

        with unit_of_work() as session:
            session.add(...)
    """
    session = db.session
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError(str(exc)) from exc
    except BaseException:
        session.rollback()
        raise
