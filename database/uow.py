import contextlib

from database.database import SessionLocal
from database.repositories.catalog import CatalogRepository


@contextlib.contextmanager
def catalog_uow():
    """Per-unit-of-work transaction scope.

    Yields a CatalogRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with catalog_uow() as repo:
            positions = repo.get_all_candidate_positions()
    """
    session = SessionLocal()
    try:
        repo = CatalogRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
