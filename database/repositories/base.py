from typing import Any, List

from sqlalchemy.orm import Session


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def _all(self, stmt: Any) -> List[Any]:
        """Execute a select and return the mapped rows."""
        return list(self.db.execute(stmt).scalars().all())
