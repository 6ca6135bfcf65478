"""
ETL Loaders

Persist canonical properties into the properties table by keyed upsert.
"""
from datetime import datetime, timezone
from typing import Callable, ContextManager, List, Optional

from sqlalchemy.orm import Session

from src.property_etl.db.repository import PropertyRepository
from src.property_etl.db.session import get_db_session
from src.property_etl.models.property import NormalizedProperty
from src.property_etl.models.results import LoadResult
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)

SessionScope = Callable[[], ContextManager[Session]]


class PropertyLoader:
    """
    Load canonical properties one at a time.

    Each property is written in its own transaction, so a failure on one row
    is counted as skipped and never rolls back the rows before it. Loading the
    same property id again always updates, never inserts a duplicate.
    """

    name = "property_loader"

    def __init__(
        self,
        session_scope: Optional[SessionScope] = None,
        repository: Optional[PropertyRepository] = None,
    ):
        """
        Args:
            session_scope: Context-manager factory yielding a session that
                commits on exit (defaults to get_db_session)
            repository: Override the property repository
        """
        self.session_scope = session_scope or get_db_session
        self.repository = repository or PropertyRepository()

    def load(self, properties: List[NormalizedProperty]) -> LoadResult:
        """
        Upsert a batch of validated properties.

        Args:
            properties: Properties that passed validation

        Returns:
            LoadResult with added/updated/skipped counts
        """
        result = LoadResult()

        for prop in properties:
            try:
                was_update = self._upsert(prop)
            except Exception as e:
                logger.error(
                    "property_load_failed",
                    property_id=prop.id,
                    address=prop.address,
                    error=str(e),
                    error_type=type(e).__name__
                )
                result.skipped += 1
                continue

            if was_update:
                result.updated += 1
            else:
                result.added += 1

        logger.info(
            "properties_loaded",
            added=result.added,
            updated=result.updated,
            skipped=result.skipped
        )
        return result

    def _upsert(self, prop: NormalizedProperty) -> bool:
        """
        Insert or overwrite one property.

        Returns:
            True if an existing row was updated, False if inserted
        """
        record = prop.to_record()
        now = datetime.now(timezone.utc)

        with self.session_scope() as session:
            existing = self.repository.get_by_id(session, prop.id)
            if existing is not None:
                fields = {k: v for k, v in record.items() if k != "id"}
                self.repository.update(session, prop.id, updated_at=now, **fields)
                return True

            self.repository.create(session, created_at=now, updated_at=now, **record)
            return False
