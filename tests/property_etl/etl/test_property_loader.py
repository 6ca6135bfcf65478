"""
Tests for PropertyLoader
"""
import pytest

from src.property_etl.db.repository import PropertyRepository
from src.property_etl.etl.loaders import PropertyLoader
from src.property_etl.transformers.property_transformer import PropertyDataTransformer


@pytest.fixture
def properties(make_raw):
    transformer = PropertyDataTransformer()
    return transformer.transform([
        make_raw(address="1234 Main Street"),
        make_raw(address="5678 Oak Avenue", latitude=40.7505, longitude=-73.9934),
    ])


class FlakyRepository(PropertyRepository):
    """Repository whose create fails for one id."""

    def __init__(self, failing_id):
        super().__init__()
        self.failing_id = failing_id

    def create(self, session, **kwargs):
        if kwargs["id"] == self.failing_id:
            raise RuntimeError("constraint violated")
        return super().create(session, **kwargs)


class TestPropertyLoader:
    """Tests for keyed upsert loading"""

    def test_first_load_adds(self, loader, properties):
        result = loader.load(properties)
        assert (result.added, result.updated, result.skipped) == (2, 0, 0)

    def test_second_load_updates(self, loader, properties, test_db):
        loader.load(properties[:1])
        result = loader.load(properties[:1])

        assert (result.added, result.updated, result.skipped) == (0, 1, 0)
        assert PropertyRepository().count(test_db) == 1

    def test_update_overwrites_fields(self, loader, properties, test_db):
        loader.load(properties[:1])
        changed = properties[0].model_copy(update={"investment_score": 9.0, "data_source": "attom"})
        loader.load([changed])

        row = PropertyRepository().get_by_id(test_db, changed.id)
        assert row.investment_score == 9.0
        assert row.data_source == "attom"

    def test_rows_match_entities(self, loader, properties, test_db):
        loader.load(properties)
        row = PropertyRepository().get_by_id(test_db, properties[1].id)

        assert row.address == "5678 Oak Avenue"
        assert row.property_condition == properties[1].property_condition.value
        assert row.created_at is not None
        assert row.updated_at is not None

    def test_failed_record_is_skipped(self, session_scope, properties, test_db):
        loader = PropertyLoader(
            session_scope=session_scope,
            repository=FlakyRepository(failing_id=properties[0].id),
        )
        result = loader.load(properties)

        assert (result.added, result.updated, result.skipped) == (1, 0, 1)
        assert PropertyRepository().get_by_id(test_db, properties[1].id) is not None
        assert PropertyRepository().get_by_id(test_db, properties[0].id) is None

    def test_empty_batch(self, loader):
        assert loader.load([]).total == 0
