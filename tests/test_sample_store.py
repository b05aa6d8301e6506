"""
Sample store: half-open range, stable ordering and append-only behaviour.
"""

from datetime import timedelta

import pytest

from location_tracker.core.errors import UnknownUser
from location_tracker.db.models import LocationSample
from location_tracker.repositories.samples import SqlSampleStore
from location_tracker.repositories.users import SqlUserDirectory
from location_tracker.schemas.common import Telemetry
from location_tracker.utils.geo import Position

from conftest import T0


@pytest.fixture
def user_id(db, abc_user):
    return abc_user.id


def _append(db, user_id, ts, lat=-12.05, lon=-77.05, **telemetry):
    with db.session_scope() as session:
        return SqlSampleStore(session).append(user_id, Position(lat, lon), ts, Telemetry(**telemetry))


def _range(db, user_id, start, end):
    with db.session_scope() as session:
        return [(r.id, r.timestamp) for r in SqlSampleStore(session).query_range(user_id, start, end)]


class TestAppend:

    def test_returns_increasing_ids(self, db, user_id):
        first = _append(db, user_id, T0)
        second = _append(db, user_id, T0)
        assert second > first

    def test_unknown_user_handle(self, db):
        with pytest.raises(UnknownUser) as exc_info:
            _append(db, "no-such-handle", T0)
        assert exc_info.value.kind == "userId"
        assert "userId=no-such-handle" in exc_info.value.detail
        assert "externalUid" not in exc_info.value.detail

    def test_stores_telemetry(self, db, user_id):
        sample_id = _append(db, user_id, T0, accuracy=4.5, battery_level=80, activity_type="walking")
        with db.session_scope() as session:
            record = SqlSampleStore(session).get(sample_id)
            assert record.accuracy == 4.5
            assert record.battery_level == 80
            assert record.activity_type == "walking"
            assert record.altitude is None
            assert record.created_at is not None

    def test_timestamp_round_trips_as_aware_utc(self, db, user_id):
        _append(db, user_id, T0)
        [(_, ts)] = _range(db, user_id, T0, T0 + timedelta(seconds=1))
        assert ts == T0
        assert ts.utcoffset() == timedelta(0)

    def test_samples_are_immutable(self, db, user_id):
        sample_id = _append(db, user_id, T0)
        with pytest.raises(RuntimeError):
            with db.session_scope() as session:
                session.get(LocationSample, sample_id).latitude = 0.0

    def test_samples_cannot_be_deleted(self, db, user_id):
        sample_id = _append(db, user_id, T0)
        with pytest.raises(RuntimeError):
            with db.session_scope() as session:
                session.delete(session.get(LocationSample, sample_id))


class TestQueryRange:

    def test_half_open_bounds(self, db, user_id):
        at_start = _append(db, user_id, T0)
        inside = _append(db, user_id, T0 + timedelta(minutes=5))
        _append(db, user_id, T0 + timedelta(minutes=10))  # == end

        ids = [i for i, _ in _range(db, user_id, T0, T0 + timedelta(minutes=10))]
        assert ids == [at_start, inside]

    def test_empty_range_is_not_an_error(self, db, user_id):
        assert _range(db, user_id, T0, T0 + timedelta(hours=1)) == []

    def test_orders_by_capture_time_not_insertion(self, db, user_id):
        late = _append(db, user_id, T0 + timedelta(minutes=10))
        early = _append(db, user_id, T0)
        ids = [i for i, _ in _range(db, user_id, T0, T0 + timedelta(hours=1))]
        assert ids == [early, late]

    def test_ties_broken_by_id(self, db, user_id):
        a = _append(db, user_id, T0, lat=1.0)
        b = _append(db, user_id, T0, lat=2.0)
        c = _append(db, user_id, T0, lat=3.0)
        ids = [i for i, _ in _range(db, user_id, T0, T0 + timedelta(seconds=1))]
        assert ids == [a, b, c]

    def test_other_users_are_excluded(self, db, user_id):
        with db.session_scope() as session:
            other = SqlUserDirectory(session).upsert("xyz", "xyz@tracker.io").id
        _append(db, other, T0)
        mine = _append(db, user_id, T0)
        assert [i for i, _ in _range(db, user_id, T0, T0 + timedelta(seconds=1))] == [mine]


class TestDistanceMeters:

    def test_matches_query_range_order(self, db, user_id):
        # insertados fuera de orden: el agregado debe seguir (timestamp, id)
        _append(db, user_id, T0 + timedelta(minutes=10), lat=-12.06, lon=-77.06)
        _append(db, user_id, T0, lat=-12.05, lon=-77.05)
        _append(db, user_id, T0 + timedelta(minutes=20), lat=-12.05, lon=-77.05)

        with db.session_scope() as session:
            meters = SqlSampleStore(session).distance_meters(user_id, T0, T0 + timedelta(hours=1))
        assert meters == pytest.approx(2 * 1555.3, abs=2.0)

    def test_single_sample_is_zero(self, db, user_id):
        _append(db, user_id, T0)
        with db.session_scope() as session:
            assert SqlSampleStore(session).distance_meters(user_id, T0, T0 + timedelta(hours=1)) == 0.0
