"""
Unit tests for the repositories, against a mocked Database.
"""

from datetime import date

import pytest

from db.errors import QueryError
from models.property import Property
from models.reservation import Reservation
from models.user import User
from queries.property_search import SearchCriteria
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository


class TestUserRepository:

    def test_get_by_email(self, mock_db):
        mock_db.fetch_one.return_value = {
            "id": 1, "name": "Ann", "email": "ann@example.com", "password": "x",
        }
        user = UserRepository(mock_db).get_by_email("ann@example.com")
        assert user == User(id=1, name="Ann", email="ann@example.com", password="x")
        assert mock_db.fetch_one.call_args[0][1] == ("ann@example.com",)

    def test_get_by_id_returns_single_user(self, mock_db):
        mock_db.fetch_one.return_value = {
            "id": 2, "name": "Bo", "email": "bo@example.com", "password": "y",
        }
        user = UserRepository(mock_db).get_by_id(2)
        assert isinstance(user, User)
        assert user.id == 2

    def test_missing_user_is_none(self, mock_db):
        mock_db.fetch_one.return_value = None
        assert UserRepository(mock_db).get_by_id(404) is None

    def test_add_sets_id(self, mock_db):
        mock_db.execute_returning.return_value = {
            "id": 9, "name": "Cy", "email": "cy@example.com", "password": "z",
        }
        user = UserRepository(mock_db).add(User(name="Cy", email="cy@example.com", password="z"))
        assert user.id == 9
        sql, params = mock_db.execute_returning.call_args[0]
        assert "INSERT INTO users" in sql
        assert params == ("Cy", "cy@example.com", "z")

    def test_failure_propagates(self, mock_db):
        mock_db.fetch_one.side_effect = QueryError("connection refused")
        with pytest.raises(QueryError):
            UserRepository(mock_db).get_by_email("ann@example.com")


class TestReservationRepository:

    def test_get_all_for_guest_default_limit(self, mock_db):
        mock_db.fetch_all.return_value = [{"reservation_id": 1, "id": 7}]
        rows = ReservationRepository(mock_db).get_all_for_guest(3)
        assert rows == [{"reservation_id": 1, "id": 7}]
        sql, params = mock_db.fetch_all.call_args[0]
        assert "WHERE reservations.guest_id = %s" in sql
        assert params == (3, 10)

    def test_add(self, mock_db):
        mock_db.execute_returning.return_value = {"id": 11}
        reservation = Reservation(
            start_date=date(2026, 7, 1), end_date=date(2026, 7, 4), property_id=7, guest_id=3,
        )
        saved = ReservationRepository(mock_db).add(reservation)
        assert saved.id == 11
        assert saved.nights() == 3
        assert mock_db.execute_returning.call_args[0][1] == (
            date(2026, 7, 1), date(2026, 7, 4), 7, 3,
        )


class TestPropertyRepository:

    def test_get_all_runs_search_plan(self, mock_db, property_row):
        mock_db.fetch_plan.return_value = [property_row]
        results = PropertyRepository(mock_db, include_unreviewed=False).get_all(
            {"city": "Vancouver", "minimum_rating": 4}, limit=5,
        )
        plan = mock_db.fetch_plan.call_args[0][0]
        assert plan.params == ["%Vancouver%", "4", 5]
        assert len(results) == 1
        assert results[0].title == "Harbour loft"
        assert results[0].average_rating == 4.5
        assert results[0].price_per_night == 125.5

    def test_get_all_accepts_criteria_object(self, mock_db):
        mock_db.fetch_plan.return_value = []
        repo = PropertyRepository(mock_db, include_unreviewed=True)
        assert repo.get_all(SearchCriteria(owner_id=3)) == []
        plan = mock_db.fetch_plan.call_args[0][0]
        assert plan.params == ["3", 10]
        assert "LEFT JOIN" in plan.to_sql()

    def test_get_all_empty_result_is_a_list(self, mock_db):
        mock_db.fetch_plan.return_value = []
        assert PropertyRepository(mock_db).get_all() == []

    def test_get_all_failure_is_not_swallowed(self, mock_db):
        mock_db.fetch_plan.side_effect = QueryError("relation \"properties\" does not exist")
        with pytest.raises(QueryError):
            PropertyRepository(mock_db).get_all({"city": "Vancouver"})

    def test_add(self, mock_db, property_row):
        mock_db.execute_returning.return_value = {**property_row, "id": 21}
        prop = Property.from_row({**property_row, "id": None})
        saved = PropertyRepository(mock_db).add(prop)
        assert saved.id == 21
        sql, params = mock_db.execute_returning.call_args[0]
        assert sql.startswith("INSERT INTO properties (owner_id, title,")
        assert sql.count("%s") == len(params) == 15
        assert params[5] == 12550


class TestPropertyModel:

    def test_unreviewed_property_has_no_rating(self, property_row):
        prop = Property.from_row({**property_row, "average_rating": None})
        assert prop.average_rating is None

    def test_str(self, property_row):
        assert str(Property.from_row(property_row)) == "Harbour loft | Vancouver | 125.50/night"
