"""
Unit Tests for the dynamic list query builder
"""
from datetime import date, datetime, timedelta

import pytest

from portfolio.core.exceptions import ValidationError
from portfolio.models.contact_message import ContactMessage
from portfolio.models.project import Project
from portfolio.repositories.contact_messages import CONTACT_MESSAGE_QUERY
from portfolio.repositories.projects import PROJECT_QUERY
from portfolio.schemas.project import ProjectQuery
from portfolio.utils.query_builder import QueryBuilder, escape_like, fetch_page


def compiled(statement) -> str:
    return str(statement.compile(compile_kwargs={"literal_binds": False}))


class TestPredicates:
    def setup_method(self):
        self.builder = QueryBuilder(PROJECT_QUERY)

    def test_no_criteria_no_predicates(self):
        assert self.builder.predicates({}) == []

    def test_one_predicate_per_non_null_filter(self):
        clauses = self.builder.predicates({"search": "shop", "category": None, "user_id": "u1"})

        assert len(clauses) == 2

    def test_control_fields_are_not_filters(self):
        clauses = self.builder.predicates({"page": 2, "limit": 5, "sort_by": "title", "sort_order": "asc"})

        assert clauses == []

    def test_unknown_filter_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.builder.predicates({"owner": "u1"})

        assert exc_info.value.details[0]["field"] == "owner"

    def test_values_are_bound_not_inlined(self):
        built = self.builder.build({"search": "x'; DROP TABLE users; --"})

        sql = compiled(built.statement)
        assert "DROP TABLE" not in sql
        assert len(built.predicates) == 1

    def test_search_ors_columns(self):
        built = self.builder.build({"search": "shop"})

        sql = compiled(built.statement).lower()
        assert " or " in sql


class TestPagingAndOrdering:
    def setup_method(self):
        self.builder = QueryBuilder(PROJECT_QUERY)

    def test_offset_from_page_and_limit(self):
        built = self.builder.build({"page": 3, "limit": 10})

        assert built.offset == 20
        assert built.limit == 10

    def test_defaults(self):
        built = self.builder.build({})

        assert built.page == 1
        assert built.limit == 10
        assert built.sort_by == "created_at"
        assert built.sort_order == "desc"

    @pytest.mark.parametrize("page, limit", [(0, 10), (-1, 10), (1, 0), (1, 101)])
    def test_out_of_range_paging_rejected(self, page, limit):
        with pytest.raises(ValidationError):
            self.builder.build({"page": page, "limit": limit})

    def test_sort_field_must_be_allow_listed(self):
        with pytest.raises(ValidationError) as exc_info:
            self.builder.build({"sort_by": "hashed_password"})

        assert exc_info.value.details[0]["field"] == "sort_by"

    def test_sort_order_validated(self):
        with pytest.raises(ValidationError):
            self.builder.build({"sort_order": "sideways"})

    def test_primary_key_tiebreaker(self):
        terms = self.builder.ordering("title", "asc")

        assert len(terms) == 2

    def test_accepts_pydantic_criteria(self):
        built = self.builder.build(ProjectQuery(category="Web", page=2, limit=5))

        assert len(built.predicates) == 1
        assert built.offset == 5


def test_escape_like():
    assert escape_like("100%_done\\") == "100\\%\\_done\\\\"


def _project(user_id: str, index: int, category: str = "Web") -> Project:
    return Project(
        user_id=user_id,
        title=f"Project {index:02d}",
        slug=f"project-{user_id[:8]}-{index}",
        featured_image="https://example.com/img.png",
        category=category,
        excerpt="A short excerpt",
        content="x" * 120,
        project_date=date(2023, 1, 1) + timedelta(days=index),
    )


@pytest.mark.asyncio
class TestFetchPage:
    async def test_total_matches_filtered_set(self, db_session, test_user, other_user):
        db_session.add_all([_project(test_user.user_id, i) for i in range(25)])
        db_session.add_all([_project(other_user.user_id, i) for i in range(5)])
        await db_session.commit()

        built = QueryBuilder(PROJECT_QUERY).build({"user_id": test_user.user_id, "page": 1, "limit": 10})
        page = await fetch_page(db_session, built)

        assert len(page.items) == 10
        assert page.total == 25
        assert page.total_pages == 3
        assert all(p.user_id == test_user.user_id for p in page.items)

    async def test_last_page_is_partial(self, db_session, test_user):
        db_session.add_all([_project(test_user.user_id, i) for i in range(25)])
        await db_session.commit()

        built = QueryBuilder(PROJECT_QUERY).build({"page": 3, "limit": 10, "sort_by": "title", "sort_order": "asc"})
        page = await fetch_page(db_session, built)

        assert [p.title for p in page.items] == [f"Project {i:02d}" for i in range(20, 25)]

    async def test_page_past_end_is_empty(self, db_session, test_user):
        db_session.add_all([_project(test_user.user_id, i) for i in range(3)])
        await db_session.commit()

        page = await fetch_page(db_session, QueryBuilder(PROJECT_QUERY).build({"page": 5}))

        assert page.items == []
        assert page.total == 3

    async def test_empty_table(self, db_session):
        page = await fetch_page(db_session, QueryBuilder(PROJECT_QUERY).build({}))

        assert page.total == 0
        assert page.total_pages == 0

    async def test_search_is_case_insensitive_and_literal(self, db_session, test_user):
        special = _project(test_user.user_id, 1)
        special.title = "100% Uptime"
        db_session.add_all([special, _project(test_user.user_id, 2)])
        await db_session.commit()

        hit = await fetch_page(db_session, QueryBuilder(PROJECT_QUERY).build({"search": "100%"}))
        wildcard = await fetch_page(db_session, QueryBuilder(PROJECT_QUERY).build({"search": "%"}))
        upper = await fetch_page(db_session, QueryBuilder(PROJECT_QUERY).build({"search": "UPTIME"}))

        assert hit.total == 1
        assert wildcard.total == 1
        assert upper.total == 1

    async def test_day_bounds_include_whole_end_day(self, db_session):
        db_session.add_all([
            ContactMessage(name="a", email="a@example.com", message="hello there!", created_at=datetime(2024, 3, 1, 9)),
            ContactMessage(name="b", email="b@example.com", message="hello there!", created_at=datetime(2024, 3, 2, 23, 30)),
            ContactMessage(name="c", email="c@example.com", message="hello there!", created_at=datetime(2024, 3, 3, 0, 5)),
        ])
        await db_session.commit()

        built = QueryBuilder(CONTACT_MESSAGE_QUERY).build({
            "start_date": date(2024, 3, 2),
            "end_date": date(2024, 3, 2),
        })
        page = await fetch_page(db_session, built)

        assert [m.name for m in page.items] == ["b"]
