"""
Dynamic Query Builder

Turns validated list criteria into a filtered, sorted, paginated SELECT plus
a COUNT that shares the exact same predicates.

Each resource declares what may be filtered and sorted once:

    PROJECT_QUERY = ResourceQuery(
        model=Project,
        filters={
            "search": Search(Project.title, Project.content),
            "category": Equals(Project.category),
            "user_id": Equals(Project.user_id),
        },
        sortable={"title": Project.title, "created_at": Project.created_at},
    )

and list endpoints do:

    built = QueryBuilder(PROJECT_QUERY).build(criteria)
    page = await fetch_page(db, built)

Every value reaches the database as a bound parameter. Column names in
ORDER BY only ever come from the ``sortable`` allow-list.
"""
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel
from sqlalchemy import Select, extract, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from portfolio.core.exceptions import ValidationError
from portfolio.core.logging_config import logger
from portfolio.utils.pagination import Page, compute_offset, validate_paging

# Criteria keys that control paging/sorting rather than filtering
CONTROL_FIELDS = frozenset({"page", "limit", "sort_by", "sort_order"})
SORT_ORDERS = ("asc", "desc")
LIKE_ESCAPE = "\\"


def _day_start(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class Filter:
    """Maps one criterion value to exactly one predicate"""

    def __init__(self, *columns):
        if not columns:
            raise ValueError("a filter needs at least one column")
        self.columns = columns

    @property
    def column(self):
        return self.columns[0]

    def clause(self, value: Any) -> ColumnElement:
        raise NotImplementedError


class Equals(Filter):
    def clause(self, value):
        return self.column == value


class Search(Filter):
    """Case-insensitive substring match over one or more columns (ORed)"""

    def clause(self, value):
        pattern = f"%{escape_like(str(value))}%"
        matches = [col.ilike(pattern, escape=LIKE_ESCAPE) for col in self.columns]
        return matches[0] if len(matches) == 1 else or_(*matches)


class AtLeast(Filter):
    def clause(self, value):
        return self.column >= value


class AtMost(Filter):
    def clause(self, value):
        return self.column <= value


class Since(Filter):
    """Timestamp column on or after the start of a given day"""

    def clause(self, value):
        return self.column >= _day_start(value)


class Until(Filter):
    """Timestamp column on or before the end of a given day"""

    def clause(self, value):
        return self.column < _day_start(value) + timedelta(days=1)


class YearEquals(Filter):
    """Calendar year of a date column"""

    def clause(self, value):
        return extract("year", self.column) == value


@dataclass(frozen=True)
class ResourceQuery:
    """Per-resource declaration of filterable and sortable columns"""
    model: Any
    filters: Dict[str, Filter]
    sortable: Dict[str, Any]
    default_sort: Tuple[str, str] = ("created_at", "desc")
    default_limit: int = 10
    options: Sequence[Any] = ()

    @property
    def primary_key(self):
        return self.model.__mapper__.primary_key[0]


@dataclass
class BuiltQuery:
    statement: Select
    count_statement: Select
    predicates: List[ColumnElement]
    page: int
    limit: int
    offset: int
    sort_by: str
    sort_order: str
    table: str = field(default="")


def _criteria_dict(criteria: Any) -> Dict[str, Any]:
    if criteria is None:
        return {}
    if isinstance(criteria, BaseModel):
        return criteria.model_dump()
    if isinstance(criteria, Mapping):
        return dict(criteria)
    raise TypeError(f"Unsupported criteria type: {type(criteria).__name__}")


class QueryBuilder:
    """Builds list queries for one ResourceQuery"""

    def __init__(self, resource: ResourceQuery):
        self.resource = resource

    def predicates(self, criteria: Any) -> List[ColumnElement]:
        """
        One predicate per non-null recognized criterion, none for absent ones.

        Raises:
            ValidationError: a criterion name is not declared for this resource
        """
        clauses: List[ColumnElement] = []
        for name, value in _criteria_dict(criteria).items():
            if name in CONTROL_FIELDS:
                continue
            rule = self.resource.filters.get(name)
            if rule is None:
                raise ValidationError(f"Unknown filter '{name}'", field=name)
            if value is None:
                continue
            clauses.append(rule.clause(value))
        return clauses

    def ordering(self, sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> list:
        """ORDER BY terms for an allow-listed field, primary key as tiebreaker"""
        default_field, default_order = self.resource.default_sort
        sort_by = sort_by or default_field
        sort_order = (sort_order or default_order)

        column = self.resource.sortable.get(sort_by)
        if column is None:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'. Allowed: {', '.join(sorted(self.resource.sortable))}",
                field="sort_by",
            )
        if sort_order not in SORT_ORDERS:
            raise ValidationError("sort_order must be 'asc' or 'desc'", field="sort_order")

        primary = column.asc() if sort_order == "asc" else column.desc()
        terms = [primary]
        if column is not self.resource.primary_key:
            terms.append(self.resource.primary_key.asc())
        return terms

    def build(self, criteria: Any = None) -> BuiltQuery:
        """
        Validate paging and sorting, then assemble the page and count statements.

        Nothing is executed here, so every ValidationError surfaces before the
        database is touched.
        """
        data = _criteria_dict(criteria)
        page = data.get("page")
        limit = data.get("limit")
        if page is None:
            page = 1
        if limit is None:
            limit = self.resource.default_limit
        validate_paging(page, limit)

        default_field, default_order = self.resource.default_sort
        sort_by = data.get("sort_by") or default_field
        sort_order = data.get("sort_order") or default_order

        clauses = self.predicates(data)
        order_terms = self.ordering(sort_by, sort_order)
        offset = compute_offset(page, limit)

        model = self.resource.model
        statement = (
            select(model)
            .options(*self.resource.options)
            .where(*clauses)
            .order_by(*order_terms)
            .offset(offset)
            .limit(limit)
        )
        count_statement = select(func.count()).select_from(model).where(*clauses)

        return BuiltQuery(
            statement=statement,
            count_statement=count_statement,
            predicates=clauses,
            page=page,
            limit=limit,
            offset=offset,
            sort_by=sort_by,
            sort_order=sort_order,
            table=model.__tablename__,
        )


async def fetch_page(db: AsyncSession, built: BuiltQuery) -> Page:
    """Run the count and page statements of a BuiltQuery"""
    total = await db.scalar(built.count_statement) or 0
    result = await db.execute(built.statement)
    items = list(result.unique().scalars().all())

    logger.log_statement(
        "SELECT", built.table, rows=len(items),
        total=total, page=built.page, limit=built.limit,
    )
    return Page(items=items, page=built.page, limit=built.limit, total=total)
