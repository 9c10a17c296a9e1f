from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError
from typing import Annotated, ClassVar, Literal, Tuple, Type, TypeVar

from fastapi import Request

from portfolio.core.config import settings
from portfolio.core.exceptions import NoUpdateFieldsError, ValidationError

SortOrder = Literal["asc", "desc"]

# Same cap validate_paging enforces, so both paths agree when MAX_PAGE_SIZE changes
PageSize = Annotated[int, Field(ge=1, le=settings.MAX_PAGE_SIZE)]

Q = TypeVar("Q", bound="ListQuery")


class ListQuery(BaseModel):
    """Paging and sorting shared by every list endpoint; unknown parameters are rejected"""
    model_config = ConfigDict(extra="forbid")

    page: int = Field(1, ge=1)
    limit: PageSize = 10
    sort_order: SortOrder = "desc"


class MessageResponse(BaseModel):
    message: str


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


def criteria_dependency(model: Type[Q]):
    """
    FastAPI dependency parsing the raw query string into ``model``.

    Parsing the whole query string (instead of one parameter per field) is
    what lets ``extra="forbid"`` reject misspelled or unsupported filters.
    """
    async def parse(request: Request) -> Q:
        try:
            return model.model_validate(dict(request.query_params))
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)

    parse.__name__ = f"parse_{model.__name__}"
    return parse


def require_changes(payload: BaseModel) -> dict:
    """Fields explicitly sent in a partial update; raises NO_UPDATE_FIELDS when empty"""
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise NoUpdateFieldsError()
    return changes


_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    # Validate as an http(s) URL but keep the caller's exact string
    _http_url.validate_python(value)
    return value


def _check_https(value: str) -> str:
    if not value.lower().startswith("https://"):
        raise ValueError("URL must use HTTPS")
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]
HttpsUrlStr = Annotated[str, AfterValidator(_check_url), AfterValidator(_check_https)]


class PartialUpdate(BaseModel):
    """Base for PUT payloads: every field optional, but columns listed in ``not_null`` may not be cleared"""
    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_cleared_required_fields(self):
        for name in self.model_fields_set.intersection(self.not_null):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self
