"""Memo data models."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from src.memos.errors import ValidationFailed

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000

_FORBIDDEN_TITLE_CHARS = ("<", ">")

_CUSTOM_ERROR_TYPES = frozenset(
    {"title_empty", "title_too_long", "title_markup", "content_empty", "content_too_long"}
)


def now_iso() -> str:
    """Current UTC time as ``2025-01-31T09:15:00.123Z``."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp as an aware UTC datetime.

    Values without an offset are taken to be UTC.
    """
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class Memo(BaseModel):
    """A titled note.

    Attributes use snake_case; the on-disk and API form uses the camelCase
    aliases (``createdAt``, ``updatedAt``). Dump with ``by_alias=True``.
    Unknown keys are rejected so a save never drops data it did not understand.
    """

    model_config = ConfigDict(populate_by_name=True, strict=True, extra="forbid")

    id: int = Field(gt=0)
    title: str
    content: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        try:
            parse_timestamp(value)
        except (ValueError, OverflowError):
            raise PydanticCustomError(
                "timestamp", "not an ISO-8601 timestamp: {value}", {"value": value}
            ) from None
        return value

    def to_json(self) -> dict:
        """Serialize with the camelCase field names."""
        return self.model_dump(by_alias=True)


class MemoInput(BaseModel):
    """Title and content as submitted by a client, trimmed and checked."""

    model_config = ConfigDict(str_strip_whitespace=True, strict=True)

    title: str
    content: str

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("title_empty", "タイトルが必要です")
        if len(value) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long", f"タイトルは{TITLE_MAX_LENGTH}文字以内で入力してください"
            )
        if any(ch in value for ch in _FORBIDDEN_TITLE_CHARS):
            raise PydanticCustomError("title_markup", "タイトルに < や > は使用できません")
        return value

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("content_empty", "内容が必要です")
        if len(value) > CONTENT_MAX_LENGTH:
            raise PydanticCustomError(
                "content_too_long", f"内容は{CONTENT_MAX_LENGTH}文字以内で入力してください"
            )
        return value

    @classmethod
    def parse(cls, title: object, content: object) -> MemoInput:
        """Validate raw values, raising ``ValidationFailed`` with the first problem.

        ``None`` counts as an empty value.
        """
        try:
            return cls(
                title="" if title is None else title,
                content="" if content is None else content,
            )
        except ValidationError as exc:
            raise ValidationFailed(_first_message(exc)) from exc


_FIELD_LABELS = {"title": "タイトル", "content": "内容"}


def _first_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    if error["type"] in _CUSTOM_ERROR_TYPES:
        return error["msg"]
    label = _FIELD_LABELS.get(str(error["loc"][0]) if error["loc"] else "", "入力")
    if error["type"] == "string_type":
        return f"{label}は文字列で入力してください"
    return f"{label}に使用できない文字が含まれています"
