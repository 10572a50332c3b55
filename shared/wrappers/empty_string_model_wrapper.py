import re
from typing import Any
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Recursively convert empty strings to None and strip invisible chars."""

    # 1️⃣ Handle Pydantic models
    if isinstance(value, BaseModel):
        data = value.model_dump()
        cleaned = deep_clean(data)
        return type(value)(**cleaned)

    # 2️⃣ Handle dictionaries
    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    # 3️⃣ Handle lists
    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    # 4️⃣ Handle strings
    if isinstance(value, str):
        cleaned = INVISIBLE_CHARS_PATTERN.sub("", value).strip()
        return None if cleaned == "" else cleaned

    return value


class EmptyStringModel(BaseModel):
    """
    Input model that turns "" into None before validation.

    A blank foreign key such as ``ownerId: ""`` arrives at the crud layer as an
    explicit None, i.e. "clear the reference", never as a dangling id.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return deep_clean(values)
        return values
