import re
from typing import Any, List, Union, get_args, get_origin
from uuid import UUID
from pydantic import BaseModel, model_validator

# Direction marks and BOMs pasted in from spreadsheets and barcode tools
INVISIBLE_CHARS_PATTERN = re.compile(
    r"[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]")


def scrub_text(value: Any):
    """Recursively strip surrounding whitespace and invisible characters from strings."""
    if isinstance(value, dict):
        return {k: scrub_text(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [scrub_text(v) for v in value]

    if isinstance(value, str):
        return INVISIBLE_CHARS_PATTERN.sub("", value).strip()

    return value


def _accepts(annotation, *types) -> bool:
    if annotation in types:
        return True
    return get_origin(annotation) is Union and any(
        a in types for a in get_args(annotation))


def _is_list(annotation) -> bool:
    if annotation in (list, List) or get_origin(annotation) in (list, List):
        return True
    return get_origin(annotation) is Union and any(
        _is_list(a) for a in get_args(annotation) if a is not type(None))


class EmptyStringModel(BaseModel):
    """
    Base for payloads sent to the frontend: text is scrubbed on the way in,
    and unset text/list fields come out as "" and [] instead of null.
    """
    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return scrub_text(values)
        return values

    @model_validator(mode="after")
    def finalize_nulls(self):
        for field_name, field in type(self).model_fields.items():
            if getattr(self, field_name) is not None:
                continue

            if _is_list(field.annotation):
                object.__setattr__(self, field_name, [])
            elif _accepts(field.annotation, str, UUID):
                object.__setattr__(self, field_name, "")

        return self
