from pydantic import BaseModel

from board.errors import ValidationError


def _label(data: BaseModel, name: str) -> str:
    """External name of *name*: its alias when it has one."""
    field = type(data).model_fields[name]
    return field.alias or name


def require_fields(data: BaseModel, *names: str) -> None:
    """Raise ``ValidationError`` for the first of *names* that is missing or empty."""
    for name in names:
        if not getattr(data, name):
            raise ValidationError(_label(data, name))


def reject_blank(data: BaseModel, *names: str) -> None:
    """
    Raise ``ValidationError`` for the first of *names* that was explicitly
    supplied but is empty. Fields left out of the input are fine.
    """
    for name in names:
        if name in data.model_fields_set and not getattr(data, name):
            label = _label(data, name)
            raise ValidationError(label, f"{label} must not be empty.")
