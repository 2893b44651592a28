"""Shared pydantic base and constrained string types."""

import re
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")
EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
PASSWORD_MIN_LENGTH = 6


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
        "use_enum_values": True,
    }


def check_phone(value: str) -> str:
    value = value.strip()
    if not PHONE_RE.match(value):
        raise ValueError("Numéro de téléphone invalide")
    return value


def check_email(value: str) -> Optional[str]:
    value = value.strip().lower()
    if not value:
        return None
    if not EMAIL_RE.match(value):
        raise ValueError("Email invalide")
    return value


def check_required_email(value: str) -> str:
    if not value.strip():
        raise ValueError("L'email est requis")
    return check_email(value)


def check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Le mot de passe doit contenir au moins {PASSWORD_MIN_LENGTH} caractères")
    return value


def check_not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Ce champ ne peut pas être vide")
    return value


Phone = Annotated[str, AfterValidator(check_phone)]
Email = Annotated[str, AfterValidator(check_email)]
RequiredEmail = Annotated[str, AfterValidator(check_required_email)]
Password = Annotated[str, AfterValidator(check_password)]
NonBlank = Annotated[str, AfterValidator(check_not_blank)]
