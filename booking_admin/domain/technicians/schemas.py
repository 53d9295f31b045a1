"""Technician domain schemas - Pydantic models for validation"""

from typing import Union

from pydantic import BaseModel, field_validator

from ...shared.validators import split_skills


class TechnicianCreate(BaseModel):
    """Schema for adding a technician from the admin form"""

    name: str
    phone: str
    # Comma-separated text from the form, or a list
    skills: Union[str, list[str]] = ""
    verified: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone is required")
        return v.strip()

    @field_validator("skills")
    @classmethod
    def normalize_skills(cls, v):
        return split_skills(v)


class TechnicianStatusResponse(BaseModel):
    """Schema for the result of a toggle"""

    id: str
    active: bool
    verified: bool
    message: str
