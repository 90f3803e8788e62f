from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class NormalizedIdentifier(BaseModel):
    """Best-effort result of parsing a scan or manual entry.

    `ndc` is always a string (empty when nothing could be read). `source` names the
    input format that produced the result and is informational only.
    """

    ndc: str = ""
    lot_number: Optional[str] = None
    expiration_date: Optional[str] = None
    source: str = "empty"


class FormStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    COMPLETED = "COMPLETED"

    @classmethod
    def lifecycle(cls) -> List["FormStatus"]:
        # Forward-only order; enforcement belongs to the submission workflow.
        return [cls.DRAFT, cls.PENDING, cls.SUBMITTED, cls.COMPLETED]


# --- Form 222 inputs ---

class Address(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


class RegistrantAddresses(BaseModel):
    registered: Address = Field(default_factory=Address)


class Registrant(BaseModel):
    business_name: str = ""
    dea_number: str = ""
    addresses: RegistrantAddresses = Field(default_factory=RegistrantAddresses)


class ControlledLineItem(BaseModel):
    ndc: str = ""
    non_proprietary_name: Optional[str] = None
    product_name: Optional[str] = None
    strength: Optional[str] = None
    dosage_form: Optional[str] = None
    # Package counts may be fractional (partial packages); validate_form only requires > 0.
    quantity: Union[int, float] = 0
    package_size: Optional[int] = None


# --- Form 222 ---

class RegistrantInfo(BaseModel):
    name: str = ""
    dea_number: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


class FormLineItem(BaseModel):
    line_number: int
    number_of_packages: Union[int, float]
    size_of_package: str
    ndc: str = ""
    name_of_item: str = ""
    # Filled in by warehouse receiving, never by the generator.
    date_received: Optional[datetime] = None
    packages_received: Optional[int] = None


class PowerOfAttorney(BaseModel):
    name: str
    title: str
    date_granted: datetime


class RegulatedForm(BaseModel):
    form_number: str
    registrant_info: RegistrantInfo
    line_items: List[FormLineItem] = Field(default_factory=list)
    total_lines: int = 0
    date_executed: datetime
    status: FormStatus = FormStatus.DRAFT
    signature: Optional[str] = None
    power_of_attorney: Optional[PowerOfAttorney] = None


# --- Form 41 ---

class DestructionMethod(str, Enum):
    INCINERATION = "INCINERATION"
    CHEMICAL = "CHEMICAL"
    OTHER = "OTHER"


class DestructionRegistrant(BaseModel):
    name: str = ""
    dea_number: str = ""
    address: str = ""


class DestroyedSubstance(BaseModel):
    ndc: str = ""
    name: str = ""
    strength: str = ""
    quantity: int = 0
    dea_schedule: str = ""
    lot_number: str = ""


class Witness(BaseModel):
    name: str
    title: str = ""
    signature: Optional[str] = None


class DestructionForm(BaseModel):
    id: str
    registrant_info: DestructionRegistrant
    substances_destroyed: List[DestroyedSubstance] = Field(default_factory=list)
    method_of_destruction: Optional[DestructionMethod] = None
    date_of_destruction: datetime
    location: str = ""
    witnesses: List[Witness] = Field(default_factory=list)
    notes: Optional[str] = None
