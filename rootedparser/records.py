"""Output records assembled from parsed returns, with their JSON shape."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Address:
    address_line1: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    def is_empty(self) -> bool:
        """True when every part of the address is blank."""
        return not (self.address_line1 or self.city or self.state or self.zip_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address_line_1": self.address_line1,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
        }


@dataclass
class Person:
    person_name: str = ""
    person_title: str = ""
    phone_number: Optional[str] = None
    average_hours: Optional[float] = None
    bookkeeper: bool = False
    compensation: Optional[int] = None
    address: Optional[Address] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "person_name": self.person_name,
            "person_title": self.person_title,
            "phone_number": self.phone_number,
            "average_hours": self.average_hours,
            "bookkeeper": self.bookkeeper,
            "compensation": self.compensation,
            "address": None if self.address is None else self.address.to_dict(),
        }


@dataclass
class Form990Summary:
    principal_officer_name: str = ""
    principal_officer_address: Address = field(default_factory=Address)
    gross_receipts_amount: int = 0
    website_address: str = ""
    mission_description: str = ""
    formation_year: int = 0
    total_assets_end_of_year_amount: int = 0
    total_liabilities_end_of_year_amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "principal_officer_name": self.principal_officer_name,
            "principal_officer_address": self.principal_officer_address.to_dict(),
            "gross_receipts_amount": self.gross_receipts_amount,
            "website_address": self.website_address,
            "mission_description": self.mission_description,
            "formation_year": self.formation_year,
            "total_assets_end_of_year_amount": self.total_assets_end_of_year_amount,
            "total_liabilities_end_of_year_amount": self.total_liabilities_end_of_year_amount,
        }


@dataclass
class Form990EZSummary:
    gross_receipts_amt: int = 0
    total_revenue_amt: int = 0
    total_expenses_amt: int = 0
    excess_or_deficit_for_year_amt: int = 0
    primary_exempt_purpose: str = ""
    website: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gross_receipts_amt": self.gross_receipts_amt,
            "total_revenue_amt": self.total_revenue_amt,
            "total_expenses_amt": self.total_expenses_amt,
            "excess_or_deficit_for_year_amt": self.excess_or_deficit_for_year_amt,
            "primary_exempt_purpose_txt": self.primary_exempt_purpose,
            "website": self.website,
        }


@dataclass
class FullFilingRecord:
    ein: str = ""
    name: str = ""
    dln: str = ""
    object_id: str = ""
    xml_batch_id: str = ""
    location: Address = field(default_factory=Address)
    people: List[Person] = field(default_factory=list)
    form_990: Optional[Form990Summary] = None
    form_990_ez: Optional[Form990EZSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ein": self.ein,
            "name": self.name,
            "dln": self.dln,
            "object_id": self.object_id,
            "xml_batch_id": self.xml_batch_id,
            "location": self.location.to_dict(),
            "people": [person.to_dict() for person in self.people],
            "form_990": None if self.form_990 is None else self.form_990.to_dict(),
            "form_990_ez": None if self.form_990_ez is None else self.form_990_ez.to_dict(),
        }