"""Assemble output filing records from parsed return documents."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .forms import (
    BooksInCare,
    BusinessOfficer,
    Form990Data,
    Form990EZData,
    Form990PFData,
    Return,
    USAddress,
)
from .records import (
    Address,
    Form990EZSummary,
    Form990Summary,
    FullFilingRecord,
    Person,
)


def address_from(us_address: USAddress) -> Address:
    """Convert a return's US address into an output address."""
    return Address(
        address_line1=us_address.address_line1,
        city=us_address.city,
        state=us_address.state,
        zip_code=us_address.zip_code,
    )


def _find(people: List[Person], name: str) -> Optional[Person]:
    return next((person for person in people if person.person_name == name), None)


def _add_form990(record: FullFilingRecord, filing: Return, form: Form990Data) -> None:
    header = filing.header
    filer_address = header.filer.us_address
    for entry in form.people:
        record.people.append(
            Person(
                person_name=entry.name,
                person_title=entry.title,
                average_hours=entry.average_hours_per_week,
                compensation=entry.comp_from_org,
            )
        )
    if not header.business_officers:
        raise ValueError("return carries a Form 990 but names no business officer")
    principal = header.business_officers[0]
    record.people.append(
        Person(
            person_name=principal.person_name,
            person_title=principal.title,
            phone_number=principal.phone,
            address=address_from(filer_address),
        )
    )
    record.form_990 = Form990Summary(
        principal_officer_name=principal.person_name,
        principal_officer_address=address_from(filer_address),
        gross_receipts_amount=form.gross_receipts,
        website_address=form.website,
        mission_description=form.mission,
        formation_year=header.tax_year,
        total_assets_end_of_year_amount=form.total_assets_eoy,
        total_liabilities_end_of_year_amount=form.total_liabilities_eoy,
    )


def _add_bookkeeper(people: List[Person], books: BooksInCare) -> None:
    if not books.person_name:
        return
    existing = _find(people, books.person_name)
    if existing is not None:
        existing.address = None if books.address is None else address_from(books.address)
        existing.bookkeeper = True
        existing.phone_number = books.phone
        return
    address = None
    if books.address is not None and books.address.address_line1:
        address = address_from(books.address)
    people.append(
        Person(
            person_name=books.person_name,
            address=address,
            bookkeeper=True,
            phone_number=books.phone,
        )
    )


def _add_form990ez(record: FullFilingRecord, form: Form990EZData) -> None:
    record.form_990_ez = Form990EZSummary(
        gross_receipts_amt=form.gross_receipts,
        total_revenue_amt=form.total_revenue,
        total_expenses_amt=form.total_expenses,
        excess_or_deficit_for_year_amt=form.excess_or_deficit,
        primary_exempt_purpose=form.primary_exempt_purpose,
        website=form.website,
    )
    people = record.people
    _add_bookkeeper(people, form.books_in_care_of)
    for officer in form.officers:
        existing = _find(people, officer.name)
        if existing is None:
            people.append(
                Person(
                    person_name=officer.name,
                    person_title=officer.title,
                    average_hours=officer.average_hours_per_week,
                    compensation=officer.compensation,
                )
            )
            continue
        existing.compensation = officer.compensation
        existing.average_hours = officer.average_hours_per_week
        existing.person_title = officer.title
        if officer.address is not None:
            existing.address = address_from(officer.address)


def _add_form990pf(people: List[Person], form: Form990PFData) -> None:
    for officer in form.officers:
        existing = _find(people, officer.name)
        if existing is not None:
            existing.average_hours = officer.average_hours_per_week
            existing.compensation = officer.compensation
            if officer.address is not None:
                existing.address = address_from(officer.address)
            continue
        address = None
        if officer.address is not None and officer.address.address_line1:
            address = address_from(officer.address)
        people.append(
            Person(
                person_name=officer.name,
                person_title=officer.title,
                average_hours=officer.average_hours_per_week,
                compensation=officer.compensation,
                address=address,
            )
        )


def _add_business_officers(people: List[Person], officers: Iterable[BusinessOfficer]) -> None:
    for officer in officers:
        existing = _find(people, officer.person_name)
        if existing is not None:
            existing.person_title = officer.title
            existing.phone_number = officer.phone
            continue
        people.append(
            Person(
                person_name=officer.person_name,
                person_title=officer.title,
                phone_number=officer.phone,
            )
        )


def consolidate_people(people: Iterable[Person]) -> List[Person]:
    """Merge people sharing a name, drop unnamed ones and blank contact details.

    The first entry for a name is kept; later entries override its title,
    phone, hours, compensation and address where they supply one. The
    inputs are left untouched.
    """
    merged: Dict[str, Person] = {}
    for person in people:
        if not person.person_name:
            continue
        existing = merged.get(person.person_name)
        if existing is None:
            merged[person.person_name] = replace(person)
            continue
        if person.person_title:
            existing.person_title = person.person_title
        if person.phone_number is not None:
            existing.phone_number = person.phone_number
        if person.average_hours is not None:
            existing.average_hours = person.average_hours
        if person.compensation is not None:
            existing.compensation = person.compensation
        if person.address is not None:
            existing.address = person.address

    result = list(merged.values())
    for person in result:
        if person.address is not None and person.address.is_empty():
            person.address = None
        if person.phone_number == "":
            person.phone_number = None
    return result


def build_record(filing: Return, dln: str, object_id: str, xml_batch_id: str) -> FullFilingRecord:
    """Build the output record for one parsed return and its index entry."""
    filer = filing.header.filer
    record = FullFilingRecord(
        ein=filer.ein,
        name=filer.business_name,
        dln=dln,
        object_id=object_id,
        xml_batch_id=xml_batch_id,
        location=address_from(filer.us_address),
    )
    data = filing.data
    if data.form_990 is not None:
        _add_form990(record, filing, data.form_990)
    if data.form_990ez is not None:
        _add_form990ez(record, data.form_990ez)
    if data.form_990pf is not None:
        _add_form990pf(record.people, data.form_990pf)
    _add_business_officers(record.people, filing.header.business_officers)
    record.people = consolidate_people(record.people)
    return record