import pytest

from rootedparser.builder import address_from, build_record, consolidate_people
from rootedparser.forms import (
    BooksInCare,
    BusinessOfficer,
    Filer,
    Form990Data,
    Form990EZData,
    Form990PFData,
    Form990Person,
    OfficerEntry,
    Return,
    ReturnData,
    ReturnHeader,
    USAddress,
)
from rootedparser.records import Address, Form990EZSummary, Form990Summary, Person

FILER_ADDRESS = USAddress("1 Main St", "Springfield", "IL", "62701")


def _filing(officers, **data):
    header = ReturnHeader(
        tax_year=2023,
        filer=Filer(ein="000000001", business_name="Sample Org", us_address=FILER_ADDRESS),
        business_officers=officers,
    )
    return Return(header=header, data=ReturnData(**data))


def test_address_from_copies_fields():
    address = address_from(FILER_ADDRESS)
    assert address == Address("1 Main St", "Springfield", "IL", "62701")


def test_record_identity_fields():
    record = build_record(_filing([]), "DLN1", "OBJ1", "BATCH1")
    assert record.ein == "000000001"
    assert record.name == "Sample Org"
    assert (record.dln, record.object_id, record.xml_batch_id) == ("DLN1", "OBJ1", "BATCH1")
    assert record.location == address_from(FILER_ADDRESS)
    assert record.people == []
    assert record.form_990 is None and record.form_990_ez is None


def test_form990_record():
    form = Form990Data(
        website="example.org",
        gross_receipts=1000,
        mission="Help",
        total_assets_eoy=500,
        total_liabilities_eoy=200,
        people=[
            Form990Person(name="Alice Doe", title="Chair", average_hours_per_week=10.5, comp_from_org=0),
            Form990Person(name="Bob Roe", title="Treasurer", average_hours_per_week=2.0, comp_from_org=100),
        ],
    )
    officers = [BusinessOfficer(person_name="Alice Doe", title="President", phone="PHONE-A")]
    record = build_record(_filing(officers, form_990=form), "D", "O", "B")

    assert [p.person_name for p in record.people] == ["Alice Doe", "Bob Roe"]
    assert record.people[0] == Person(
        person_name="Alice Doe",
        person_title="President",
        phone_number="PHONE-A",
        average_hours=10.5,
        compensation=0,
        address=address_from(FILER_ADDRESS),
    )
    assert record.people[1] == Person(
        person_name="Bob Roe", person_title="Treasurer", average_hours=2.0, compensation=100
    )
    assert record.form_990 == Form990Summary(
        principal_officer_name="Alice Doe",
        principal_officer_address=address_from(FILER_ADDRESS),
        gross_receipts_amount=1000,
        website_address="example.org",
        mission_description="Help",
        formation_year=2023,
        total_assets_end_of_year_amount=500,
        total_liabilities_end_of_year_amount=200,
    )


def test_form990_without_officer_raises():
    with pytest.raises(ValueError):
        build_record(_filing([], form_990=Form990Data()), "D", "O", "B")


def test_form990ez_bookkeeper_and_officer_merge():
    ez = Form990EZData(
        gross_receipts=10,
        total_revenue=20,
        total_expenses=15,
        excess_or_deficit=5,
        officers=[
            OfficerEntry(
                name="Carol Poe",
                title="Director",
                average_hours_per_week=1.0,
                compensation=0,
                address=USAddress("2 Oak Ave", "Town", "OH", "44101"),
            )
        ],
        books_in_care_of=BooksInCare(
            person_name="Carol Poe",
            address=USAddress("3 Elm St", "City", "OH", "44102"),
            phone="PHONE-C",
        ),
        primary_exempt_purpose="Education",
        website="example.net",
    )
    officers = [BusinessOfficer(person_name="Dan Moe", title="Treasurer", phone="PHONE-D")]
    record = build_record(_filing(officers, form_990ez=ez), "D", "O", "B")

    carol, dan = record.people
    assert carol == Person(
        person_name="Carol Poe",
        person_title="Director",
        phone_number="PHONE-C",
        average_hours=1.0,
        bookkeeper=True,
        compensation=0,
        address=Address("2 Oak Ave", "Town", "OH", "44101"),
    )
    assert dan == Person(person_name="Dan Moe", person_title="Treasurer", phone_number="PHONE-D")
    assert record.form_990_ez == Form990EZSummary(
        gross_receipts_amt=10,
        total_revenue_amt=20,
        total_expenses_amt=15,
        excess_or_deficit_for_year_amt=5,
        primary_exempt_purpose="Education",
        website="example.net",
    )


def test_bookkeeper_without_street_gets_no_address():
    ez = Form990EZData(
        books_in_care_of=BooksInCare(person_name="Erin", address=USAddress(city="Town"), phone="")
    )
    record = build_record(_filing([], form_990ez=ez), "D", "O", "B")
    assert record.people == [Person(person_name="Erin", bookkeeper=True)]


def test_form990pf_officer_update_keeps_title():
    pf = Form990PFData(
        officers=[
            OfficerEntry("Finn", "Trustee", 5.0, 50, USAddress()),
            OfficerEntry("Finn", "Chair", 6.0, 60, None),
        ]
    )
    record = build_record(_filing([], form_990pf=pf), "D", "O", "B")
    assert record.people == [
        Person(person_name="Finn", person_title="Trustee", average_hours=6.0, compensation=60)
    ]


def test_business_officers_deduplicate_by_name():
    officers = [
        BusinessOfficer(person_name="Gil", title="CEO", phone="P1"),
        BusinessOfficer(person_name="Gil", title="Chair", phone="P2"),
        BusinessOfficer(person_name="", title="Clerk", phone="P3"),
    ]
    record = build_record(_filing(officers), "D", "O", "B")
    assert record.people == [Person(person_name="Gil", person_title="Chair", phone_number="P2")]


def test_consolidate_people_merges_and_cleans():
    people = [
        Person(person_name="A", person_title="T1", phone_number="p"),
        Person(person_name="", person_title="X"),
        Person(
            person_name="A",
            average_hours=3.0,
            bookkeeper=True,
            compensation=7,
            address=Address(address_line1="1"),
        ),
        Person(person_name="B", phone_number="", address=Address()),
    ]
    result = consolidate_people(people)
    assert result == [
        Person(
            person_name="A",
            person_title="T1",
            phone_number="p",
            average_hours=3.0,
            bookkeeper=False,
            compensation=7,
            address=Address(address_line1="1"),
        ),
        Person(person_name="B"),
    ]
    assert people[0].average_hours is None
    assert people[3].phone_number == ""


def test_consolidate_people_names_are_unique():
    people = [Person(person_name=name) for name in ["x", "y", "x", "z", "y"]]
    names = [p.person_name for p in consolidate_people(people)]
    assert sorted(names) == sorted(set(names))
    assert set(names) == {"x", "y", "z"}