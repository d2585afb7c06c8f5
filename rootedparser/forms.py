"""Typed view of IRS e-file return documents (990, 990-EZ and 990-PF)."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import IO, Iterator, List, Optional, Union

_INT_RE = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


class ReturnParseError(ValueError):
    """Raised when a return document cannot be decoded."""


@dataclass
class USAddress:
    address_line1: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass
class BusinessOfficer:
    person_name: str = ""
    title: str = ""
    phone: str = ""
    signature_date: str = ""
    discuss_with_paid_preparer: str = ""


@dataclass
class PreparerPerson:
    name: str = ""
    ptin: str = ""
    phone: str = ""
    preparation_date: str = ""


@dataclass
class Filer:
    ein: str = ""
    business_name: str = ""
    phone: str = ""
    us_address: USAddress = field(default_factory=USAddress)


@dataclass
class ReturnHeader:
    return_timestamp: str = ""
    tax_period_end: str = ""
    tax_period_begin: str = ""
    return_type: str = ""
    tax_year: int = 0
    filer: Filer = field(default_factory=Filer)
    business_officers: List[BusinessOfficer] = field(default_factory=list)
    preparer: PreparerPerson = field(default_factory=PreparerPerson)


@dataclass
class Form990Person:
    """A Part VII Section A entry of a Form 990."""

    name: str = ""
    title: str = ""
    average_hours_per_week: float = 0.0
    average_hours_related_orgs: float = 0.0
    individual_trustee_or_director: str = ""
    officer: str = ""
    comp_from_org: int = 0
    comp_from_related_orgs: int = 0
    other_compensation: int = 0


@dataclass
class OfficerEntry:
    """An officer, director, trustee or key employee on a 990-EZ or 990-PF."""

    name: str = ""
    title: str = ""
    average_hours_per_week: float = 0.0
    compensation: int = 0
    address: Optional[USAddress] = None


@dataclass
class BooksInCare:
    person_name: str = ""
    address: Optional[USAddress] = None
    phone: str = ""


@dataclass
class Form990EZData:
    gross_receipts: int = 0
    total_revenue: int = 0
    total_expenses: int = 0
    excess_or_deficit: int = 0
    officers: List[OfficerEntry] = field(default_factory=list)
    books_in_care_of: BooksInCare = field(default_factory=BooksInCare)
    primary_exempt_purpose: str = ""
    website: str = ""


@dataclass
class Form990PFData:
    officers: List[OfficerEntry] = field(default_factory=list)


@dataclass
class Form990Data:
    doing_business_as: str = ""
    website: str = ""
    gross_receipts: int = 0
    formation_year: int = 0
    state: str = ""
    mission: str = ""
    total_volunteers: int = 0
    total_revenue: int = 0
    total_expenses: int = 0
    revenue_less_expenses: int = 0
    contributions: int = 0
    membership_dues: int = 0
    program_service_revenue: int = 0
    investment_income: int = 0
    other_revenue: int = 0
    total_assets_eoy: int = 0
    total_liabilities_eoy: int = 0
    people: List[Form990Person] = field(default_factory=list)


@dataclass
class ReturnData:
    document_count: int = 0
    form_990ez: Optional[Form990EZData] = None
    form_990: Optional[Form990Data] = None
    form_990pf: Optional[Form990PFData] = None


@dataclass
class Return:
    header: ReturnHeader = field(default_factory=ReturnHeader)
    data: ReturnData = field(default_factory=ReturnData)


def _local(tag: object) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _find_all(elem: ET.Element, *path: str) -> Iterator[ET.Element]:
    if not path:
        yield elem
        return
    head, rest = path[0], path[1:]
    for child in elem:
        if _local(child.tag) == head:
            yield from _find_all(child, *rest)


def _last(elem: ET.Element, *path: str) -> Optional[ET.Element]:
    found = None
    for found in _find_all(elem, *path):
        pass
    return found


def _chardata(elem: ET.Element) -> str:
    parts = [elem.text or ""]
    parts.extend(child.tail or "" for child in elem)
    return "".join(parts)


def _text(elem: ET.Element, *path: str) -> str:
    node = _last(elem, *path)
    return "" if node is None else _chardata(node)


def _parse_int(raw: str, name: str) -> int:
    value = raw.strip()
    if not value:
        return 0
    if not _INT_RE.fullmatch(value):
        raise ReturnParseError(f"invalid integer {raw!r} in {name}")
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        raise ReturnParseError(f"integer {raw!r} out of range in {name}")
    return number


def _parse_float(raw: str, name: str) -> float:
    value = raw.strip()
    if not value:
        return 0.0
    try:
        if "_" in value:
            raise ValueError(value)
        return float(value)
    except ValueError:
        raise ReturnParseError(f"invalid number {raw!r} in {name}") from None


def _int(elem: ET.Element, *path: str) -> int:
    node = _last(elem, *path)
    return 0 if node is None else _parse_int(_chardata(node), path[-1])


def _float(elem: ET.Element, *path: str) -> float:
    node = _last(elem, *path)
    return 0.0 if node is None else _parse_float(_chardata(node), path[-1])


def _address(elem: ET.Element) -> USAddress:
    return USAddress(
        address_line1=_text(elem, "AddressLine1Txt"),
        city=_text(elem, "CityNm"),
        state=_text(elem, "StateAbbreviationCd"),
        zip_code=_text(elem, "ZIPCd"),
    )


def _optional_address(elem: ET.Element) -> Optional[USAddress]:
    node = _last(elem, "USAddress")
    return None if node is None else _address(node)


def _officer(elem: ET.Element) -> OfficerEntry:
    return OfficerEntry(
        name=_text(elem, "PersonNm"),
        title=_text(elem, "TitleTxt"),
        average_hours_per_week=_float(elem, "AverageHrsPerWkDevotedToPosRt"),
        compensation=_int(elem, "CompensationAmt"),
        address=_optional_address(elem),
    )


def _form990_person(elem: ET.Element) -> Form990Person:
    return Form990Person(
        name=_text(elem, "PersonNm"),
        title=_text(elem, "TitleTxt"),
        average_hours_per_week=_float(elem, "AverageHoursPerWeekRt"),
        average_hours_related_orgs=_float(elem, "AverageHoursPerWeekRltdOrgRt"),
        individual_trustee_or_director=_text(elem, "IndividualTrusteeOrDirectorInd"),
        officer=_text(elem, "OfficerInd"),
        comp_from_org=_int(elem, "ReportableCompFromOrgAmt"),
        comp_from_related_orgs=_int(elem, "ReportableCompFromRltdOrgAmt"),
        other_compensation=_int(elem, "OtherCompensationAmt"),
    )


def _books_in_care(elem: Optional[ET.Element]) -> BooksInCare:
    if elem is None:
        return BooksInCare()
    return BooksInCare(
        person_name=_text(elem, "PersonNm"),
        address=_optional_address(elem),
        phone=_text(elem, "PhoneNum"),
    )


def _form990ez(elem: ET.Element) -> Form990EZData:
    return Form990EZData(
        gross_receipts=_int(elem, "GrossReceiptsAmt"),
        total_revenue=_int(elem, "TotalRevenueAmt"),
        total_expenses=_int(elem, "TotalExpensesAmt"),
        excess_or_deficit=_int(elem, "ExcessOrDeficitForYearAmt"),
        officers=[_officer(e) for e in _find_all(elem, "OfficerDirectorTrusteeEmplGrp")],
        books_in_care_of=_books_in_care(_last(elem, "BooksInCareOfDetail")),
        primary_exempt_purpose=_text(elem, "PrimaryExemptPurposeTxt"),
        website=_text(elem, "WebsiteAddressTxt"),
    )


def _form990pf(elem: ET.Element) -> Form990PFData:
    return Form990PFData(
        officers=[
            _officer(e)
            for e in _find_all(
                elem, "OfficerDirTrstKeyEmplInfoGrp", "OfficerDirTrstKeyEmplGrp"
            )
        ]
    )


def _form990(elem: ET.Element) -> Form990Data:
    return Form990Data(
        doing_business_as=_text(elem, "DoingBusinessAsName", "BusinessNameLine1Txt"),
        website=_text(elem, "WebsiteAddressTxt"),
        gross_receipts=_int(elem, "GrossReceiptsAmt"),
        formation_year=_int(elem, "FormationYr"),
        state=_text(elem, "LegalDomicileStateCd"),
        mission=_text(elem, "ActivityOrMissionDesc"),
        total_volunteers=_int(elem, "TotalVolunteersCnt"),
        total_revenue=_int(elem, "CYTotalRevenueAmt"),
        total_expenses=_int(elem, "CYTotalExpensesAmt"),
        revenue_less_expenses=_int(elem, "CYRevenuesLessExpensesAmt"),
        contributions=_int(elem, "CYContributionsGrantsAmt"),
        membership_dues=_int(elem, "MembershipDuesAmt"),
        program_service_revenue=_int(elem, "CYProgramServiceRevenueAmt"),
        investment_income=_int(elem, "CYInvestmentIncomeAmt"),
        other_revenue=_int(elem, "CYOtherRevenueAmt"),
        total_assets_eoy=_int(elem, "TotalAssetsEOYAmt"),
        total_liabilities_eoy=_int(elem, "TotalLiabilitiesEOYAmt"),
        people=[_form990_person(e) for e in _find_all(elem, "Form990PartVIISectionAGrp")],
    )


def _header(elem: Optional[ET.Element]) -> ReturnHeader:
    if elem is None:
        return ReturnHeader()
    filer_elem = _last(elem, "Filer")
    filer = Filer()
    if filer_elem is not None:
        address_elem = _last(filer_elem, "USAddress")
        filer = Filer(
            ein=_text(filer_elem, "EIN"),
            business_name=_text(filer_elem, "BusinessName", "BusinessNameLine1Txt"),
            phone=_text(filer_elem, "PhoneNum"),
            us_address=USAddress() if address_elem is None else _address(address_elem),
        )
    preparer_elem = _last(elem, "PreparerPersonGrp")
    preparer = PreparerPerson()
    if preparer_elem is not None:
        preparer = PreparerPerson(
            name=_text(preparer_elem, "PreparerPersonNm"),
            ptin=_text(preparer_elem, "PTIN"),
            phone=_text(preparer_elem, "PhoneNum"),
            preparation_date=_text(preparer_elem, "PreparationDt"),
        )
    return ReturnHeader(
        return_timestamp=_text(elem, "ReturnTs"),
        tax_period_end=_text(elem, "TaxPeriodEndDt"),
        tax_period_begin=_text(elem, "TaxPeriodBeginDt"),
        return_type=_text(elem, "ReturnTypeCd"),
        tax_year=_int(elem, "TaxYr"),
        filer=filer,
        business_officers=[
            BusinessOfficer(
                person_name=_text(e, "PersonNm"),
                title=_text(e, "PersonTitleTxt"),
                phone=_text(e, "PhoneNum"),
                signature_date=_text(e, "SignatureDt"),
                discuss_with_paid_preparer=_text(e, "DiscussWithPaidPreparerInd"),
            )
            for e in _find_all(elem, "BusinessOfficerGrp")
        ],
        preparer=preparer,
    )


def _data(elem: Optional[ET.Element]) -> ReturnData:
    if elem is None:
        return ReturnData()
    ez = _last(elem, "IRS990EZ")
    full = _last(elem, "IRS990")
    pf = _last(elem, "IRS990PF")
    return ReturnData(
        document_count=_parse_int(elem.get("documentCnt", ""), "documentCnt"),
        form_990ez=None if ez is None else _form990ez(ez),
        form_990=None if full is None else _form990(full),
        form_990pf=None if pf is None else _form990pf(pf),
    )


def _return(root: ET.Element) -> Return:
    return Return(
        header=_header(_last(root, "ReturnHeader")),
        data=_data(_last(root, "ReturnData")),
    )


def parse_return(source: Union[str, "os.PathLike[str]", IO[bytes]]) -> Return:
    """Parse a return document from a file path or a binary file object."""
    try:
        tree = ET.parse(source)
    except ET.ParseError as exc:
        raise ReturnParseError(str(exc)) from exc
    return _return(tree.getroot())


def parse_return_string(text: Union[str, bytes]) -> Return:
    """Parse a return document held in memory."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ReturnParseError(str(exc)) from exc
    return _return(root)


import os  # noqa: E402  (used only in annotations)