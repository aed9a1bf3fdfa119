"""Payload checks run before any store is touched."""
import re
from urllib.parse import urlparse

from email_validator import validate_email, EmailNotValidError

from ..errors import InvalidInput
from ..statuses import LinkType

_PHONE_RE = re.compile(r"^\+?\d{7,16}$")

MAX_TASK_LINKS = 10


def is_valid_url(value):
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_email(value):
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput("Email is required", field="email")
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidInput("Please enter a valid email", field="email", reason=str(e)) from e
    return value.strip().lower()


def _text(data, field):
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInput(f"{field} must be a string", field=field)
    return value.strip()


def _non_negative(data, field, cast, default=None):
    raw = data.get(field, default)
    if raw is None or raw == "":
        raise InvalidInput(f"{field} is required", field=field)
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field} must be a number", field=field) from None
    if value < 0:
        raise InvalidInput(f"{field} cannot be negative", field=field)
    return value


def _reference_id(raw):
    if raw in (None, ""):
        return None
    if isinstance(raw, bool):
        raise InvalidInput("Invalid reference user", field="reference_id")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidInput("Invalid reference user", field="reference_id") from None


def _clean_name(data):
    name = _text(data, "name")
    if len(name) < 2:
        raise InvalidInput("Name must be at least 2 characters long", field="name")
    return name


def _clean_phone(data):
    phone = re.sub(r"[\s\-]", "", _text(data, "phone"))
    if not _PHONE_RE.match(phone):
        raise InvalidInput("Please enter a valid phone number", field="phone")
    return phone


def _experience_ids(data):
    experience_ids = data.get("core_experience") or []
    if not isinstance(experience_ids, (list, tuple)):
        raise InvalidInput("core_experience must be a list", field="core_experience")
    try:
        return sorted({int(x) for x in experience_ids})
    except (TypeError, ValueError):
        raise InvalidInput("core_experience items must be experience ids", field="core_experience") from None


def clean_applicant(data, cv_ref):
    """Validate and normalize applicant fields for intake."""
    if not cv_ref or not str(cv_ref).strip():
        raise InvalidInput("CV file is required", field="cv_file_path")
    name = _clean_name(data)
    phone = _clean_phone(data)
    experience_ids = _experience_ids(data)
    return {
        "name": name,
        "email": normalize_email(data.get("email")),
        "phone": phone,
        "cv_file_path": str(cv_ref).strip(),
        "years_of_experience": _non_negative(data, "years_of_experience", float, 0),
        "expected_salary": _non_negative(data, "expected_salary", float, 0),
        "notice_period_in_months": _non_negative(data, "notice_period_in_months", int, 1),
        "reference_id": _reference_id(data.get("reference_id")),
        "core_experience": experience_ids,
    }


# descriptive profile fields staff may correct after intake; status is not one of them
_PROFILE_FIELDS = {
    "name": _clean_name,
    "email": lambda data: normalize_email(data.get("email")),
    "phone": _clean_phone,
    "years_of_experience": lambda data: _non_negative(data, "years_of_experience", float),
    "expected_salary": lambda data: _non_negative(data, "expected_salary", float),
    "notice_period_in_months": lambda data: _non_negative(data, "notice_period_in_months", int),
    "reference_id": lambda data: _reference_id(data.get("reference_id")),
    "core_experience": _experience_ids,
}


def clean_profile_edit(data):
    """Validate only the profile fields present in ``data``."""
    if "status" in data:
        raise InvalidInput("Status cannot be edited here; use the status endpoint", field="status")
    return {field: clean(data) for field, clean in _PROFILE_FIELDS.items() if field in data}


def clean_task_links(links, max_links=MAX_TASK_LINKS):
    if not links or not isinstance(links, (list, tuple)):
        raise InvalidInput("At least one link is required", field="links")
    if len(links) > max_links:
        raise InvalidInput(f"Maximum {max_links} links allowed", field="links", count=len(links))
    cleaned = []
    for index, link in enumerate(links):
        if isinstance(link, str):
            link = {"url": link}
        if not isinstance(link, dict) or not is_valid_url(link.get("url")):
            raise InvalidInput("Invalid URL format", field="links", index=index)
        link_type = link.get("type") or LinkType.OTHER.value
        if not isinstance(link_type, str) or link_type not in {t.value for t in LinkType}:
            raise InvalidInput("Link type must be github, live, or other", field="links", index=index)
        cleaned.append({"url": link["url"].strip(), "type": link_type})
    return cleaned
