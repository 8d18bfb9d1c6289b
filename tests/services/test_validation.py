import pytest

from catalog.schemas.services import SERVICE_FIELDS, ServiceRead
from catalog.services.validation import collect_problems, validate_service


@pytest.fixture
def existing(make_service):
    return [
        ServiceRead(id=1, **make_service("svc-a").model_dump()),
        ServiceRead(id=2, **make_service("svc-b").model_dump()),
    ]


def test_complete_unique_service_is_valid(make_service, existing):
    assert validate_service(make_service("svc-new"), existing)
    assert collect_problems(make_service("svc-new"), existing) == []


@pytest.mark.parametrize("field", SERVICE_FIELDS)
def test_each_field_is_required(make_service, field):
    candidate = make_service(**{"app_code": "svc-new", field: ""})
    assert not validate_service(candidate, [])


def test_whitespace_only_counts_as_missing(make_service):
    problems = collect_problems(make_service("svc-new", region="   "), [])
    assert problems == ["Region is required"]


def test_every_missing_field_is_reported(make_service):
    problems = collect_problems(make_service("", app_name="", team_contact=""), [])
    assert problems == ["App Code is required", "App Name is required", "Team Contact is required"]


def test_duplicate_app_code_is_rejected(make_service, existing):
    problems = collect_problems(make_service("svc-a"), existing)
    assert problems == ["App Code 'svc-a' is already in use"]


def test_app_code_compare_is_case_sensitive(make_service, existing):
    assert validate_service(make_service("SVC-A"), existing)


def test_record_may_keep_its_own_code_when_edited(make_service, existing):
    assert validate_service(make_service("svc-a"), existing, exclude_id=1)


def test_edit_cannot_take_another_records_code(make_service, existing):
    assert not validate_service(make_service("svc-b"), existing, exclude_id=1)
