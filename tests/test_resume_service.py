"""
Tests for resume listing, filtering and pagination.
"""
import pytest

from chefdhundo.db.models.user import User
from chefdhundo.services import resume_service
from chefdhundo.services.resume_service import compute_pagination


def test_compute_pagination_middle_page():
    assert compute_pagination(2, 12, 30) == {
        "page": 2,
        "limit": 12,
        "total": 30,
        "total_pages": 3,
        "has_more": True,
    }


def test_compute_pagination_last_page_has_no_more():
    pagination = compute_pagination(3, 12, 30)
    assert pagination["total_pages"] == 3
    assert pagination["has_more"] is False


def test_compute_pagination_exact_multiple():
    pagination = compute_pagination(2, 10, 20)
    assert pagination["total_pages"] == 2
    assert pagination["has_more"] is False


def test_compute_pagination_empty():
    pagination = compute_pagination(1, 12, 0)
    assert pagination["total_pages"] == 0
    assert pagination["has_more"] is False


@pytest.mark.parametrize("limit, expected", [(None, 12), (0, 12), (5, 5), (500, 100)])
def test_clamp_limit(limit, expected):
    assert resume_service.clamp_limit(limit) == expected


@pytest.fixture
def experience_spread(make_user, make_resume):
    user = make_user()
    for years in [0, 2, 3, 6, 7, 10, 11, 25]:
        make_resume(user, name=f"Chef {years}", experience_years=years)
    make_resume(user, name="Chef Unknown", experience_years=None)
    return user


@pytest.mark.parametrize("bucket, expected", [
    ("fresher", [0, 2]),
    ("medium", [3, 6]),
    ("high", [7, 10]),
    ("pro", [11, 25]),
])
def test_experience_buckets(db_session, experience_spread, bucket, expected):
    resumes, _ = resume_service.list_resumes_paginated(db_session, page=1, limit=50, experience=bucket)
    assert sorted(r.experience_years for r in resumes) == expected


@pytest.mark.parametrize("bucket", ["all", "", None, "legendary"])
def test_unknown_experience_bucket_does_not_filter(db_session, experience_spread, bucket):
    _, pagination = resume_service.list_resumes_paginated(db_session, page=1, limit=50, experience=bucket)
    assert pagination["total"] == 9


def test_search_matches_any_text_column_case_insensitively(db_session, make_user, make_resume):
    user = make_user()
    make_resume(user, name="AMIT Sharma", city="Pune")
    make_resume(user, name="Ravi", email="amit.r@example.com", city="Delhi")
    make_resume(user, name="Sunil", city="Amitpur")
    make_resume(user, name="Karan", city="Goa")

    resumes, pagination = resume_service.list_resumes_paginated(db_session, search="  amit ")

    assert pagination["total"] == 3
    assert {r.name for r in resumes} == {"AMIT Sharma", "Ravi", "Sunil"}


def test_profession_filter_matches_profession_work_type_or_role(db_session, make_user, make_resume):
    user = make_user()
    make_resume(user, name="A", profession="Tandoor Chef")
    make_resume(user, name="B", profession="Line Cook", job_role="Tandoor Chef")
    make_resume(user, name="C", profession="Line Cook", work_type="part")
    make_resume(user, name="D", profession="Pastry Chef")

    resumes, _ = resume_service.list_resumes_paginated(db_session, profession="Tandoor Chef")
    assert {r.name for r in resumes} == {"A", "B"}

    resumes, _ = resume_service.list_resumes_paginated(db_session, profession="part")
    assert {r.name for r in resumes} == {"C"}

    _, pagination = resume_service.list_resumes_paginated(db_session, profession="all")
    assert pagination["total"] == 4


def test_pages_are_newest_first_and_disjoint(db_session, make_user, make_resume):
    user = make_user()
    created = [make_resume(user, name=f"Chef {i}") for i in range(5)]

    first, pagination = resume_service.list_resumes_paginated(db_session, page=1, limit=2)
    second, _ = resume_service.list_resumes_paginated(db_session, page=2, limit=2)
    last, last_pagination = resume_service.list_resumes_paginated(db_session, page=3, limit=2)

    assert [r.id for r in first] == [created[4].id, created[3].id]
    assert [r.id for r in second] == [created[2].id, created[1].id]
    assert [r.id for r in last] == [created[0].id]
    assert pagination["has_more"] is True
    assert last_pagination["has_more"] is False


def test_structured_search(db_session, make_user, make_resume):
    user = make_user()
    make_resume(user, name="A", city="Pune", profession="Head Chef", experience_years=8, cuisines="North Indian, Mughlai")
    make_resume(user, name="B", city="Mumbai", preferred_location="Pune", profession="Sous Chef", experience_years=3, cuisines="Chinese")
    make_resume(user, name="C", city="Goa", profession="Head Chef", experience_years=12, cuisines="Goan")

    results = resume_service.search_resumes(db_session, location="pune")
    assert {r.name for r in results} == {"A", "B"}

    results = resume_service.search_resumes(db_session, profession="head", min_experience=10)
    assert {r.name for r in results} == {"C"}

    results = resume_service.search_resumes(db_session, cuisines=["mughlai", "goan"])
    assert {r.name for r in results} == {"A", "C"}


def test_create_resume_marks_owner_as_chef(db_session, make_user):
    user = make_user()
    assert user.chef == "no"

    resume_service.create_resume(db_session, {"user_id": user.id, "name": "New Chef", "email": "new@example.com"})

    db_session.refresh(user)
    assert user.chef == "yes"


def test_create_resume_for_missing_user_raises(db_session):
    with pytest.raises(ValueError):
        resume_service.create_resume(db_session, {"user_id": 999, "name": "Ghost", "email": "g@example.com"})


def test_delete_last_resume_resets_chef(db_session, make_user, make_resume):
    user = make_user()
    resume = make_resume(user)

    owner = resume_service.delete_resume(db_session, resume)

    assert owner.chef == "no"
    assert db_session.query(User).filter(User.id == user.id).first().chef == "no"


def test_delete_one_of_two_resumes_keeps_chef(db_session, make_user, make_resume):
    user = make_user()
    first = make_resume(user)
    make_resume(user)

    owner = resume_service.delete_resume(db_session, first)

    assert owner.chef == "yes"
