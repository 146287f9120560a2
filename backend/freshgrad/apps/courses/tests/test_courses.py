from __future__ import annotations

import pytest

from freshgrad.apps.candidates import models as candidate_models
from freshgrad.apps.candidates import schemas as candidate_schemas
from freshgrad.apps.candidates import services as candidate_services
from freshgrad.apps.courses import schemas as course_schemas
from freshgrad.apps.courses import services as course_services
from freshgrad.errors import ConflictError, ValidationError


def _course(db_session, code, **fields):
    course = course_services.create_course(
        db_session, course_schemas.CourseCreate(code=code, title=f"{code} title", **fields)
    )
    db_session.commit()
    return course


def test_defaults(db_session):
    course = _course(db_session, "EDU101")

    assert course.id.startswith("CR-")
    assert course.weight == 1.0
    assert course.pass_threshold == 70
    assert course.is_required is False
    assert course.tracks == []
    assert course.active is True


def test_duplicate_code_conflicts(db_session):
    _course(db_session, "EDU101")

    with pytest.raises(ConflictError):
        course_services.create_course(
            db_session, course_schemas.CourseCreate(code="EDU101", title="Again")
        )


def test_update_code_conflict_and_partial(db_session):
    first = _course(db_session, "EDU101", weight=0.5)
    second = _course(db_session, "EDU102")

    with pytest.raises(ConflictError):
        course_services.update_course(db_session, second.id, course_schemas.CourseUpdate(code="EDU101"))

    course_services.update_course(db_session, first.id, course_schemas.CourseUpdate(pass_threshold=80))
    db_session.commit()
    assert first.pass_threshold == 80
    assert first.weight == 0.5

    with pytest.raises(ValidationError):
        course_services.update_course(
            db_session, first.id, course_schemas.CourseUpdate.model_validate({"title": None})
        )


def test_soft_delete_keeps_enrollments(db_session):
    course = _course(db_session, "EDU101")
    candidate = candidate_services.create_candidate(
        db_session,
        candidate_schemas.CandidateCreate.model_validate(
            {"name": "C", "enrollments": [{"courseCode": "EDU101"}]}
        ),
    )
    db_session.commit()

    course_services.deactivate_course(db_session, course.id)
    db_session.commit()

    assert course_services.get_course(db_session, course.id).active is False
    assert course_services.list_courses(db_session) == []
    assert [c.code for c in course_services.list_courses(db_session, include_inactive=True)] == ["EDU101"]
    assert (
        db_session.query(candidate_models.CandidateEnrollment)
        .filter_by(candidate_id=candidate.id, course_code="EDU101")
        .count()
        == 1
    )


def test_course_routes(client):
    default = client.post("/api/courses", json={"code": "B200", "title": "Pedagogy"})
    half = client.post("/api/courses", json={"code": "A100", "title": "Math", "weight": 0.5, "tracks": ["t1", "t3"]})

    assert default.status_code == 201
    assert default.json()["weight"] == 1
    assert default.json()["passThreshold"] == 70
    assert client.get(f"/api/courses/{half.json()['id']}").json()["weight"] == 0.5
    assert half.json()["tracks"] == ["t1", "t3"]

    assert [c["code"] for c in client.get("/api/courses").json()] == ["A100", "B200"]
    assert client.post("/api/courses", json={"code": "A100", "title": "Dup"}).status_code == 409

    assert client.delete(f"/api/courses/{half.json()['id']}").json() == {"success": True}
    assert [c["code"] for c in client.get("/api/courses").json()] == ["B200"]
    listed = client.get("/api/courses", params={"includeInactive": "true"}).json()
    assert [(c["code"], c["active"]) for c in listed] == [("A100", False), ("B200", True)]


def test_update_title_is_stripped_and_never_blank(db_session):
    course = _course(db_session, "EDU101")

    course_services.update_course(db_session, course.id, course_schemas.CourseUpdate(title="  Pedagogy  "))
    db_session.commit()
    assert course.title == "Pedagogy"

    with pytest.raises(ValidationError):
        course_services.update_course(db_session, course.id, course_schemas.CourseUpdate(title="   "))


def test_blank_title_update_route_is_422(client):
    course = client.post("/api/courses", json={"code": "C300", "title": "Assessment"}).json()

    assert client.put(f"/api/courses/{course['id']}", json={"title": ""}).status_code == 422
    assert client.put(f"/api/courses/{course['id']}", json={"title": "  "}).status_code == 422
    assert client.get(f"/api/courses/{course['id']}").json()["title"] == "Assessment"
