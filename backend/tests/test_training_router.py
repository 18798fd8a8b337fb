from jobready.models.training import UserModuleProgress, UserTraining


def test_categories_are_fixed(api):
    resp = api.get("/api/training/categories")
    data = resp.json()["data"]
    assert len(data) == 6
    assert {"id", "name", "icon"} <= set(data[0])
    assert data[0]["id"] == "customer-service"


def test_course_list_filters_and_viewer_progress(api, auth_header, make_user, make_course):
    user = make_user()
    zulu = make_course(title="Ukubhala i-CV", category="cv-writing", language="zu")
    make_course(title="Interview Skills", category="interview-skills")
    make_course(title="Hidden", is_active=False)

    anonymous = api.get("/api/training/courses").json()["data"]
    assert sorted(c["title"] for c in anonymous) == ["Interview Skills", "Ukubhala i-CV"]
    assert "user_progress" not in anonymous[0]

    assert [c["title"] for c in api.get("/api/training/courses", params={"language": "zu"}).json()["data"]] == ["Ukubhala i-CV"]
    assert [c["title"] for c in api.get("/api/training/courses", params={"category": "interview-skills"}).json()["data"]] == [
        "Interview Skills"
    ]

    headers = auth_header(user.id)
    api.post(f"/api/training/courses/{zulu.id}/enroll", headers=headers)
    mine = {c["title"]: c for c in api.get("/api/training/courses", headers=headers).json()["data"]}
    assert mine["Ukubhala i-CV"]["user_progress"] == 0
    assert mine["Ukubhala i-CV"]["is_completed"] is False
    assert mine["Interview Skills"]["user_progress"] is None


def test_course_detail_lists_modules_in_order(api, make_course):
    course = make_course(modules=("First", "Second", "Third"))
    data = api.get(f"/api/training/courses/{course.id}").json()["data"]
    assert [m["title"] for m in data["modules"]] == ["First", "Second", "Third"]
    assert [m["order_index"] for m in data["modules"]] == [1, 2, 3]
    assert api.get("/api/training/courses/999").status_code == 404


def test_enroll_twice_conflicts_and_inactive_is_404(api, auth_header, make_user, make_course):
    headers = auth_header(make_user().id)
    course = make_course()
    hidden = make_course(title="Retired", is_active=False)
    assert api.post(f"/api/training/courses/{course.id}/enroll", headers=headers).status_code == 201
    assert api.post(f"/api/training/courses/{course.id}/enroll", headers=headers).status_code == 409
    assert api.post(f"/api/training/courses/{hidden.id}/enroll", headers=headers).status_code == 404


def test_progress_completion_stamp_is_set_then_cleared(api, auth_header, db_session, make_user, make_course):
    user = make_user()
    headers = auth_header(user.id)
    course = make_course()
    api.post(f"/api/training/courses/{course.id}/enroll", headers=headers)

    done = api.put(f"/api/training/courses/{course.id}/progress", json={"progress": 100}, headers=headers)
    assert done.status_code == 200
    assert done.json()["data"] == {"progress": 100, "completed": True}
    db_session.expire_all()
    enrollment = db_session.query(UserTraining).filter_by(user_id=user.id, course_id=course.id).one()
    assert enrollment.completed_at is not None

    back = api.put(f"/api/training/courses/{course.id}/progress", json={"progress": 50}, headers=headers)
    assert back.json()["data"] == {"progress": 50, "completed": False}
    db_session.expire_all()
    enrollment = db_session.query(UserTraining).filter_by(user_id=user.id, course_id=course.id).one()
    assert enrollment.completed is False
    assert enrollment.completed_at is None


def test_progress_is_bounded_and_requires_enrollment(api, auth_header, make_user, make_course):
    headers = auth_header(make_user().id)
    course = make_course()
    assert api.put(f"/api/training/courses/{course.id}/progress", json={"progress": 10}, headers=headers).status_code == 404

    api.post(f"/api/training/courses/{course.id}/enroll", headers=headers)
    assert api.put(f"/api/training/courses/{course.id}/progress", json={"progress": 101}, headers=headers).status_code == 400
    assert api.put(f"/api/training/courses/{course.id}/progress", json={"progress": -1}, headers=headers).status_code == 400


def test_progress_marks_module_of_the_course(api, auth_header, db_session, make_user, make_course):
    user = make_user()
    headers = auth_header(user.id)
    course = make_course()
    other = make_course(title="Other")
    api.post(f"/api/training/courses/{course.id}/enroll", headers=headers)

    module_id = course.modules[0].id
    foreign_module_id = other.modules[0].id
    url = f"/api/training/courses/{course.id}/progress"
    assert api.put(url, json={"progress": 30, "moduleId": foreign_module_id}, headers=headers).status_code == 404
    assert api.put(url, json={"progress": 30, "moduleId": module_id}, headers=headers).status_code == 200
    assert api.put(url, json={"progress": 40, "moduleId": module_id}, headers=headers).status_code == 200

    rows = db_session.query(UserModuleProgress).filter_by(user_id=user.id).all()
    assert [(r.module_id, r.completed) for r in rows] == [(module_id, True)]


def test_my_courses(api, auth_header, make_user, make_course):
    headers = auth_header(make_user().id)
    course = make_course()
    assert api.get("/api/training/my-courses", headers=headers).json()["data"] == []
    api.post(f"/api/training/courses/{course.id}/enroll", headers=headers)
    api.put(f"/api/training/courses/{course.id}/progress", json={"progress": 20}, headers=headers)
    mine = api.get("/api/training/my-courses", headers=headers).json()["data"]
    assert len(mine) == 1
    assert mine[0]["id"] == course.id
    assert mine[0]["progress"] == 20
    assert mine[0]["completed"] is False
