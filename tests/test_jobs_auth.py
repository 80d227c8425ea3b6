"""
Jobs API in the authenticated variant: mutations need a bearer token and jobs record their owner.
"""
from backend.app.models.job import Job
from backend.app.models.user import User
from backend.app.utils.jwt import create_access_token
from backend.app.utils.object_id import new_object_id


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _create_unowned_job(db_session, sample_job: dict) -> Job:
    job = Job(
        title=sample_job["title"],
        type=sample_job["type"],
        description=sample_job["description"],
        company=sample_job["company"],
    )
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job


def _second_user_token(client, user_data: dict) -> str:
    r = client.post("/api/users/signup", json={**user_data, "email": "other@example.com"})
    assert r.status_code == 201, r.text
    return r.json()["token"]


def test_create_without_token_is_401(client, sample_job):
    r = client.post("/api/jobs", json=sample_job)
    assert r.status_code == 401, r.text


def test_update_without_token_is_401(client, db_session, sample_job):
    job = _create_unowned_job(db_session, sample_job)
    r = client.put(f"/api/jobs/{job.id}", json={"title": "Updated Title"})
    assert r.status_code == 401, r.text


def test_delete_without_token_is_401(client, db_session, sample_job):
    job = _create_unowned_job(db_session, sample_job)
    r = client.delete(f"/api/jobs/{job.id}")
    assert r.status_code == 401, r.text
    assert db_session.query(Job).filter(Job.id == job.id).first() is not None


def test_invalid_token_is_401(client, sample_job):
    r = client.post("/api/jobs", json=sample_job, headers=_auth_headers("invalid-token"))
    assert r.status_code == 401, r.text


def test_expired_token_is_401(client, sample_job, token, monkeypatch):
    from backend.app.utils import jwt as jwt_utils

    user_id = jwt_utils.decode_access_token(token)["sub"]
    monkeypatch.setattr(jwt_utils, "TOKEN_EXPIRE_DAYS", -1)
    expired = jwt_utils.create_access_token(user_id)

    r = client.post("/api/jobs", json=sample_job, headers=_auth_headers(expired))
    assert r.status_code == 401, r.text


def test_token_check_runs_before_id_validation(client):
    r = client.delete("/api/jobs/invalid-id")
    assert r.status_code == 401, r.text


def test_reads_stay_public(client, db_session, sample_job):
    job = _create_unowned_job(db_session, sample_job)
    assert client.get("/api/jobs").status_code == 200
    assert client.get(f"/api/jobs/{job.id}").status_code == 200


def test_create_job_with_token(client, db_session, sample_job, token):
    r = client.post("/api/jobs", json=sample_job, headers=_auth_headers(token))
    assert r.status_code == 201, r.text
    assert r.headers["content-type"].startswith("application/json")
    data = r.json()
    assert data["title"] == sample_job["title"]
    assert data["company"]["name"] == sample_job["company"]["name"]

    assert db_session.query(Job).filter(Job.id == data["id"]).first() is not None


def test_created_job_is_owned_by_caller(client, db_session, sample_job, user_data, token):
    r = client.post("/api/jobs", json=sample_job, headers=_auth_headers(token))
    assert r.status_code == 201, r.text

    user = db_session.query(User).filter(User.email == user_data["email"]).first()
    job = db_session.query(Job).filter(Job.id == r.json()["id"]).first()
    assert job.user_id == user.id
    assert r.json()["user_id"] == user.id


def test_owner_cannot_be_overridden_by_body(client, sample_job, token):
    body = {**sample_job, "user_id": new_object_id()}
    r = client.post("/api/jobs", json=body, headers=_auth_headers(token))
    assert r.status_code == 201, r.text
    owner = r.json()["user_id"]

    r2 = client.put(f"/api/jobs/{r.json()['id']}", json={"user_id": new_object_id()}, headers=_auth_headers(token))
    assert r2.status_code == 200, r2.text
    assert r2.json()["user_id"] == owner


def test_update_job_with_token(client, sample_job, token):
    created = client.post("/api/jobs", json=sample_job, headers=_auth_headers(token)).json()

    r = client.put(
        f"/api/jobs/{created['id']}",
        json={"description": "Updated description"},
        headers=_auth_headers(token),
    )
    assert r.status_code == 200, r.text
    assert r.json()["description"] == "Updated description"
    assert client.get(f"/api/jobs/{created['id']}").json()["description"] == "Updated description"


def test_delete_job_with_token(client, db_session, sample_job, token):
    created = client.post("/api/jobs", json=sample_job, headers=_auth_headers(token)).json()

    r = client.delete(f"/api/jobs/{created['id']}", headers=_auth_headers(token))
    assert r.status_code == 204, r.text

    assert db_session.query(Job).filter(Job.id == created["id"]).first() is None
    assert client.get(f"/api/jobs/{created['id']}").status_code == 404


def test_other_user_cannot_modify_owned_job(client, sample_job, user_data, token):
    created = client.post("/api/jobs", json=sample_job, headers=_auth_headers(token)).json()
    other = _second_user_token(client, user_data)

    r = client.put(f"/api/jobs/{created['id']}", json={"title": "Hijacked"}, headers=_auth_headers(other))
    assert r.status_code == 403, r.text

    r = client.delete(f"/api/jobs/{created['id']}", headers=_auth_headers(other))
    assert r.status_code == 403, r.text

    assert client.get(f"/api/jobs/{created['id']}").json()["title"] == sample_job["title"]


def test_any_user_can_modify_unowned_job(client, db_session, sample_job, token):
    job = _create_unowned_job(db_session, sample_job)

    r = client.put(f"/api/jobs/{job.id}", json={"title": "Claimed"}, headers=_auth_headers(token))
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Claimed"


def test_token_for_unknown_user_is_401(client, sample_job):
    r = client.post(
        "/api/jobs",
        json=sample_job,
        headers=_auth_headers(create_access_token(new_object_id())),
    )
    assert r.status_code == 401, r.text
