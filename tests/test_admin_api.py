"""
Tests for the admin back-office endpoints.
"""
import csv
import io
from datetime import datetime, timedelta

from chefdhundo.db.models.user import User
from chefdhundo.db.models.resume import Resume
from chefdhundo.db.models.payment import Payment
from chefdhundo.db.models.subscription import Subscription


def test_admin_lists_users(client, auth, admin_user, make_user):
    make_user()
    make_user()

    response = client.get("/api/admin/users", headers=auth(admin_user))

    assert response.status_code == 200
    assert len(response.json()["data"]) == 3


def test_admin_routes_require_admin(client, auth, basic_user, pro_user):
    for user in (basic_user, pro_user):
        response = client.get("/api/admin/users", headers=auth(user))
        assert response.status_code == 403
        assert response.json()["detail"] == "Forbidden: Admin access required"


def test_admin_routes_require_token(client):
    response = client.get("/api/admin/users")
    assert response.status_code == 401


def test_token_for_unknown_user(client):
    from chefdhundo.core.security import create_access_token

    token = create_access_token({"sub": "user_nobody"})
    response = client.get("/api/admin/users", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404


def test_update_role(client, auth, db_session, admin_user, basic_user):
    response = client.patch(
        "/api/admin/users/role",
        json={"targetUserId": basic_user.id, "newRole": "pro"},
        headers=auth(admin_user),
    )

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "pro"
    db_session.expire_all()
    assert db_session.query(User).filter(User.id == basic_user.id).first().role == "pro"


def test_update_role_rejects_invalid_role(client, auth, admin_user, basic_user):
    response = client.patch(
        "/api/admin/users/role",
        json={"targetUserId": basic_user.id, "newRole": "superuser"},
        headers=auth(admin_user),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid role. Must be basic, pro, or admin"


def test_update_role_missing_user(client, auth, admin_user):
    response = client.patch(
        "/api/admin/users/role",
        json={"targetUserId": 9999, "newRole": "pro"},
        headers=auth(admin_user),
    )

    assert response.status_code == 404


def test_update_role_by_non_admin(client, auth, basic_user, make_user):
    target = make_user()

    response = client.patch(
        "/api/admin/users/role",
        json={"targetUserId": target.id, "newRole": "admin"},
        headers=auth(basic_user),
    )

    assert response.status_code == 403


def test_update_chef_status(client, auth, admin_user, basic_user):
    response = client.patch(
        "/api/admin/users/chef-status",
        json={"userId": basic_user.id, "chef": "yes"},
        headers=auth(admin_user),
    )

    assert response.status_code == 200
    assert response.json()["data"]["chef"] == "yes"


def test_update_chef_status_rejects_invalid_value(client, auth, admin_user, basic_user):
    response = client.patch(
        "/api/admin/users/chef-status",
        json={"userId": basic_user.id, "chef": "maybe"},
        headers=auth(admin_user),
    )

    assert response.status_code == 400


def test_delete_user_cascades(client, auth, db_session, storage, admin_user, make_user, make_resume, pdf_bytes):
    user = make_user()
    resume = make_resume(user)
    path = client.post(
        "/api/resumes/upload",
        data={"resumeId": str(resume.id)},
        files={"file": ("resume.pdf", pdf_bytes, "application/pdf")},
        headers=auth(user),
    ).json()["path"]

    payment = Payment(
        user_id=user.id,
        order_id="order_test_cascade",
        plan_id="pro_monthly",
        plan_name="Pro Monthly",
        amount=499,
        currency="INR",
        status="SUCCESS",
    )
    db_session.add(payment)
    db_session.flush()
    now = datetime.utcnow()
    db_session.add(Subscription(
        user_id=user.id,
        payment_id=payment.id,
        plan_id="pro_monthly",
        plan_name="Pro Monthly",
        start_date=now,
        end_date=now + timedelta(days=30),
    ))
    db_session.commit()

    response = client.delete(f"/api/admin/users/{user.id}", headers=auth(admin_user))

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.query(User).filter(User.id == user.id).first() is None
    assert db_session.query(Resume).filter(Resume.user_id == user.id).count() == 0
    assert db_session.query(Payment).filter(Payment.user_id == user.id).count() == 0
    assert db_session.query(Subscription).filter(Subscription.user_id == user.id).count() == 0
    assert not storage.exists("resumes", path)


def test_admin_cannot_delete_self(client, auth, admin_user):
    response = client.delete(f"/api/admin/users/{admin_user.id}", headers=auth(admin_user))

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete your own account"


def test_delete_missing_user(client, auth, admin_user):
    response = client.delete("/api/admin/users/9999", headers=auth(admin_user))
    assert response.status_code == 404


def test_set_resume_verification(client, auth, admin_user, make_user, make_resume):
    resume = make_resume(make_user())

    response = client.patch(
        f"/api/admin/resumes/{resume.id}/verification",
        json={"verified": True},
        headers=auth(admin_user),
    )

    assert response.status_code == 200
    assert response.json()["data"]["verified"] is True
    assert response.json()["message"] == "Resume verified"


def test_set_verification_on_missing_resume(client, auth, admin_user):
    response = client.patch(
        "/api/admin/resumes/9999/verification",
        json={"verified": True},
        headers=auth(admin_user),
    )
    assert response.status_code == 404


def test_export_users_csv(client, auth, admin_user, make_user):
    make_user(name="Amit, Jr.", email="amit@example.com")

    response = client.get("/api/admin/users/export", headers=auth(admin_user))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["name", "email", "role", "chef", "created_at"]
    assert ["Amit, Jr.", "amit@example.com", "basic", "no"] in [row[:4] for row in rows[1:]]


def test_stats(client, auth, db_session, admin_user, pro_user, make_user, make_resume):
    chef = make_user()
    make_resume(chef, profession="Head Chef", verified=True)
    make_resume(chef, profession="Head Chef")
    make_resume(chef, profession="Baker")

    response = client.get("/api/admin/stats", headers=auth(admin_user))

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["total_users"] == 3
    assert stats["users_by_role"] == {"basic": 1, "pro": 1, "admin": 1}
    assert stats["total_chefs"] == 1
    assert stats["total_resumes"] == 3
    assert stats["verified_resumes"] == 1
    assert stats["top_professions"][0] == {"profession": "Head Chef", "count": 2}
    assert len(stats["latest_resumes"]) == 3
    # admins see raw contacts in the dashboard
    assert stats["latest_resumes"][0]["phone"] == "9876543210"


def test_list_chefs(client, auth, admin_user, make_user, make_resume):
    chef = make_user(name="Chef")
    make_resume(chef)
    make_user(name="Employer")

    response = client.get("/api/users/chefs", headers=auth(admin_user))

    assert response.status_code == 200
    assert [u["name"] for u in response.json()["data"]] == ["Chef"]
