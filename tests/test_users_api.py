from quickcourt.models import FacilityStatus, UserRole


def test_profile_update(client, player, auth_headers):
    response = client.put(
        "/users/profile",
        json={"name": "Player One", "phone": "+919800000001"},
        headers=auth_headers(player),
    )

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "Player One"
    assert response.json()["phone"] == "+919800000001"
    assert response.json()["email"] == player.email


def test_profile_phone_must_be_unique(client, player, other_player, auth_headers):
    client.put("/users/profile", json={"phone": "+919800000002"}, headers=auth_headers(other_player))

    response = client.put("/users/profile", json={"phone": "+919800000002"}, headers=auth_headers(player))

    assert response.status_code == 400


def test_player_dashboard(client, player, court, auth_headers):
    client.post(
        "/bookings/",
        json={"court_id": court.id, "date": "2025-08-20", "start_time": "10:00:00", "end_time": "12:00:00"},
        headers=auth_headers(player),
    )

    stats = client.get("/users/dashboard-stats", headers=auth_headers(player)).json()

    assert stats["total_bookings"] == 1
    assert stats["confirmed_bookings"] == 1
    assert stats["cancelled_bookings"] == 0
    assert float(stats["total_spent"]) == 1200


def test_owner_and_admin_dashboards(client, owner, admin, player, court, make_facility, auth_headers):
    make_facility(owner, name="Second", status=FacilityStatus.pending)
    client.post(
        "/bookings/",
        json={"court_id": court.id, "date": "2025-08-20", "start_time": "10:00:00", "end_time": "11:00:00"},
        headers=auth_headers(player),
    )

    owner_stats = client.get("/users/dashboard-stats", headers=auth_headers(owner)).json()
    admin_stats = client.get("/users/dashboard-stats", headers=auth_headers(admin)).json()

    assert owner_stats["total_facilities"] == 2
    assert owner_stats["approved_facilities"] == 1
    assert owner_stats["pending_facilities"] == 1
    assert owner_stats["total_bookings"] == 1
    assert float(owner_stats["total_earnings"]) == 600

    assert admin_stats["total_users"] == 1
    assert admin_stats["total_facility_owners"] == 1
    assert admin_stats["total_admins"] == 1
    assert admin_stats["pending_approvals"] == 1
    assert float(admin_stats["total_revenue"]) == 600


def test_admin_lists_and_searches_users(client, admin, player, owner, make_user, auth_headers):
    make_user("kiran@example.com", name="Kiran")

    everyone = client.get("/users/admin/all-users", headers=auth_headers(admin)).json()
    owners = client.get("/users/admin/all-users", params={"role": "facility_owner"}, headers=auth_headers(admin)).json()
    found = client.get("/users/admin/all-users", params={"search": "KIR"}, headers=auth_headers(admin)).json()
    paged = client.get("/users/admin/all-users", params={"limit": 2}, headers=auth_headers(admin)).json()

    assert everyone["total"] == 4
    assert [u["email"] for u in owners["items"]] == [owner.email]
    assert [u["name"] for u in found["items"]] == ["Kiran"]
    assert paged["total_pages"] == 2
    assert len(paged["items"]) == 2


def test_admin_bans_and_restores_user(client, admin, player, auth_headers):
    banned = client.patch(
        f"/users/admin/user/{player.id}/status",
        json={"status": "banned"},
        headers=auth_headers(admin),
    )
    assert banned.status_code == 200, banned.text
    assert banned.json()["status"] == "banned"
    assert client.get("/users/profile", headers=auth_headers(player)).status_code == 403

    restored = client.patch(
        f"/users/admin/user/{player.id}/status",
        json={"status": "active"},
        headers=auth_headers(admin),
    )
    assert restored.json()["status"] == "active"
    assert client.get("/users/profile", headers=auth_headers(player)).status_code == 200


def test_admin_user_management_errors(client, admin, player, auth_headers):
    own = client.patch(f"/users/admin/user/{admin.id}/status", json={"status": "banned"}, headers=auth_headers(admin))
    missing = client.patch("/users/admin/user/9999/status", json={"status": "banned"}, headers=auth_headers(admin))
    bad_status = client.patch(f"/users/admin/user/{player.id}/status", json={"status": "deleted"}, headers=auth_headers(admin))
    not_admin = client.get("/users/admin/all-users", headers=auth_headers(player))

    assert own.status_code == 400
    assert missing.status_code == 404
    assert bad_status.status_code == 422
    assert not_admin.status_code == 403


def test_admin_sees_last_ten_bookings_of_user(client, admin, player, court, auth_headers):
    for hour in range(6, 18):
        client.post(
            "/bookings/",
            json={
                "court_id": court.id,
                "date": "2025-08-21",
                "start_time": f"{hour:02d}:00:00",
                "end_time": f"{hour + 1:02d}:00:00",
            },
            headers=auth_headers(player),
        )

    response = client.get(f"/users/admin/user/{player.id}/bookings", headers=auth_headers(admin))

    assert response.status_code == 200
    bookings = response.json()
    assert len(bookings) == 10
    assert bookings[0]["start_time"] == "17:00:00"


def test_roles_are_reported(client, owner, auth_headers):
    response = client.get("/users/profile", headers=auth_headers(owner))

    assert response.json()["role"] == UserRole.facility_owner.value
