from conftest import auth_headers, login


def _create_movement(client, token, name="Back Squat"):
    r = client.post(
        "/api/movements",
        json={"name": name, "category": "Powerlifting"},
        headers=auth_headers(token),
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _create_wod(client, token, name, wod_format):
    r = client.post(
        "/api/wods",
        json={"name": name, "format": wod_format, "description": "Test workout"},
        headers=auth_headers(token),
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


# ─── Health ──────────────────────────────────────────────────────────────────


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


# ─── Auth ────────────────────────────────────────────────────────────────────


def test_request_otp_requires_contact(client):
    r = client.post("/api/auth/request-otp", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "Email or phone required"


def test_request_otp_echoes_code_outside_production(client):
    r = client.post("/api/auth/request-otp", json={"email": "dev@example.com"})
    assert r.status_code == 200
    data = r.json()
    assert data["accepted"] is True
    assert data["expires_in_seconds"] == 600
    assert len(data["dev_code"]) == 6
    assert data["dev_code"].isdigit()


def test_verify_otp_logs_in_new_user(client):
    data = login(client, "fresh@example.com")
    assert data["token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "fresh@example.com"
    assert data["user"]["needs_onboarding"] is True
    assert data["user"]["unit_system"] == "kg"


def test_verify_otp_rejects_reused_code(client):
    code = client.post("/api/auth/request-otp", json={"email": "reuse@example.com"}).json()[
        "dev_code"
    ]
    body = {"email": "reuse@example.com", "code": code}
    assert client.post("/api/auth/verify-otp", json=body).status_code == 200
    r = client.post("/api/auth/verify-otp", json=body)
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid or expired code"


def test_request_otp_rate_limited(client):
    for _ in range(3):
        r = client.post("/api/auth/request-otp", json={"email": "limit@example.com"})
        assert r.status_code == 200
    r = client.post("/api/auth/request-otp", json={"email": "limit@example.com"})
    assert r.status_code == 429
    assert r.headers["Retry-After"] == "300"


def test_authenticated_routes_require_token(client):
    r = client.get("/api/user/profile")
    assert r.status_code == 401
    assert r.json()["detail"] == "Missing Authorization header"

    r = client.get("/api/user/profile", headers=auth_headers("not-a-token"))
    assert r.status_code == 401


# ─── Profile ─────────────────────────────────────────────────────────────────


def test_profile_update_completes_onboarding(client):
    token = login(client, "onboard@example.com")["token"]
    r = client.put(
        "/api/user/profile",
        json={"name": "  Sam  ", "unit_system": "lb", "timezone": "America/Denver"},
        headers=auth_headers(token),
    )
    assert r.status_code == 200, r.text
    assert r.json()["name"] == "Sam"
    assert r.json()["unit_system"] == "lb"

    r = client.get("/api/user/profile", headers=auth_headers(token))
    assert r.json()["timezone"] == "America/Denver"

    code = client.post("/api/auth/request-otp", json={"email": "onboard@example.com"}).json()[
        "dev_code"
    ]
    again = client.post(
        "/api/auth/verify-otp", json={"email": "onboard@example.com", "code": code}
    ).json()
    assert again["user"]["needs_onboarding"] is False


def test_profile_rejects_unknown_unit(client):
    token = login(client, "units@example.com")["token"]
    r = client.put(
        "/api/user/profile",
        json={"name": "Sam", "unit_system": "stone"},
        headers=auth_headers(token),
    )
    assert r.status_code == 422


# ─── PR records & movement stats ─────────────────────────────────────────────


def test_pr_record_flow_and_stats(client):
    token = login(client, "lifter@example.com")["token"]
    headers = auth_headers(token)
    movement_id = _create_movement(client, token)

    first = client.post(
        "/api/pr-records",
        json={
            "movement_id": movement_id,
            "date": "2026-01-10",
            "rep_scheme": "5RM",
            "weight": 100,
            "unit": "kg",
        },
        headers=headers,
    )
    assert first.status_code == 201, first.text
    assert first.json()["est_1rm"] == 116.67

    second = client.post(
        "/api/pr-records",
        json={
            "movement_id": movement_id,
            "date": "2026-03-10",
            "rep_scheme": "1RM",
            "weight": 128.34,
            "reps": 1,
            "unit": "kg",
        },
        headers=headers,
    )
    assert second.json()["est_1rm"] == 128.34

    r = client.get(f"/api/movements/{movement_id}/stats", headers=headers)
    assert r.status_code == 200
    data = r.json()
    assert data["best_1rm"] == 128.34
    assert data["first_1rm"] == 116.67
    assert data["last_1rm"] == 128.34
    assert data["delta_percent"] == 10.0
    assert data["total_records"] == 2

    records = client.get(
        "/api/pr-records", params={"movement_id": movement_id}, headers=headers
    ).json()
    assert [rec["date"] for rec in records] == ["2026-03-10", "2026-01-10"]
    assert records[0]["movement_name"] == "Back Squat"


def test_pr_update_recomputes_estimate(client):
    token = login(client, "editor@example.com")["token"]
    headers = auth_headers(token)
    movement_id = _create_movement(client, token)
    record_id = client.post(
        "/api/pr-records",
        json={
            "movement_id": movement_id,
            "date": "2026-01-10",
            "rep_scheme": "5RM",
            "weight": 100,
            "unit": "kg",
        },
        headers=headers,
    ).json()["id"]

    r = client.put(
        f"/api/pr-records/{record_id}",
        json={"date": "2026-01-10", "rep_scheme": "3RM", "weight": 100, "unit": "kg"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["est_1rm"] == 110.0

    assert client.delete(f"/api/pr-records/{record_id}", headers=headers).status_code == 200
    assert client.delete(f"/api/pr-records/{record_id}", headers=headers).status_code == 404


def test_percent_calculator(client):
    token = login(client, "percent@example.com")["token"]
    headers = auth_headers(token)
    movement_id = _create_movement(client, token, "Deadlift")

    r = client.get(f"/api/percent-calculator/{movement_id}", headers=headers)
    assert r.status_code == 404

    client.post(
        "/api/pr-records",
        json={
            "movement_id": movement_id,
            "date": "2026-02-01",
            "rep_scheme": "1RM",
            "weight": 200,
            "unit": "kg",
        },
        headers=headers,
    )
    r = client.get(f"/api/percent-calculator/{movement_id}", headers=headers)
    assert r.status_code == 200
    data = r.json()
    assert data["base_1rm"] == 200.0
    assert len(data["table"]) == 18
    assert data["table"][0] == {"percent": 10, "weight": 20.0}
    assert data["table"][-1] == {"percent": 95, "weight": 190.0}

    r = client.get(
        f"/api/percent-calculator/{movement_id}",
        params={"base_1rm": 100},
        headers=headers,
    )
    assert r.json()["table"][-1] == {"percent": 95, "weight": 95.0}

    # A zero override is treated as absent and falls back to the best estimate.
    r = client.get(
        f"/api/percent-calculator/{movement_id}",
        params={"base_1rm": 0},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["base_1rm"] == 200.0


# ─── WODs & results ──────────────────────────────────────────────────────────


def test_amrap_stats(client):
    token = login(client, "amrap@example.com")["token"]
    headers = auth_headers(token)
    wod_id = _create_wod(client, token, "Cindy", "AMRAP")
    for day, rounds, extra in (("2026-01-01", 5, 10), ("2026-02-01", 6, 0)):
        r = client.post(
            "/api/wod-results",
            json={"wod_id": wod_id, "date": day, "rounds": rounds, "extra_reps": extra},
            headers=headers,
        )
        assert r.status_code == 201, r.text

    data = client.get(f"/api/wods/{wod_id}/stats", headers=headers).json()
    assert data["format"] == "AMRAP"
    assert data["best_score"] == 6000
    assert data["first_score"] == 5010
    assert data["last_score"] == 6000
    assert data["best_rounds"] == 6
    assert data["total_attempts"] == 2
    assert "best_time" not in data


def test_for_time_stats_and_result_crud(client):
    token = login(client, "fran@example.com")["token"]
    headers = auth_headers(token)
    wod_id = _create_wod(client, token, "Fran", "For Time")
    ids = []
    for day, seconds in (("2026-01-01", 300), ("2026-02-01", 240), ("2026-03-01", 260)):
        ids.append(
            client.post(
                "/api/wod-results",
                json={"wod_id": wod_id, "date": day, "time_sec": seconds},
                headers=headers,
            ).json()["id"]
        )

    data = client.get(f"/api/wods/{wod_id}/stats", headers=headers).json()
    assert (data["best_time"], data["first_time"], data["last_time"]) == (240, 300, 260)
    assert data["total_attempts"] == 3

    r = client.put(
        f"/api/wod-results/{ids[2]}",
        json={"date": "2026-03-01", "time_sec": 230, "rx_scaled": "Scaled"},
        headers=headers,
    )
    assert r.status_code == 200
    results = client.get("/api/wod-results", params={"wod_id": wod_id}, headers=headers)
    latest = results.json()[0]
    assert latest["time_sec"] == 230
    assert latest["rx_scaled"] == "Scaled"
    assert latest["wod_name"] == "Fran"
    assert latest["format"] == "For Time"

    data = client.get(f"/api/wods/{wod_id}/stats", headers=headers).json()
    assert data["best_time"] == 230


def test_wod_stats_unknown_wod(client):
    token = login(client, "nowod@example.com")["token"]
    r = client.get("/api/wods/999/stats", headers=auth_headers(token))
    assert r.status_code == 404


# ─── Isolation & search ──────────────────────────────────────────────────────


def test_records_are_scoped_to_their_owner(client):
    owner = login(client, "owner@example.com")["token"]
    other = login(client, "other@example.com")["token"]
    movement_id = _create_movement(client, owner, "Snatch")
    record_id = client.post(
        "/api/pr-records",
        json={
            "movement_id": movement_id,
            "date": "2026-01-10",
            "rep_scheme": "1RM",
            "weight": 80,
            "unit": "kg",
        },
        headers=auth_headers(owner),
    ).json()["id"]

    assert client.get("/api/pr-records", headers=auth_headers(other)).json() == []
    assert client.get("/api/movements", headers=auth_headers(other)).json() == []
    r = client.put(
        f"/api/pr-records/{record_id}",
        json={"date": "2026-01-10", "rep_scheme": "1RM", "weight": 90, "unit": "kg"},
        headers=auth_headers(other),
    )
    assert r.status_code == 404
    assert client.delete(
        f"/api/pr-records/{record_id}", headers=auth_headers(other)
    ).status_code == 404
    r = client.post(
        "/api/pr-records",
        json={
            "movement_id": movement_id,
            "date": "2026-01-11",
            "rep_scheme": "1RM",
            "weight": 90,
            "unit": "kg",
        },
        headers=auth_headers(other),
    )
    assert r.status_code == 404


def test_search(client):
    token = login(client, "search@example.com")["token"]
    headers = auth_headers(token)
    _create_movement(client, token, "Power Clean")
    _create_movement(client, token, "Squat Clean")
    _create_movement(client, token, "Bench Press")
    _create_wod(client, token, "Clean Ladder", "For Time")

    data = client.get("/api/search", params={"q": "clean"}, headers=headers).json()
    assert [m["name"] for m in data["movements"]] == ["Power Clean", "Squat Clean"]
    assert [w["name"] for w in data["wods"]] == ["Clean Ladder"]

    data = client.get(
        "/api/search", params={"q": "clean", "type": "wods"}, headers=headers
    ).json()
    assert "movements" not in data

    assert client.get("/api/search", params={"q": " "}, headers=headers).status_code == 400
