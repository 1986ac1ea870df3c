"""Reviews of completed visits and the per-date waitlist."""

from conftest import NEXT_MONDAY


def booked_and_completed(client, admin_headers, client_headers, service_id):
    appt = client.post("/appointments", headers=client_headers, json={
        "service_id": service_id, "date": NEXT_MONDAY.isoformat(), "start_time": "08:00",
    }).json()
    client.patch(f"/appointments/{appt['id']}/complete", headers=admin_headers)
    return appt


def test_review_a_completed_visit(client, admin_headers, client_headers, manicure):
    appt = booked_and_completed(client, admin_headers, client_headers, manicure["id"])

    resp = client.post("/reviews", headers=client_headers, json={
        "appointment_id": appt["id"], "rating": 5, "comment": " Lovely work ",
    })
    assert resp.status_code == 201
    assert resp.json()["comment"] == "Lovely work"
    assert resp.json()["client_name"] == "Ana"

    again = client.post("/reviews", headers=client_headers, json={"appointment_id": appt["id"], "rating": 4})
    assert again.status_code == 409

    reviews = client.get("/reviews").json()
    assert [r["rating"] for r in reviews] == [5]


def test_cannot_review_before_completion(client, client_headers, manicure):
    appt = client.post("/appointments", headers=client_headers, json={
        "service_id": manicure["id"], "date": NEXT_MONDAY.isoformat(), "start_time": "08:00",
    }).json()
    resp = client.post("/reviews", headers=client_headers, json={"appointment_id": appt["id"], "rating": 5})
    assert resp.status_code == 409


def test_cannot_review_someone_elses_visit(client, admin_headers, client_headers, other_client_headers, manicure):
    appt = booked_and_completed(client, admin_headers, client_headers, manicure["id"])
    resp = client.post("/reviews", headers=other_client_headers, json={"appointment_id": appt["id"], "rating": 1})
    assert resp.status_code == 403


def test_rating_range(client, admin_headers, client_headers, manicure):
    appt = booked_and_completed(client, admin_headers, client_headers, manicure["id"])
    resp = client.post("/reviews", headers=client_headers, json={"appointment_id": appt["id"], "rating": 6})
    assert resp.status_code == 422


def test_waitlist(client, admin_headers, client_headers, other_client_headers, manicure):
    resp = client.post("/waitlist", headers=client_headers, json={"date": NEXT_MONDAY.isoformat(), "service_id": manicure["id"]})
    assert resp.status_code == 201
    entry = resp.json()
    assert entry["service_name"] == "Manicure"
    assert entry["client_email"] == "ana@example.com"

    dup = client.post("/waitlist", headers=client_headers, json={"date": NEXT_MONDAY.isoformat(), "service_id": manicure["id"]})
    assert dup.status_code == 409

    past = client.post("/waitlist", headers=client_headers, json={"date": "2026-03-04"})
    assert past.status_code == 422

    listed = client.get("/waitlist", params={"date": NEXT_MONDAY.isoformat()}, headers=admin_headers).json()
    assert [e["id"] for e in listed] == [entry["id"]]
    assert client.get("/waitlist", params={"date": NEXT_MONDAY.isoformat()}, headers=client_headers).status_code == 403

    assert [e["id"] for e in client.get("/clients/me/waitlist", headers=client_headers).json()] == [entry["id"]]

    assert client.delete(f"/waitlist/{entry['id']}", headers=other_client_headers).status_code == 403
    assert client.delete(f"/waitlist/{entry['id']}", headers=client_headers).status_code == 204
    assert client.get("/clients/me/waitlist", headers=client_headers).json() == []
