from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine

from medbook.database import create_db_and_tables, get_session
from medbook.db.models import Doctor, Patient, Schedule, Service
from medbook.main import app

from conftest import next_weekday

PHONE = "+15550001"


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(
        f"sqlite:///{tmp_path / 'api.db'}",
        connect_args={"check_same_thread": False},
    )
    create_db_and_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def client(engine):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed(engine):
    with Session(engine) as session:
        doctor = Doctor(name="Dr. Rao", phone=PHONE, specialty="Dentistry")
        other = Doctor(name="Dr. Other", phone="+15550002")
        patient = Patient(name="Asha", user_id="user-1")
        session.add_all([doctor, other, patient])
        session.commit()
        session.add(Schedule(doctor_id=doctor.id, day_of_week=1, start_time="09:00", end_time="12:00"))
        session.add(Service(doctor_id=doctor.id, name="Cleaning", duration=45, price=50.0))
        session.add(Service(doctor_id=doctor.id, name="archived", duration=30, is_active=False))
        session.commit()
        return {"doctor_id": doctor.id, "other_id": other.id, "patient_id": patient.id}


def _book(client, seed, day, time="10:30", **extra):
    body = {"doctorPhone": PHONE, "patientId": seed["patient_id"], "date": day.isoformat(), "time": time}
    body.update(extra)
    return client.post("/appointment/book", json=body)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_book_conflict_cancel_rebook_flow(client, seed):
    monday = next_weekday(0)

    r = _book(client, seed, monday)
    assert r.status_code == 200
    booked = r.json()
    assert booked["status"] == "PENDING"
    assert booked["date"] == monday.isoformat()
    assert booked["time"] == "10:30"
    assert booked["service"]["name"] == "General Consultation"

    r = _book(client, seed, monday)
    assert r.status_code == 409
    assert r.json() == {"success": False, "data": None, "error": "Time slot not available"}

    r = client.post("/appointment/cancel", json={"doctorPhone": PHONE, "appointmentId": booked["appointmentId"], "reason": "sick"})
    assert r.status_code == 200
    assert r.json() == {"appointmentId": booked["appointmentId"], "status": "CANCELLED"}

    assert _book(client, seed, monday).status_code == 200


def test_book_accepts_slash_dates_and_numeric_times(client, seed):
    monday = next_weekday(0)
    r = _book(client, seed, monday, time=930, date=monday.strftime("%d/%m/%Y"), dateFormat="DMY", serviceName="cleaning")
    assert r.status_code == 200
    assert r.json()["time"] == "09:30"
    assert r.json()["service"]["duration"] == 45


def test_book_validation_errors_are_400(client, seed):
    r = client.post("/appointment/book", json={"doctorPhone": PHONE, "date": "2030-01-01"})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["error"].startswith("Missing required fields")

    r = _book(client, seed, next_weekday(0), time="25:99")
    assert r.status_code == 400

    r = _book(client, seed, date.today() - timedelta(days=2))
    assert r.status_code == 400
    assert r.json()["error"] == "Cannot book appointments in the past"


def test_book_unknown_doctor_is_404(client, seed):
    r = client.post("/appointment/book", json={
        "doctorPhone": "+19999999", "patientId": seed["patient_id"],
        "date": next_weekday(0).isoformat(), "time": "10:30",
    })
    assert r.status_code == 404
    assert r.json()["error"] == "Doctor not found"


def test_reschedule_and_ownership(client, seed):
    monday = next_weekday(0)
    appt_id = _book(client, seed, monday).json()["appointmentId"]

    r = client.post("/appointment/reschedule", json={
        "doctorPhone": "+15550002", "appointmentId": appt_id, "newDate": monday.isoformat(), "newTime": "11:00",
    })
    assert r.status_code == 403

    r = client.post("/appointment/reschedule", json={
        "doctorPhone": PHONE, "appointmentId": appt_id, "newDate": monday.isoformat(), "newTime": "1100",
    })
    assert r.status_code == 200
    assert r.json() == {"appointmentId": appt_id, "status": "CONFIRMED", "date": monday.isoformat(), "time": "11:00"}

    r = client.post("/appointment/reschedule", json={
        "doctorPhone": PHONE, "appointmentId": appt_id, "newDate": monday.isoformat(), "newTime": "18:00",
    })
    assert r.status_code == 400


def test_status_update_and_fetch(client, seed):
    appt_id = _book(client, seed, next_weekday(0)).json()["appointmentId"]

    r = client.put(f"/appointment/{appt_id}/status", json={"status": "NO_SHOW"})
    assert r.status_code == 200
    assert r.json()["status"] == "NO_SHOW"

    r = client.put(f"/appointment/{appt_id}/status", json={"status": "CONFIRMED"})
    assert r.status_code == 400

    r = client.get(f"/appointment/{appt_id}")
    assert r.status_code == 200
    assert r.json()["status"] == "NO_SHOW"
    assert client.get("/appointment/missing").status_code == 404


def test_availability_endpoints(client, seed):
    monday = next_weekday(0)
    _book(client, seed, monday, time="09:00")

    r = client.post("/doctor/availability", json={"phone": PHONE, "date": monday.isoformat()})
    assert r.status_code == 200
    body = r.json()
    assert body["doctorId"] == seed["doctor_id"]
    assert [s["time"] for s in body["availableSlots"]] == ["09:30", "10:00", "10:30", "11:00", "11:30"]

    r = client.post("/doctor/available-slots", json={
        "doctorId": seed["doctor_id"],
        "startDate": monday.isoformat(),
        "endDate": (monday + timedelta(days=6)).isoformat(),
    })
    assert r.status_code == 200
    assert len(r.json()["availableSlots"]) == 5

    assert client.post("/doctor/availability", json={"phone": "+10000000", "date": monday.isoformat()}).status_code == 404
    assert client.post("/doctor/availability", json={"phone": PHONE, "date": "someday"}).status_code == 400


def test_doctor_lookup_services_and_appointments(client, seed):
    r = client.post("/doctor/by-phone", json={"phone": f" {PHONE} "})
    assert r.status_code == 200
    assert r.json()["doctor"]["name"] == "Dr. Rao"

    r = client.post("/doctor/services", json={"phone": PHONE})
    assert [s["name"] for s in r.json()["services"]] == ["Cleaning"]

    _book(client, seed, next_weekday(0))
    r = client.get(f"/doctor/{seed['doctor_id']}/appointments", params={"status": "PENDING"})
    assert r.status_code == 200
    assert len(r.json()) == 1


def test_schedule_crud(client, seed):
    doctor_id = seed["doctor_id"]
    r = client.post("/schedules", json={"doctorId": doctor_id, "dayOfWeek": 3, "startTime": "800", "endTime": "16:00"})
    assert r.status_code == 201
    entry = r.json()
    assert entry["startTime"] == "08:00"

    dup = client.post("/schedules", json={"doctorId": doctor_id, "dayOfWeek": 3, "startTime": "09:00", "endTime": "10:00"})
    assert dup.status_code == 409

    r = client.put(f"/schedules/{entry['id']}", json={"startTime": "09:00", "endTime": "13:00"})
    assert r.json()["endTime"] == "13:00"

    r = client.patch(f"/schedules/{entry['id']}/active", json={"isActive": False})
    assert r.json()["isActive"] is False

    days = [s["dayOfWeek"] for s in client.get(f"/schedules/doctor/{doctor_id}").json()]
    assert days == [1, 3]

    assert client.delete(f"/schedules/{entry['id']}").status_code == 200
    assert client.delete(f"/schedules/{entry['id']}").status_code == 404


def test_notifications_follow_transitions(client, seed):
    monday = next_weekday(0)
    doctor_id = seed["doctor_id"]
    appt_id = _book(client, seed, monday).json()["appointmentId"]
    client.post("/appointment/cancel", json={"doctorPhone": PHONE, "appointmentId": appt_id})

    r = client.get(f"/notifications/doctor/{doctor_id}")
    assert r.status_code == 200
    notes = r.json()
    assert {n["type"] for n in notes} == {"APPOINTMENT_BOOKED", "APPOINTMENT_CANCELLED"}
    assert all(n["appointmentId"] == appt_id for n in notes)

    assert client.get(f"/notifications/doctor/{doctor_id}/unread-count").json() == {"count": 2}
    assert client.post(f"/notifications/{notes[0]['id']}/read").status_code == 200
    assert client.post(f"/notifications/doctor/{doctor_id}/read-all").json() == {"updated": 1}
    assert client.get(f"/notifications/doctor/{doctor_id}", params={"unread": True}).json() == []

    assert client.delete(f"/notifications/{notes[0]['id']}").status_code == 200
    assert client.delete(f"/notifications/{notes[0]['id']}").status_code == 404
