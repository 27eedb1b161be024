import list_slots
from conftest import API, CASE_ID, QUEUE_ID, FakeResponse


def test_list_slots_never_reserves(monkeypatch, session, profile_payload, capsys):
    session.add("GET", f"{API}/reserve", FakeResponse(200, profile_payload))
    session.add("GET", f"{API}/dates", FakeResponse(200, ["2022-01-10"]))
    session.add(
        "GET",
        f"{API}/2022-01-10/slots",
        FakeResponse(200, [{"id": 11, "date": "2022-01-10T09:00"}]),
    )
    monkeypatch.setattr(list_slots, "new_session", lambda: session)
    monkeypatch.setattr("utils.time.sleep", lambda seconds: None)

    list_slots.main(CASE_ID, QUEUE_ID, "secret-token")

    out = capsys.readouterr().out
    assert "Jan Kowalski" in out
    assert "2022-01-10T09:00" in out
    assert "11" in out
    assert session.urls("POST") == []


def test_list_slots_without_slots(monkeypatch, session, profile_payload, capsys):
    session.add("GET", f"{API}/reserve", FakeResponse(200, profile_payload))
    session.add("GET", f"{API}/dates", FakeResponse(200, []))
    monkeypatch.setattr(list_slots, "new_session", lambda: session)
    monkeypatch.setattr("utils.time.sleep", lambda seconds: None)

    list_slots.main(CASE_ID, QUEUE_ID, "secret-token")

    assert "No slots available." in capsys.readouterr().out
