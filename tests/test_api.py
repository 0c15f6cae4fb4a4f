"""
HTTP tests for the v1 API.
"""

import tempfile
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from club_points.app.main import create_app
from club_points.app.schemas.event import default_events
from club_points.app.services.roster_service import RosterService

API = "/api/v1"


def add_member(client: TestClient, name: str) -> dict:
    response = client.post(f"{API}/members/", json={"name": name})
    assert response.status_code == 201
    return response.json()


class TestMembersApi:
    def test_add_and_list(self, client):
        ayse = add_member(client, "Ayse")
        assert ayse["points"] == 0
        assert ayse["history"] == []
        response = client.get(f"{API}/members/")
        assert response.status_code == 200
        assert [m["name"] for m in response.json()] == ["Ayse"]

    def test_blank_name_is_422(self, client):
        response = client.post(f"{API}/members/", json={"name": "  "})
        assert response.status_code == 422
        assert response.json()["detail"] == "Name must not be empty"
        assert client.get(f"{API}/members/").json() == []

    def test_get_and_delete(self, client):
        ayse = add_member(client, "Ayse")
        assert client.get(f"{API}/members/{ayse['id']}").json()["name"] == "Ayse"
        assert client.delete(f"{API}/members/{ayse['id']}").status_code == 204
        assert client.get(f"{API}/members/{ayse['id']}").status_code == 404
        assert client.delete(f"{API}/members/{ayse['id']}").status_code == 404

    def test_award_with_selected_event(self, client):
        ayse = add_member(client, "Ayse")
        response = client.post(f"{API}/members/{ayse['id']}/points")
        assert response.status_code == 200
        body = response.json()
        assert body["points"] == 4
        assert body["history"][0]["event_name"] == "University"

    def test_award_with_explicit_event(self, client):
        ayse = add_member(client, "Ayse")
        karaoke = next(e for e in client.get(f"{API}/events/").json() if e["name"] == "Karaoke")
        response = client.post(f"{API}/members/{ayse['id']}/points", json={"event_id": karaoke["id"]})
        assert response.json()["points"] == 1

    def test_award_with_unknown_event_is_404(self, client):
        ayse = add_member(client, "Ayse")
        response = client.post(f"{API}/members/{ayse['id']}/points", json={"event_id": str(uuid4())})
        assert response.status_code == 404

    def test_award_without_events_is_422(self, client):
        for event in client.get(f"{API}/events/").json():
            client.delete(f"{API}/events/{event['id']}")
        ayse = add_member(client, "Ayse")
        response = client.post(f"{API}/members/{ayse['id']}/points")
        assert response.status_code == 422
        assert response.json()["detail"] == "No event selected"

    def test_history_deletion(self, client):
        ayse = add_member(client, "Ayse")
        events = client.get(f"{API}/events/").json()
        for event in events:
            client.post(f"{API}/members/{ayse['id']}/points", json={"event_id": event["id"]})
        history = client.get(f"{API}/members/{ayse['id']}/history").json()
        assert [h["points"] for h in history] == [1, 2, 3, 4]

        response = client.delete(f"{API}/members/{ayse['id']}/history/0")
        assert response.json()["points"] == 9

        response = client.post(f"{API}/members/{ayse['id']}/history/delete", json={"indices": [0, 2]})
        body = response.json()
        assert body["points"] == 3
        assert [h["event_name"] for h in body["history"]] == ["Gathering"]

    def test_history_index_out_of_range_is_422(self, client):
        ayse = add_member(client, "Ayse")
        response = client.delete(f"{API}/members/{ayse['id']}/history/0")
        assert response.status_code == 422

    def test_reset(self, client):
        ayse = add_member(client, "Ayse")
        client.post(f"{API}/members/{ayse['id']}/points")
        response = client.post(f"{API}/members/reset")
        assert response.status_code == 200
        assert [(m["name"], m["points"], m["history"]) for m in response.json()] == [("Ayse", 0, [])]
        assert len(client.get(f"{API}/events/").json()) == 4


class TestEventsApi:
    def test_seeded_events(self, client):
        names = [e["name"] for e in client.get(f"{API}/events/").json()]
        assert names == ["University", "Gathering", "Symposium", "Karaoke"]

    def test_create_event(self, client):
        response = client.post(f"{API}/events/", json={"name": "Concert", "points": "5", "emoji": "🎸"})
        assert response.status_code == 201
        event = response.json()
        assert (event["name"], event["points"], event["emoji"]) == ("Concert", 5, "🎸")
        assert client.get(f"{API}/events/{event['id']}").status_code == 200

    @pytest.mark.parametrize("payload", [{"name": "Concert", "points": "five"}, {"name": "", "points": "5"}])
    def test_invalid_event_is_422(self, client, payload):
        assert client.post(f"{API}/events/", json=payload).status_code == 422
        assert len(client.get(f"{API}/events/").json()) == 4

    def test_selection(self, client):
        events = client.get(f"{API}/events/").json()
        assert client.get(f"{API}/events/selected").json()["id"] == events[0]["id"]
        response = client.put(f"{API}/events/selected", json={"event_id": events[3]["id"]})
        assert response.status_code == 200
        assert client.get(f"{API}/events/selected").json()["name"] == "Karaoke"
        assert client.put(f"{API}/events/selected", json={"event_id": str(uuid4())}).status_code == 404

    def test_delete_event_keeps_history(self, client):
        ayse = add_member(client, "Ayse")
        event = client.post(f"{API}/events/", json={"name": "Concert", "points": "5"}).json()
        client.post(f"{API}/members/{ayse['id']}/points", json={"event_id": event["id"]})
        assert client.delete(f"{API}/events/{event['id']}").status_code == 204
        member = client.get(f"{API}/members/{ayse['id']}").json()
        assert member["points"] == 5
        assert member["history"][0]["event_name"] == "Concert"

    def test_emoji_palette(self, client):
        palette = client.get(f"{API}/events/emojis").json()
        assert len(palette) == 10
        assert palette[0] == "⭐"


class TestRankingApi:
    def test_ranking_order_and_medals(self, client):
        events = {e["name"]: e["id"] for e in client.get(f"{API}/events/").json()}
        a, b, c = add_member(client, "A"), add_member(client, "B"), add_member(client, "C")
        client.post(f"{API}/members/{a['id']}/points", json={"event_id": events["Gathering"]})
        client.post(f"{API}/members/{b['id']}/points", json={"event_id": events["University"]})
        client.post(f"{API}/members/{c['id']}/points", json={"event_id": events["Gathering"]})
        rows = client.get(f"{API}/ranking/").json()
        assert [(r["rank"], r["medal"], r["name"], r["points"]) for r in rows] == [
            (1, "🥇", "B", 4),
            (2, "🥈", "A", 3),
            (3, "🥉", "C", 3),
        ]

    def test_export_download(self, client):
        ayse = add_member(client, "Ayse")
        add_member(client, "Mehmet")
        client.post(f"{API}/members/{ayse['id']}/points")
        response = client.get(f"{API}/ranking/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "Kulup_Siralama.csv" in response.headers["content-disposition"]
        assert response.text.splitlines() == ["Sira,Isim,Toplam Puan", "1,Ayse,4", "2,Mehmet,0"]

    def test_export_directory_removed_after_download(self, client, monkeypatch, tmp_path):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
        add_member(client, "Ayse")
        for _ in range(3):
            response = client.get(f"{API}/ranking/export")
            assert response.status_code == 200
            assert response.text.startswith("Sira,Isim,Toplam Puan")
        assert list(tmp_path.glob("club_points_*")) == []


class TestPersistenceFailureApi:
    def test_failed_save_is_503(self, broken_storage):
        roster = RosterService(broken_storage, events=default_events())
        with TestClient(create_app(roster)) as client:
            response = client.post(f"{API}/members/", json={"name": "Ayse"})
            assert response.status_code == 503
            assert response.json()["detail"].startswith("Change applied but not saved")
            assert [m["name"] for m in client.get(f"{API}/members/").json()] == ["Ayse"]
