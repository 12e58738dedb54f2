"""Tests for the REST API — board queries, cache transfers, player, control."""

import unittest

from fastapi.testclient import TestClient

from geocoin.api.app import create_app
from geocoin.storage.kv import InMemoryStore
from tests.helpers.game_fixture import ScriptedLuck, make_ledger, spawn_values


def _client() -> TestClient:
    values = spawn_values(3, -2, 4)
    values.update(spawn_values(0, 0, 2))
    ledger = make_ledger(ScriptedLuck(values), store=InMemoryStore())
    return TestClient(create_app(ledger=ledger))


class TestBoardRoutes(unittest.TestCase):
    def setUp(self):
        self.client = _client().__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_cell_lookup(self):
        r = self.client.get("/api/v1/board/cell", params={"lat": 0.00005, "lng": 0.00005})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["cell"], {"i": 0, "j": 0})
        self.assertTrue(body["has_cache"])
        self.assertEqual(body["bounds"]["top_left"], {"lat": 0.0, "lng": 0.0})

    def test_near_defaults_to_player(self):
        r = self.client.get("/api/v1/board/near", params={"radius": 1})
        body = r.json()
        self.assertEqual(body["center"], {"i": 0, "j": 0})
        self.assertEqual(len(body["cells"]), 9)

    def test_near_rejects_negative_radius(self):
        r = self.client.get("/api/v1/board/near", params={"radius": -1})
        self.assertEqual(r.status_code, 422)

    def test_cell_rejects_non_finite_point(self):
        r = self.client.get("/api/v1/board/cell", params={"lat": "nan", "lng": "0"})
        self.assertEqual(r.status_code, 422)
        self.assertEqual(r.json()["detail"][0]["loc"], ["query", "lat"])


class TestCacheRoutes(unittest.TestCase):
    def setUp(self):
        self.client = _client().__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_list_caches(self):
        body = self.client.get("/api/v1/caches").json()
        self.assertEqual(body["anchor"], {"i": 0, "j": 0})
        self.assertEqual([c["cell"] for c in body["caches"]], [{"i": 0, "j": 0}])
        self.assertFalse(body["caches"][0]["opened"])

    def test_open_cache(self):
        body = self.client.get("/api/v1/caches/3/-2").json()
        self.assertEqual(body["active_count"], 4)
        self.assertEqual([t["label"] for t in body["contents"]], ["3:-2#0", "3:-2#1", "3:-2#2", "3:-2#3"])

    def test_open_cache_counts_agree_after_transfers(self):
        self.client.post("/api/v1/caches/3/-2/collect")
        self.client.post("/api/v1/caches/3/-2/deposit")
        self.client.post("/api/v1/caches/3/-2/collect")
        body = self.client.get("/api/v1/caches/3/-2").json()
        self.assertEqual(body["active_count"], len(body["contents"]))
        self.assertEqual((body["minted"], body["deposited"]), (4, 1))
        self.assertEqual(body["active_count"], 3)

    def test_missing_cache_is_404(self):
        self.assertEqual(self.client.get("/api/v1/caches/9/9").status_code, 404)
        self.assertEqual(self.client.post("/api/v1/caches/9/9/collect").status_code, 404)

    def test_collect_then_deposit(self):
        r = self.client.post("/api/v1/caches/3/-2/collect")
        body = r.json()
        self.assertTrue(body["changed"])
        self.assertEqual(body["token"]["label"], "3:-2#3")
        self.assertEqual(body["coin_count"], 1)
        self.assertEqual(len(body["contents"]), 3)

        body = self.client.post("/api/v1/caches/0/0/deposit").json()
        self.assertEqual(body["token"]["label"], "3:-2#3")
        self.assertEqual(body["coin_count"], 0)
        self.assertEqual(len(body["contents"]), 3)

    def test_deposit_with_empty_inventory(self):
        body = self.client.post("/api/v1/caches/3/-2/deposit").json()
        self.assertFalse(body["changed"])
        self.assertIsNone(body["token"])

    def test_locate(self):
        body = self.client.get("/api/v1/tokens/locate", params={"i": 3, "j": -2, "serial": 1}).json()
        self.assertEqual(body["cell"], {"i": 3, "j": -2})


class TestPlayerRoutes(unittest.TestCase):
    def setUp(self):
        self.client = _client().__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_step_and_player(self):
        self.client.post("/api/v1/player/step/north")
        body = self.client.get("/api/v1/player").json()
        self.assertAlmostEqual(body["position"]["lat"], 1e-4)
        self.assertEqual(len(body["history"]), 1)
        self.assertEqual(body["status"], "0 points accumulated, 0 coins collected")

    def test_bad_direction(self):
        self.assertEqual(self.client.post("/api/v1/player/step/up").status_code, 422)

    def test_move_and_sensor(self):
        self.client.post("/api/v1/player/move", json={"lat": 1.0, "lng": 2.0})
        body = self.client.post("/api/v1/player/sensor", json={"lat": 1.5, "lng": 2.5}).json()
        self.assertEqual(body["position"], {"lat": 1.5, "lng": 2.5})
        self.assertEqual(len(body["history"]), 2)

    def test_out_of_range_move_rejected(self):
        r = self.client.post("/api/v1/player/move", json={"lat": 91.0, "lng": 0.0})
        self.assertEqual(r.status_code, 422)
        self.assertEqual(self.client.get("/api/v1/player").json()["history"], [])

    def test_non_finite_move_rejected(self):
        for raw in ('{"lat": Infinity, "lng": 0}', '{"lat": 0, "lng": NaN}'):
            r = self.client.post(
                "/api/v1/player/sensor",
                content=raw,
                headers={"content-type": "application/json"},
            )
            self.assertEqual(r.status_code, 422)
        body = self.client.get("/api/v1/player").json()
        self.assertEqual(body["position"], {"lat": 0.0, "lng": 0.0})
        self.assertEqual(self.client.get("/api/v1/board/near", params={"radius": 1}).status_code, 200)

    def test_sensor_error_once(self):
        first = self.client.post("/api/v1/player/sensor/error", json={"reason": "denied"}).json()
        second = self.client.post("/api/v1/player/sensor/error", json={"reason": "denied"}).json()
        self.assertTrue(first["reported"])
        self.assertFalse(second["reported"])


class TestControlRoutes(unittest.TestCase):
    def setUp(self):
        self.client = _client().__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_reset_requires_confirm(self):
        self.client.post("/api/v1/caches/3/-2/collect")
        body = self.client.post("/api/v1/control/reset").json()
        self.assertEqual(body["status"], "noop")
        self.assertEqual(self.client.get("/api/v1/player").json()["coin_count"], 1)

        body = self.client.post("/api/v1/control/reset", params={"confirm": True}).json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(self.client.get("/api/v1/player").json()["coin_count"], 0)

    def test_rebuild(self):
        body = self.client.post("/api/v1/control/rebuild").json()
        self.assertEqual(body["status"], "ok")

    def test_config(self):
        body = self.client.get("/api/v1/config").json()
        self.assertEqual(body["cache_policy"], "regenerate")
        self.assertEqual(body["area_size"], 1)

    def test_events(self):
        self.client.post("/api/v1/caches/3/-2/collect")
        events = self.client.get("/api/v1/events").json()["events"]
        self.assertEqual(events[-1]["category"], "collect")
        self.assertEqual(events[-1]["cell"], {"i": 3, "j": -2})
