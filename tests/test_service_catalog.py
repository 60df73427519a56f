"""Tests for the service catalog: ordering, transactional bulk replace, delete."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from app.core.errors import CatalogUpdateFailed, ServiceNotFound
from app.models import Service
from app.schemas.catalog import ServiceUpsert
from app.services.catalog import ServiceCatalogStore
from app.services.seed import DEFAULT_SERVICES
from tests.support import API, ApiTestCase, StoreTestCase


def _snapshot(session) -> list[tuple]:
    return [
        (s.id, s.name, s.title, s.display_order)
        for s in session.query(Service).order_by(Service.id).all()
    ]


class TestServiceCatalogStore(StoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.db.add_all(
            [
                Service(id=1, name="Alpha", title="alpha", display_order=2),
                Service(id=2, name="Beta", title="beta", display_order=1),
            ]
        )
        self.db.commit()
        self.store = ServiceCatalogStore(self.db)

    def test_list_ordered_by_display_order(self) -> None:
        self.assertEqual([s.name for s in self.store.list_all()], ["Beta", "Alpha"])

    def test_bulk_replace_updates_and_inserts(self) -> None:
        applied = self.store.bulk_replace(
            [
                ServiceUpsert(id=1, name="Alpha v2", title="alpha2", display_order=3),
                ServiceUpsert(name="Gamma", title="gamma", display_order=0),
                ServiceUpsert(id=50, name="Delta", title="delta", display_order=4),
            ]
        )
        self.assertEqual(applied, 3)
        names = [s.name for s in self.store.list_all()]
        self.assertEqual(names, ["Gamma", "Beta", "Alpha v2", "Delta"])
        self.assertEqual(self.db.get(Service, 50).title, "delta")

    def test_bulk_replace_overwrites_every_field(self) -> None:
        self.store.bulk_replace([ServiceUpsert(id=2, name="Beta")])
        beta = self.db.get(Service, 2)
        self.assertIsNone(beta.title)
        self.assertIsNone(beta.display_order)

    def test_failure_midway_rolls_back_everything(self) -> None:
        before = _snapshot(self.db)
        real_flush = self.db.flush
        calls = {"n": 0}

        def flaky_flush(*args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise OperationalError("UPDATE services", {}, Exception("disk I/O error"))
            return real_flush(*args, **kwargs)

        items = [
            ServiceUpsert(id=1, name="Changed", title="changed", display_order=9),
            ServiceUpsert(id=2, name="Changed too", title="changed-too", display_order=8),
            ServiceUpsert(name="New", title="new", display_order=7),
        ]
        with patch.object(self.db, "flush", side_effect=flaky_flush):
            with self.assertRaises(CatalogUpdateFailed):
                self.store.bulk_replace(items)

        with self.SessionTesting() as fresh:
            self.assertEqual(_snapshot(fresh), before)
        self.assertEqual(_snapshot(self.db), before)

    def test_insert_without_id_after_explicit_id(self) -> None:
        self.store.bulk_replace(
            [
                ServiceUpsert(id=3, name="Explicit", title="explicit", display_order=3),
                ServiceUpsert(name="Assigned", title="assigned", display_order=4),
            ]
        )
        self.store.bulk_replace([ServiceUpsert(name="Later", title="later", display_order=5)])
        ids = [row[0] for row in _snapshot(self.db)]
        self.assertEqual(ids, [1, 2, 3, 4, 5])

    def test_delete(self) -> None:
        self.store.delete(1)
        self.assertIsNone(self.db.get(Service, 1))

    def test_delete_missing(self) -> None:
        before = _snapshot(self.db)
        with self.assertRaises(ServiceNotFound):
            self.store.delete(999)
        self.assertEqual(_snapshot(self.db), before)


class TestIdSequenceSync(unittest.TestCase):
    """On Postgres, explicit-id inserts must push the id sequence forward in the same transaction."""

    def _store(self, dialect: str) -> tuple[ServiceCatalogStore, MagicMock]:
        session = MagicMock()
        session.get.return_value = None
        session.get_bind.return_value.dialect.name = dialect
        return ServiceCatalogStore(session), session

    @staticmethod
    def _setval_calls(session: MagicMock) -> list:
        return [c for c in session.execute.call_args_list if "setval" in str(c.args[0])]

    def test_explicit_id_insert_syncs_sequence_before_commit(self) -> None:
        store, session = self._store("postgresql")
        order = []
        session.execute.side_effect = lambda *a, **k: order.append("execute")
        session.commit.side_effect = lambda: order.append("commit")

        store.bulk_replace([ServiceUpsert(id=50, name="Delta", title="delta")])

        self.assertEqual(len(self._setval_calls(session)), 1)
        self.assertIn("pg_get_serial_sequence('services', 'id')", str(session.execute.call_args.args[0]))
        self.assertEqual(order, ["execute", "commit"])

    def test_insert_without_id_leaves_sequence_alone(self) -> None:
        store, session = self._store("postgresql")
        store.bulk_replace([ServiceUpsert(name="Gamma", title="gamma")])
        self.assertEqual(self._setval_calls(session), [])

    def test_sqlite_never_touches_sequence(self) -> None:
        store, session = self._store("sqlite")
        store.bulk_replace([ServiceUpsert(id=50, name="Delta", title="delta")])
        session.execute.assert_not_called()


class TestServiceCatalogApi(ApiTestCase):
    def _snapshot(self) -> list[tuple]:
        with self.SessionTesting() as db:
            return _snapshot(db)

    def test_list_seeded_services(self) -> None:
        resp = self.client.get(f"{API}/services", headers=self.bearer(self.login()))
        self.assertEqual(resp.status_code, 200)
        services = resp.json()
        self.assertEqual(len(services), len(DEFAULT_SERVICES))
        orders = [s["display_order"] for s in services]
        self.assertEqual(orders, sorted(orders))

    def test_list_requires_token(self) -> None:
        self.assertEqual(self.client.get(f"{API}/services").status_code, 401)

    def test_admin_bulk_replace(self) -> None:
        headers = self.bearer(self.login())
        services = self.client.get(f"{API}/services", headers=headers).json()
        services[0]["name"] = "Renamed"
        services.append({"name": "Brand New", "title": "brandnew", "display_order": 99})
        resp = self.client.put(f"{API}/services", json=services, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)

        after = self.client.get(f"{API}/services", headers=headers).json()
        self.assertEqual(after[0]["name"], "Renamed")
        self.assertEqual(after[-1]["name"], "Brand New")

    def test_non_admin_post_is_403_and_catalog_unchanged(self) -> None:
        before = self._snapshot()
        resp = self.client.post(
            f"{API}/services",
            json=[{"id": 1, "name": "Hijacked", "title": "x", "display_order": 1}],
            headers=self.bearer(self.user_token()),
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self._snapshot(), before)

    def test_invalid_item_is_400(self) -> None:
        resp = self.client.put(
            f"{API}/services", json=[{"title": "no-name"}], headers=self.bearer(self.login())
        )
        self.assertEqual(resp.status_code, 400)

    def test_delete_missing_service(self) -> None:
        before = self._snapshot()
        resp = self.client.delete(f"{API}/services/9999", headers=self.bearer(self.login()))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "ServiceNotFound")
        self.assertEqual(self._snapshot(), before)

    def test_delete_service(self) -> None:
        resp = self.client.delete(f"{API}/services/1", headers=self.bearer(self.login()))
        self.assertEqual(resp.status_code, 200)
        self.assertNotIn(1, [row[0] for row in self._snapshot()])


if __name__ == "__main__":
    unittest.main()
