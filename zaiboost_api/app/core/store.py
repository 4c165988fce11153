"""
In-memory ledger mirrored to a single JSON snapshot file.

The ``Ledger`` owns the users, catalog, orders and reviews collections
and the id counters.  Every mutation goes through
``Ledger.transaction()``, which holds one process-wide lock for the
change and the full-snapshot write that follows it.  Writing is
delegated to a ``SnapshotWriter``; production uses ``JsonFileWriter``,
tests use ``MemoryWriter``.

If a snapshot write fails the in-memory state is not rolled back and
the error propagates to the caller.

Module level helpers ``init_store`` / ``get_ledger`` / ``set_ledger``
manage the ledger instance shared by the API.
"""

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from ..models import (
    CatalogItem,
    Order,
    OrderUpdate,
    Review,
    Snapshot,
    User,
)
from .config import settings

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


class SnapshotWriter:
    """Persistence strategy for ledger snapshots."""

    def read(self) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def write(self, data: Dict[str, Any]) -> None:
        raise NotImplementedError


class JsonFileWriter(SnapshotWriter):
    """Reads and overwrites one JSON document on disk."""

    def __init__(self, path: str):
        self.path = Path(path)

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        # A corrupt file is not handled here; the error surfaces at startup.
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)


class MemoryWriter(SnapshotWriter):
    """Keeps the last snapshot in memory."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data = initial
        self.writes = 0

    def read(self) -> Optional[Dict[str, Any]]:
        return self.data

    def write(self, data: Dict[str, Any]) -> None:
        self.data = data
        self.writes += 1


class Ledger:
    """Authoritative store of users, catalog items, orders and reviews."""

    def __init__(self, writer: SnapshotWriter):
        self.writer = writer
        self._lock = threading.RLock()
        raw = writer.read()
        self._state = Snapshot.model_validate(raw) if raw is not None else Snapshot()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self._state.model_dump(mode="json")

    def persist(self) -> None:
        with self._lock:
            self.writer.write(self.snapshot())

    @contextmanager
    def transaction(self) -> Iterator[Snapshot]:
        """Hold the ledger lock for a mutation and persist when it finishes."""
        with self._lock:
            yield self._state
            self.persist()

    def _next_id(self, collection: str) -> int:
        value = getattr(self._state.counters, collection) + 1
        setattr(self._state.counters, collection, value)
        return value

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def seed_catalog(self, items: List[Dict[str, Any]]) -> int:
        """Populate the catalog from ``items`` if it is empty."""
        with self._lock:
            if self._state.services:
                return 0
            with self.transaction() as state:
                for item in items:
                    state.services.append(CatalogItem(id=self._next_id("services"), **item))
            logger.info("Seeded %d catalog services", len(items))
            return len(items)

    def seed_admin(self, password_hash: str) -> Optional[User]:
        """Create the ``admin`` user if it does not exist yet."""
        with self._lock:
            if self.find_user_by_username(ADMIN_USERNAME):
                return None
            return self.add_user(ADMIN_USERNAME, password_hash, role="admin")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def add_user(self, username: str, password_hash: str, role: str = "customer") -> User:
        with self.transaction() as state:
            user = User(
                id=self._next_id("users"),
                username=username,
                password=password_hash,
                role=role,
            )
            state.users.append(user)
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return next((u for u in self._state.users if u.id == user_id), None)

    def find_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._state.users if u.username == username), None)

    def list_users(self) -> List[User]:
        return list(self._state.users)

    def set_user_password(self, user_id: int, password_hash: str) -> User:
        with self.transaction():
            user = self.get_user(user_id)
            if user is None:
                raise KeyError(user_id)
            user.password = password_hash
        return user

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_services(self) -> List[CatalogItem]:
        return list(self._state.services)

    def get_service(self, service_id: int) -> Optional[CatalogItem]:
        return next((s for s in self._state.services if s.id == service_id), None)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def add_order(self, **fields: Any) -> Order:
        with self.transaction() as state:
            order = Order(id=self._next_id("orders"), **fields)
            state.orders.append(order)
        return order

    def get_order(self, order_id: int) -> Optional[Order]:
        return next((o for o in self._state.orders if o.id == order_id), None)

    def list_orders(self, user_id: Optional[int] = None) -> List[Order]:
        if user_id is None:
            return list(self._state.orders)
        return [o for o in self._state.orders if o.user_id == user_id]

    def update_order(self, order_id: int, update: OrderUpdate) -> Optional[Order]:
        """Apply the set fields of ``update``; ``None`` if the order is unknown."""
        with self._lock:
            order = self.get_order(order_id)
            if order is None:
                return None
            with self.transaction():
                for field, value in update.model_dump(exclude_none=True).items():
                    setattr(order, field, value)
            return order

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------
    def add_review(self, user_id: int, rating: int, comment: str, order_id: Optional[int] = None) -> Review:
        with self.transaction() as state:
            review = Review(
                id=self._next_id("reviews"),
                order_id=order_id,
                user_id=user_id,
                rating=rating,
                comment=comment,
            )
            state.reviews.append(review)
        return review

    def recent_reviews(self, limit: int = 10) -> List[Review]:
        """The last ``limit`` reviews by insertion order, newest first."""
        return list(reversed(self._state.reviews[-limit:])) if limit > 0 else []


# ---------------------------------------------------------------------------
# Shared ledger instance
# ---------------------------------------------------------------------------

_ledger: Optional[Ledger] = None


def get_data_path() -> str:
    """Resolve ``settings.data_path`` against the project root if relative."""
    data_path = settings.data_path
    if os.path.isabs(data_path):
        return data_path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / data_path).resolve())


def set_ledger(ledger: Optional[Ledger]) -> None:
    global _ledger
    _ledger = ledger


def get_ledger() -> Ledger:
    if _ledger is None:
        raise RuntimeError("Ledger is not initialised; call init_store() first")
    return _ledger


def init_store(writer: Optional[SnapshotWriter] = None) -> Ledger:
    """Load the ledger, seed the catalog and the default admin.

    Uses a ``JsonFileWriter`` on :func:`get_data_path` unless a writer is
    given.  The created ledger becomes the shared instance.
    """
    from .security import hash_password

    if writer is None:
        writer = JsonFileWriter(get_data_path())
    ledger = Ledger(writer)
    ledger.seed_catalog(DEFAULT_CATALOG)
    if ledger.seed_admin(hash_password(settings.admin_password)):
        logger.warning(
            "Default admin created -> username: %s | password: %s. Change it with reset_password.py",
            ADMIN_USERNAME,
            settings.admin_password,
        )
    set_ledger(ledger)
    return ledger


DEFAULT_CATALOG: List[Dict[str, Any]] = [
    {"game": "genshin", "category": "daily", "name": "Genshin: Paket Mingguan (7 Hari)", "description": "Daily Commission + Resin + Event + Battle Pass Daily", "price_base": 0, "price_per_unit": 5000, "unit_name": "hari"},
    {"game": "genshin", "category": "daily", "name": "Genshin: Paket Bulanan (30 Hari)", "description": "Full Maintenance: Daily + Resin + Event + BP + Weekly Boss", "price_base": 0, "price_per_unit": 4000, "unit_name": "hari"},
    {"game": "genshin", "category": "explore", "name": "Genshin: Mondstadt 100%", "description": "Eksplorasi wilayah Mondstadt per 1% progress", "price_base": 0, "price_per_unit": 2500, "unit_name": "%"},
    {"game": "genshin", "category": "explore", "name": "Genshin: Liyue 100%", "description": "Eksplorasi wilayah Liyue per 1% progress", "price_base": 0, "price_per_unit": 3000, "unit_name": "%"},
    {"game": "genshin", "category": "explore", "name": "Genshin: Inazuma 100%", "description": "Eksplorasi wilayah Inazuma per 1% progress", "price_base": 0, "price_per_unit": 3500, "unit_name": "%"},
    {"game": "genshin", "category": "explore", "name": "Genshin: Sumeru 100%", "description": "Eksplorasi wilayah Sumeru per 1% progress", "price_base": 0, "price_per_unit": 4500, "unit_name": "%"},
    {"game": "genshin", "category": "explore", "name": "Genshin: Fontaine 100%", "description": "Eksplorasi wilayah Fontaine per 1% progress", "price_base": 0, "price_per_unit": 4000, "unit_name": "%"},
    {"game": "genshin", "category": "explore", "name": "Genshin: Natlan 100%", "description": "Eksplorasi wilayah Natlan per 1% progress", "price_base": 0, "price_per_unit": 5000, "unit_name": "%"},
    {"game": "genshin", "category": "endgame", "name": "Genshin: Spiral Abyss (36 Stars)", "description": "Full Clear Floor 9-12 dengan 36 Bintang (Garansi)", "price_base": 60000, "price_per_unit": 0, "unit_name": "clear"},
    {"game": "genshin", "category": "endgame", "name": "Genshin: Imaginarium Theater (Visionary)", "description": "Full Clear Mode Visionary / Hard Mode", "price_base": 50000, "price_per_unit": 0, "unit_name": "clear"},
    {"game": "wuwa", "category": "daily", "name": "WuWa: Daily Maintenance (7 Hari)", "description": "Daily Activity + Waveplates + Echo Farming + BP", "price_base": 0, "price_per_unit": 6000, "unit_name": "hari"},
    {"game": "wuwa", "category": "daily", "name": "WuWa: Monthly Maintenance (30 Hari)", "description": "Full Maintenance: Daily + Waveplates + BP + Events", "price_base": 0, "price_per_unit": 5000, "unit_name": "hari"},
    {"game": "wuwa", "category": "explore", "name": "WuWa: Jinzhou 100%", "description": "Eksplorasi wilayah Jinzhou per 1% progress", "price_base": 0, "price_per_unit": 3000, "unit_name": "%"},
    {"game": "wuwa", "category": "explore", "name": "WuWa: Central Plains 100%", "description": "Eksplorasi wilayah Central Plains per 1% progress", "price_base": 0, "price_per_unit": 3500, "unit_name": "%"},
    {"game": "wuwa", "category": "explore", "name": "WuWa: Mt. Firmament 100%", "description": "Eksplorasi wilayah Mt. Firmament per 1% progress", "price_base": 0, "price_per_unit": 5500, "unit_name": "%"},
    {"game": "wuwa", "category": "explore", "name": "WuWa: Black Shores 100%", "description": "Eksplorasi wilayah Black Shores per 1% progress", "price_base": 0, "price_per_unit": 6000, "unit_name": "%"},
    {"game": "wuwa", "category": "endgame", "name": "WuWa: Tower of Adversity (30/30 Stars)", "description": "Full Clear Hazard Zone dengan 30 Bintang (Garansi)", "price_base": 75000, "price_per_unit": 0, "unit_name": "clear"},
    {"game": "wuwa", "category": "endgame", "name": "WuWa: Hologram Calamity (Difficulty 6)", "description": "Clear Hologram Strategy Difficulty 6 (Per Boss)", "price_base": 30000, "price_per_unit": 0, "unit_name": "boss"},
]
