"""
Session and Point-of-Interest Stores
Per-sender session state, message history and nearest-neighbor queries
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

import redis.asyncio as redis

from config import REDIS_URL, REDIS_POOL_MAX, get_logger
from core.errors import DuplicateSessionError
from models import GeoPoint, PointOfInterest, SessionState
from utils import haversine_distance

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@runtime_checkable
class Store(Protocol):
    """Interface the orchestrator needs from persistent storage"""

    async def find_session(self, sender: str) -> Optional[SessionState]: ...

    async def create_session(self, sender: str, city: Optional[str] = None,
                             state: Optional[str] = None, country: Optional[str] = None,
                             zip_code: Optional[str] = None) -> SessionState: ...

    async def update_active_location(self, sender: str, lat: float, lng: float) -> None: ...

    async def get_active_location(self, sender: str) -> Optional[GeoPoint]: ...

    async def query_nearest(self, lat: float, lng: float, limit: int,
                            offset: int) -> List[PointOfInterest]: ...

    async def update_cached_hours(self, point_id: str, hours_text: str) -> None: ...

    async def update_cached_name(self, point_id: str, name: str) -> None: ...

    async def record_message(self, sender: str, text: str) -> None: ...

    async def touch_last_active(self, sender: str) -> None: ...

    async def get_last_active_age(self, sender: str) -> Optional[timedelta]: ...

    async def get_page_cursor(self, sender: str) -> int: ...

    async def set_page_cursor(self, sender: str, page_no: int) -> None: ...


# ============================================
# IN-MEMORY STORE
# ============================================

class MemoryStore:
    """
    In-process store for tests and the command line demo.

    Session rows are kept as a list so duplicate rows for one sender can be
    detected the same way a relational backend would report them.
    """

    def __init__(self, now_fn: Callable[[], datetime] = _utc_now):
        self.now_fn = now_fn
        self.sessions: List[SessionState] = []
        self.messages: Dict[str, List[str]] = {}
        self.points: Dict[str, PointOfInterest] = {}

    def _rows(self, sender: str) -> List[SessionState]:
        return [s for s in self.sessions if s.sender == sender]

    def _require(self, sender: str) -> SessionState:
        rows = self._rows(sender)
        if len(rows) > 1:
            raise DuplicateSessionError(sender)
        if not rows:
            raise KeyError(f"No session for {sender}")
        return rows[0]

    async def find_session(self, sender: str) -> Optional[SessionState]:
        rows = self._rows(sender)
        if len(rows) > 1:
            raise DuplicateSessionError(sender)
        return rows[0].model_copy() if rows else None

    async def create_session(self, sender, city=None, state=None, country=None,
                             zip_code=None) -> SessionState:
        session = SessionState(
            sender=sender, city=city, state=state, country=country, zip=zip_code,
        )
        self.sessions.append(session)
        return session.model_copy()

    async def update_active_location(self, sender: str, lat: float, lng: float) -> None:
        session = self._require(sender)
        session.active_lat = lat
        session.active_lng = lng

    async def get_active_location(self, sender: str) -> Optional[GeoPoint]:
        return self._require(sender).active_location

    async def query_nearest(self, lat: float, lng: float, limit: int,
                            offset: int) -> List[PointOfInterest]:
        ranked = []
        for point in self.points.values():
            if point.lat is None or point.lng is None:
                continue
            distance = haversine_distance(lat, lng, point.lat, point.lng)
            ranked.append(point.model_copy(update={'distance': distance}))
        ranked.sort(key=lambda p: p.distance)
        return ranked[offset:offset + limit]

    async def update_cached_hours(self, point_id: str, hours_text: str) -> None:
        self.points[point_id].hours = hours_text

    async def update_cached_name(self, point_id: str, name: str) -> None:
        self.points[point_id].name = name

    async def record_message(self, sender: str, text: str) -> None:
        self.messages.setdefault(sender, []).append(text)

    async def touch_last_active(self, sender: str) -> None:
        session = self._require(sender)
        session.last_active_at = self.now_fn()
        session.is_first_contact = False

    async def get_last_active_age(self, sender: str) -> Optional[timedelta]:
        last_active = self._require(sender).last_active_at
        if last_active is None:
            return None
        return self.now_fn() - last_active

    async def get_page_cursor(self, sender: str) -> int:
        return self._require(sender).next_page_no

    async def set_page_cursor(self, sender: str, page_no: int) -> None:
        if page_no < 0:
            raise ValueError(f"page cursor must be >= 0, got {page_no}")
        self._require(sender).next_page_no = page_no

    async def add_point(self, point: PointOfInterest) -> None:
        self.points[point.id] = point

    async def close(self) -> None:
        pass


# ============================================
# REDIS STORE
# ============================================

GEO_KEY = "poi:geo"
POI_HASH = "poi:{id}"
SESSION_HASH = "session:{sender}"
SESSION_TEXTS = "session:{sender}:texts"

# GEOSEARCH needs a bounding radius; the catalogue is city-sized
SEARCH_RADIUS_MILES = 50


def _dump(x): return json.dumps(x, separators=(",", ":"), ensure_ascii=False)

def _float_or_none(v) -> Optional[float]:
    return None if v in (None, "") else float(v)


class RedisStore:
    """
    Redis-backed store.

    Layout:
    - ``session:{sender}``        hash of SessionState fields
    - ``session:{sender}:texts``  list of received messages
    - ``poi:geo``                 GEO set of point ids
    - ``poi:{id}``                hash of point fields
    """

    def __init__(self, client: Optional[redis.Redis] = None, url: str = REDIS_URL,
                 now_fn: Callable[[], datetime] = _utc_now):
        if client is None:
            client = redis.from_url(
                url,
                decode_responses=True,
                max_connections=REDIS_POOL_MAX,
                socket_connect_timeout=1.0,
                socket_timeout=1.5,
                health_check_interval=30,
                retry_on_timeout=True,
            )
        self.r = client
        self.now_fn = now_fn

    async def find_session(self, sender: str) -> Optional[SessionState]:
        h = await self.r.hgetall(SESSION_HASH.format(sender=sender))
        if not h:
            return None
        last_active = h.get("last_active_at")
        return SessionState(
            sender=sender,
            active_lat=_float_or_none(h.get("active_lat")),
            active_lng=_float_or_none(h.get("active_lng")),
            last_active_at=(datetime.fromtimestamp(float(last_active), timezone.utc)
                            if last_active else None),
            next_page_no=int(h.get("next_page_no") or 0),
            is_first_contact=h.get("is_first_contact", "1") == "1",
            city=h.get("city") or None,
            state=h.get("state") or None,
            country=h.get("country") or None,
            zip=h.get("zip") or None,
        )

    async def create_session(self, sender, city=None, state=None, country=None,
                             zip_code=None) -> SessionState:
        key = SESSION_HASH.format(sender=sender)
        created = await self.r.hsetnx(key, "next_page_no", 0)
        if not created:
            raise DuplicateSessionError(sender)
        await self.r.hset(key, mapping={
            "is_first_contact": "1",
            "city": city or "",
            "state": state or "",
            "country": country or "",
            "zip": zip_code or "",
        })
        return SessionState(sender=sender, city=city, state=state,
                            country=country, zip=zip_code)

    async def update_active_location(self, sender: str, lat: float, lng: float) -> None:
        await self.r.hset(SESSION_HASH.format(sender=sender),
                          mapping={"active_lat": lat, "active_lng": lng})

    async def get_active_location(self, sender: str) -> Optional[GeoPoint]:
        lat, lng = await self.r.hmget(SESSION_HASH.format(sender=sender),
                                      ["active_lat", "active_lng"])
        if not lat or not lng:
            return None
        return GeoPoint(lat=float(lat), lng=float(lng))

    async def query_nearest(self, lat: float, lng: float, limit: int,
                            offset: int) -> List[PointOfInterest]:
        rows = await self.r.geosearch(
            GEO_KEY,
            longitude=lng,
            latitude=lat,
            radius=SEARCH_RADIUS_MILES,
            unit="mi",
            withdist=True,
            sort="ASC",
            count=offset + limit,
        )
        page = (rows or [])[offset:offset + limit]
        if not page:
            return []

        pipe = self.r.pipeline()
        for member, _ in page:
            pipe.hgetall(POI_HASH.format(id=member))
        raw = await pipe.execute()

        out: List[PointOfInterest] = []
        for (member, dist), h in zip(page, raw):
            if not h:
                logger.warning("GEO member %s has no record", member)
                continue
            out.append(PointOfInterest(
                id=member,
                name=h.get("name") or None,
                hours=h.get("hours") or None,
                category=h.get("category") or None,
                distance=float(dist),
                place_id=h["place_id"],
                lat=_float_or_none(h.get("lat")),
                lng=_float_or_none(h.get("lng")),
            ))
        return out

    async def update_cached_hours(self, point_id: str, hours_text: str) -> None:
        await self.r.hset(POI_HASH.format(id=point_id), "hours", hours_text)

    async def update_cached_name(self, point_id: str, name: str) -> None:
        await self.r.hset(POI_HASH.format(id=point_id), "name", name)

    async def record_message(self, sender: str, text: str) -> None:
        await self.r.rpush(SESSION_TEXTS.format(sender=sender),
                           _dump({"text": text, "at": self.now_fn().isoformat()}))

    async def touch_last_active(self, sender: str) -> None:
        await self.r.hset(SESSION_HASH.format(sender=sender), mapping={
            "last_active_at": self.now_fn().timestamp(),
            "is_first_contact": "0",
        })

    async def get_last_active_age(self, sender: str) -> Optional[timedelta]:
        ts = await self.r.hget(SESSION_HASH.format(sender=sender), "last_active_at")
        if not ts:
            return None
        return self.now_fn() - datetime.fromtimestamp(float(ts), timezone.utc)

    async def get_page_cursor(self, sender: str) -> int:
        v = await self.r.hget(SESSION_HASH.format(sender=sender), "next_page_no")
        return int(v or 0)

    async def set_page_cursor(self, sender: str, page_no: int) -> None:
        if page_no < 0:
            raise ValueError(f"page cursor must be >= 0, got {page_no}")
        await self.r.hset(SESSION_HASH.format(sender=sender), "next_page_no", page_no)

    async def add_point(self, point: PointOfInterest) -> None:
        if point.lat is None or point.lng is None:
            raise ValueError(f"point {point.id} has no coordinates")
        pipe = self.r.pipeline()
        pipe.geoadd(GEO_KEY, (point.lng, point.lat, point.id))
        pipe.hset(POI_HASH.format(id=point.id), mapping={
            "name": point.name or "",
            "hours": point.hours or "",
            "category": point.category or "",
            "place_id": point.place_id,
            "lat": point.lat,
            "lng": point.lng,
        })
        await pipe.execute()

    async def close(self) -> None:
        await self.r.aclose()
