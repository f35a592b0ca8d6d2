from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from asnwho.cache import ResponseCache
from asnwho.models import parse_response


def prop(name: str, value: Any) -> List[Any]:
    return [name, {}, "text", value]


def jcard(*props: List[Any]) -> List[Any]:
    return ["vcard", [prop("version", "4.0"), *props]]


def contact(
    roles: Iterable[str],
    fn: Optional[str] = None,
    kind: Optional[str] = None,
    handle: Optional[str] = None,
) -> Dict[str, Any]:
    props = []
    if fn is not None:
        props.append(prop("fn", fn))
    if kind is not None:
        props.append(prop("kind", kind))
    entity: Dict[str, Any] = {
        "objectClassName": "entity",
        "roles": list(roles),
        "vcardArray": jcard(*props),
    }
    if handle is not None:
        entity["handle"] = handle
    return entity


def autnum_payload(handle: Optional[str] = "AS701", entities: Iterable[Dict[str, Any]] = ()) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "objectClassName": "autnum",
        "startAutnum": 701,
        "endAutnum": 701,
        "name": "UUNET",
        "entities": list(entities),
    }
    if handle is not None:
        payload["handle"] = handle
    return payload


def autnum(handle: Optional[str] = "AS701", entities: Iterable[Dict[str, Any]] = ()):
    return parse_response(autnum_payload(handle, entities))


class StubRegistryClient:
    """Registry double: returns or raises ``outcomes`` in order, repeating the last."""

    def __init__(self, *outcomes: Any):
        self._outcomes = list(outcomes)
        self.calls: List[str] = []

    async def resolve(self, key: str):
        self.calls.append(key)
        if len(self._outcomes) > 1:
            outcome = self._outcomes.pop(0)
        else:
            outcome = self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class TickingClock:
    """Returns a time one minute later on every call."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current + timedelta(minutes=self.calls)
        self.calls += 1
        return value


class CountingCache(ResponseCache):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.writes = 0

    async def write(self, key, response):
        self.writes += 1
        return await super().write(key, response)


class DummyCache:
    """A minimal in-memory cache used to stub the aiocache backend."""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ttl=None):
        self.store[key] = value

    async def delete(self, key):
        self.store.pop(key, None)
