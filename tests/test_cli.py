import json

import pytest

from cli import load_points, parse_args
from core import MemoryStore


def test_message_words_are_collected():
    args = parse_args(["150", "Park", "Ave", "--from", "+12125550123"])
    assert args.message == ["150", "Park", "Ave"]
    assert args.sender == "+12125550123"
    assert not args.memory


def test_points_without_memory_is_rejected(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["Brooklyn", "--points", str(tmp_path / "points.json")])
    assert exc.value.code == 2
    assert "--points requires --memory" in capsys.readouterr().err


@pytest.mark.parametrize("body", ["next", " NEXT "])
def test_next_on_a_fresh_memory_store_is_rejected(body):
    with pytest.raises(SystemExit):
        parse_args([body, "--memory"])


def test_next_against_redis_is_allowed():
    assert parse_args(["next"]).message == ["next"]


@pytest.mark.asyncio
async def test_load_points(tmp_path):
    path = tmp_path / "points.json"
    path.write_text(json.dumps([
        {"id": "a", "name": "Bryant Park", "place_id": "p-a", "lat": 40.7536, "lng": -73.9832},
        {"id": "b", "place_id": "p-b", "lat": 40.7527, "lng": -73.9772},
    ]), encoding="utf-8")
    store = MemoryStore()

    assert await load_points(store, path) == 2
    assert store.points["a"].name == "Bryant Park"
    assert store.points["b"].name is None
