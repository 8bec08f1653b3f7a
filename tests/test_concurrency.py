from __future__ import annotations

import threading

import pytest

from lyra.utils.concurrency import fan_out, map_concurrently


def test_fan_out_keys_results_by_name():
    out = fan_out({"a": lambda: 1, "b": lambda: "two"}, max_workers=2)
    assert out == {"a": 1, "b": "two"}


def test_fan_out_runs_on_worker_threads():
    out = fan_out({"name": lambda: threading.current_thread().name})
    assert out["name"].startswith("lyra")


def test_fan_out_reraises_after_joining_all():
    done = []

    def _boom():
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        fan_out({"bad": _boom, "ok": lambda: done.append(1)})
    assert done == [1]


def test_map_concurrently_preserves_order():
    assert map_concurrently(lambda x: x * x, [3, 1, 2], max_workers=3) == [9, 1, 4]
    assert map_concurrently(lambda x: x, []) == []
