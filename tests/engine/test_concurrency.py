"""Round-robin fairness under concurrent encode calls."""

from __future__ import annotations

import threading
from collections import Counter

from llmsteg.codec import LSBCodec
from llmsteg.engine import StegEngine


def test_concurrent_encodes_share_covers_evenly() -> None:
    engine = StegEngine()
    engine.set_codec(LSBCodec())
    covers = [bytes([value]) * 128 for value in (0x10, 0x20, 0x40, 0x80)]
    for cover in covers:
        engine.add_cover_media(cover)

    outputs = []
    outputs_lock = threading.Lock()

    def worker() -> None:
        for _ in range(25):
            data = engine.encode(b"q").data
            with outputs_lock:
                outputs.append(data)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # Each output keeps its cover's high bits, identifying the cover used.
    usage = Counter(data[-1] for data in outputs)
    assert sorted(usage) == [0x10, 0x20, 0x40, 0x80]
    assert set(usage.values()) == {50}


def test_update_config_during_encodes_never_tears_pool() -> None:
    engine = StegEngine()
    engine.set_codec(LSBCodec())
    engine.update_config(cover_media=[bytes(128)] * 3)
    failures = []
    stop = threading.Event()

    def encoder() -> None:
        while not stop.is_set():
            result = engine.encode(b"abc")
            if not result.success:
                failures.append(result.error)

    thread = threading.Thread(target=encoder)
    thread.start()
    try:
        for size in range(1, 30):
            engine.update_config(cover_media=[bytes(128)] * (size % 4 + 1))
    finally:
        stop.set()
        thread.join()

    assert failures == []
