from third_party_summary.models import Aggregate, Entity
from third_party_summary.summary import score_for, summarize


def _aggregate(*entries):
    aggregate = Aggregate()
    for entity, size, ms in entries:
        aggregate.add_transfer_size(entity, size)
        aggregate.add_main_thread_time(entity, ms)
    return aggregate.freeze()


def test_empty_aggregate():
    rows, summary = summarize(Aggregate().freeze())
    assert rows == []
    assert summary.wasted_bytes == 0
    assert summary.wasted_ms == 0
    assert score_for(rows) == 1


def test_combined_ranking():
    heavy_bytes = Entity(name="Bytes", homepage="https://bytes.example")
    heavy_time = Entity(name="Time")
    small = Entity(name="Small")
    rows, _ = summarize(_aggregate(
        (small, 1024, 1),          # 2
        (heavy_bytes, 1024 * 300, 0),  # 300
        (heavy_time, 0, 250),      # 250
    ))
    assert [r.entity_name for r in rows] == ["Bytes", "Time", "Small"]
    assert rows[0].entity_homepage == "https://bytes.example"
    assert rows[1].entity_homepage is None


def test_rows_sorted_descending():
    entities = [Entity(name=f"E{i}") for i in range(6)]
    rows, _ = summarize(_aggregate(*[
        (e, (i * 7919) % 5000, (i * 31) % 17) for i, e in enumerate(entities)
    ]))
    for a, b in zip(rows, rows[1:]):
        assert a.sort_value >= b.sort_value


def test_ties_broken_by_name():
    rows, _ = summarize(_aggregate(
        (Entity(name="Zeta"), 2048, 0),
        (Entity(name="Alpha"), 0, 2),
        (Entity(name="Mu"), 1024, 1),
    ))
    assert [r.entity_name for r in rows] == ["Alpha", "Mu", "Zeta"]


def test_summary_equals_row_sums():
    rows, summary = summarize(_aggregate(
        (Entity(name="A"), 100, 1.5),
        (Entity(name="B"), 250, 0.25),
        (Entity(name="C"), 0, 40.0),
    ))
    assert sum(r.transfer_size for r in rows) == summary.wasted_bytes == 350
    assert sum(r.main_thread_time for r in rows) == summary.wasted_ms == 41.75
    assert len({r.entity_name for r in rows}) == len(rows)


def test_score_zero_for_any_row():
    rows, _ = summarize(_aggregate((Entity(name="Tiny"), 0, 0)))
    assert len(rows) == 1
    assert score_for(rows) == 0
