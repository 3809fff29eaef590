import re

from trainplan.programs.ids import SequentialIdGenerator, TempIdGenerator, default_id_generator, is_temp_id


def test_temp_ids_have_timestamp_and_random_suffix():
    gen = TempIdGenerator()
    node_id = gen.next_id()
    assert re.fullmatch(r"temp_\d{13}_[0-9a-z]{9}", node_id)
    assert is_temp_id(node_id)


def test_temp_ids_are_distinct():
    gen = TempIdGenerator()
    ids = {gen.next_id() for _ in range(200)}
    assert len(ids) == 200


def test_sequential_ids_are_deterministic():
    gen = SequentialIdGenerator(prefix="n", start=5)
    assert [gen.next_id() for _ in range(3)] == ["n5", "n6", "n7"]


def test_sequential_default_prefix_is_temporary():
    assert is_temp_id(SequentialIdGenerator().next_id())


def test_default_generator_produces_temp_ids():
    assert is_temp_id(default_id_generator().next_id())


def test_permanent_ids_are_not_temporary():
    assert not is_temp_id("665f1c2ab4d2a1e0c8f3b9a1")
    assert is_temp_id("tmp-1", prefix="tmp-")
