import re

import pytest

from toolhub.domain.uuids import MAX_UUID_COUNT, UuidFormat, generate_uuids, is_v4

RAW_V4 = re.compile(r"^[0-9a-f]{12}4[0-9a-f]{3}[89ab][0-9a-f]{15}$")


def test_raw_uuids_are_32_hex_v4():
    out = generate_uuids(5, "raw")
    assert len(out) == 5
    for u in out:
        assert RAW_V4.match(u)
        assert "-" not in u


def test_formatted_is_canonical_and_strips_to_raw_shape():
    out = generate_uuids(3, UuidFormat.formatted)
    for u in out:
        assert is_v4(u)
        assert [len(part) for part in u.split("-")] == [8, 4, 4, 4, 12]
        assert RAW_V4.match(u.replace("-", ""))


def test_default_is_one_formatted():
    (u,) = generate_uuids()
    assert is_v4(u) and "-" in u


def test_batch_is_distinct():
    out = generate_uuids(MAX_UUID_COUNT)
    assert len(set(out)) == MAX_UUID_COUNT


@pytest.mark.parametrize("count", [0, -1, MAX_UUID_COUNT + 1, 2.0, "3", True, None])
def test_invalid_count_is_rejected(count):
    with pytest.raises(ValueError):
        generate_uuids(count)


def test_unknown_format_is_rejected():
    with pytest.raises(ValueError):
        generate_uuids(1, "braces")


def test_is_v4_rejects_other_versions():
    assert not is_v4("00000000-0000-1000-8000-000000000000")
    assert not is_v4("not-a-uuid")
