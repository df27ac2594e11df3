import pytest

from tabscope.data.dataset import SplitDataset, train_test_split


def _rows(n):
    return [{"i": float(i)} for i in range(n)]


def test_identity_permutation_keeps_order():
    split = train_test_split(_rows(10), permutation=range(10))

    assert [r["i"] for r in split.train] == [float(i) for i in range(7)]
    assert [r["i"] for r in split.test] == [7.0, 8.0, 9.0]


def test_split_sizes_use_floor():
    split = train_test_split(_rows(15), random_state=0)

    # floor(15 * 0.7) == 10
    assert len(split.train) == 10
    assert len(split.test) == 5


def test_split_is_a_partition():
    rows = _rows(23)
    split = train_test_split(rows, random_state=3)
    seen = sorted(r["i"] for r in split.train + split.test)

    assert seen == [r["i"] for r in rows]


def test_seeded_split_is_reproducible():
    rows = _rows(30)
    first = train_test_split(rows, random_state=42)
    second = train_test_split(rows, random_state=42)

    assert first.train == second.train
    assert first.test == second.test


def test_custom_fraction():
    split = train_test_split(_rows(10), train_fraction=0.5, permutation=list(range(10)))
    assert len(split.train) == 5


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5])
def test_invalid_fraction(fraction):
    with pytest.raises(ValueError):
        train_test_split(_rows(10), train_fraction=fraction)


@pytest.mark.parametrize("permutation", [[0, 1, 2], [0, 0, 1, 2], [1, 2, 3, 4]])
def test_invalid_permutation(permutation):
    with pytest.raises(ValueError):
        train_test_split(_rows(4), permutation=permutation)


def test_tiny_dataset_gives_empty_train():
    split = train_test_split(_rows(1), random_state=0)
    assert split.is_empty


def test_split_dataset_copy():
    split = SplitDataset(train=[{"a": 1.0}], test=[{"a": 2.0}])
    copied = split.copy()
    copied.train[0]["a"] = 99.0

    assert split.train[0]["a"] == 1.0
    assert not split.is_empty
