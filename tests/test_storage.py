import numpy as np
import pytest

from block_primes.storage import ByteField, PackedBitField, get_storage

FIELDS = [ByteField, PackedBitField]


@pytest.mark.parametrize("field_cls", FIELDS)
def test_new_field_is_clear(field_cls):
    field = field_cls(13)
    assert len(field) == 13
    assert field.unmarked().tolist() == list(range(13))
    assert field.unmarked().dtype == np.int64


@pytest.mark.parametrize("field_cls", FIELDS)
@pytest.mark.parametrize("step", [1, 2, 3, 7, 8, 11])
def test_strided_mark(field_cls, step):
    field = field_cls(50)
    field.mark(4, step)
    marked = set(range(4, 50, step))
    assert field.unmarked().tolist() == [i for i in range(50) if i not in marked]
    assert all(field.is_marked(i) for i in marked)


@pytest.mark.parametrize("field_cls", FIELDS)
def test_mark_with_stop_and_past_end(field_cls):
    field = field_cls(10)
    field.mark(0, 1, 2)
    field.mark(25, 3)
    assert field.unmarked().tolist() == list(range(2, 10))


def test_packed_field_uses_one_bit_per_flag():
    assert PackedBitField(1000).bits.nbytes == 125
    assert ByteField(1000).flags.nbytes == 1000


def test_packed_is_marked_out_of_range():
    with pytest.raises(IndexError):
        PackedBitField(9).is_marked(9)


def test_get_storage_names():
    assert get_storage("byte") is ByteField
    assert get_storage("bit") is PackedBitField
    with pytest.raises(ValueError, match="unknown storage"):
        get_storage("nibble")


def test_torch_storage():
    torch = pytest.importorskip("torch")
    storage = get_storage("torch", "cpu")
    field = storage(20)
    assert field.device == torch.device("cpu")
    field.mark(3, 5)
    assert field.is_marked(8)
    assert not field.is_marked(9)
    assert field.unmarked().tolist() == [i for i in range(20) if i not in (3, 8, 13, 18)]
