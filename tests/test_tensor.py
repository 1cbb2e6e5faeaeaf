import numpy as np
import pytest

from forwardnet import (
    Tensor, EmptyTensorError, ShapeError, ShapeMismatchError,
    checkerboard, eye, ones, rand, zeros,
)


def test_shape_and_size():
    t = Tensor([[1, 2, 3], [4, 5, 6]])
    assert t.shape == (2, 3)
    assert t.rows == 2
    assert t.cols == 3
    assert t.size == 6
    assert len(t) == 2


def test_add_is_elementwise():
    a = Tensor([[1, 2], [3, 4]])
    b = Tensor([[10, 20], [30, 40.5]])
    result = a.add(b)
    for i in range(2):
        for j in range(2):
            assert result[i, j] == a[i, j] + b[i, j]
    assert (a + b).allclose(result)


def test_add_shape_mismatch():
    with pytest.raises(ShapeMismatchError, match=r"\(2, 2\) and \(1, 2\)"):
        Tensor([[1, 2], [3, 4]]).add(Tensor([[1, 2]]))


def test_add_non_tensor():
    with pytest.raises(TypeError):
        Tensor([[1.0]]) + 1


def test_dot_matrix_product():
    a = Tensor([[1, 2], [3, 4]])
    b = Tensor([[5, 6], [7, 8]])
    assert a.dot(b).tolist() == [[19.0, 22.0], [43.0, 50.0]]
    assert (a @ b).tolist() == [[19.0, 22.0], [43.0, 50.0]]


def test_dot_result_shape():
    a = Tensor([[1, 2, 3], [4, 5, 6]])
    b = Tensor([[1], [0], [2]])
    result = a.dot(b)
    assert result.shape == (2, 1)
    assert result.tolist() == [[7.0], [16.0]]


def test_dot_matches_definition(rng):
    a = Tensor(rng.random((3, 4)))
    b = Tensor(rng.random((4, 2)))
    result = a.dot(b)
    for i in range(3):
        for j in range(2):
            expected = sum(a[i, k] * b[k, j] for k in range(4))
            assert result[i, j] == pytest.approx(expected)


def test_dot_inner_dimension_mismatch():
    with pytest.raises(ShapeMismatchError, match="inner dimensions 3 and 2"):
        Tensor([[1, 2, 3]]).dot(Tensor([[1], [2]]))


def test_flatten_row_major():
    flat = Tensor([[1, 2, 3], [4, 5, 6]]).flatten()
    assert flat.ndim == 1
    assert flat.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_flatten_returns_copy():
    t = Tensor([[1, 2]])
    flat = t.flatten()
    flat[0] = 99
    assert t[0, 0] == 1.0


def test_reshape():
    t = Tensor([[1, 2, 3], [4, 5, 6]]).reshape(3, 2)
    assert t.tolist() == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
    with pytest.raises(ShapeMismatchError):
        t.reshape(4, 2)


def test_row():
    t = Tensor.row([1, 2, 3])
    assert t.shape == (1, 3)


def test_ragged_rows_rejected():
    with pytest.raises(ShapeError, match="same length"):
        Tensor([[1, 2], [3]])


def test_one_dimensional_rejected():
    with pytest.raises(ShapeError):
        Tensor([1, 2, 3])
    with pytest.raises(ShapeError):
        Tensor(np.zeros((2, 2, 2)))


@pytest.mark.parametrize("data", [[], [[]], np.zeros((0, 3))])
def test_empty_rejected(data):
    with pytest.raises(EmptyTensorError):
        Tensor(data)


def test_non_numeric_rejected():
    with pytest.raises(TypeError):
        Tensor([["a", "b"]])
    with pytest.raises(TypeError):
        Tensor("abc")


def test_complex_rejected():
    with pytest.raises(TypeError, match="must be real"):
        Tensor([[1 + 2j]])
    with pytest.raises(TypeError):
        Tensor(np.ones((2, 2), dtype=np.complex128))


def test_shape_errors_are_value_errors():
    with pytest.raises(ValueError):
        Tensor([[1, 2], [3]])


def test_immutable():
    source = np.array([[1.0, 2.0]])
    t = Tensor(source)
    source[0, 0] = 5.0
    assert t[0, 0] == 1.0
    with pytest.raises(ValueError):
        t.data[0, 0] = 3.0


def test_numpy_returns_writable_copy():
    t = Tensor([[1, 2]])
    array = t.numpy()
    array[0, 0] = 7
    assert t[0, 0] == 1.0


def test_str_prints_rows():
    assert str(Tensor([[1, 0.5], [2, 3]])) == "1 0.5\n2 3"


def test_factories():
    assert zeros(2, 3).tolist() == [[0.0] * 3] * 2
    assert ones(1, 2).tolist() == [[1.0, 1.0]]
    assert eye(2).tolist() == [[1.0, 0.0], [0.0, 1.0]]


def test_rand_is_seeded():
    a = rand(3, 3, rng=np.random.default_rng(7))
    b = rand(3, 3, rng=np.random.default_rng(7))
    assert a.allclose(b)
    assert (a.data >= 0).all() and (a.data < 1).all()


def test_checkerboard():
    board = checkerboard(5)
    assert board.shape == (5, 5)
    assert board.tolist()[0] == [1.0, 0.0, 1.0, 0.0, 1.0]
    assert board.tolist()[1] == [0.0, 1.0, 0.0, 1.0, 0.0]
    assert board.flatten().sum() == 13
