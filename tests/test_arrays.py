import numpy
from scidat.testing import TestCase
from scidat import arrays
from scidat.exceptions import InputException


class normdim(TestCase):

    def test_positive(self):
        self.assertEqual(arrays.normdim(3, 1), 1)

    def test_negative(self):
        self.assertEqual(arrays.normdim(3, -1), 2)

    def test_out_of_bounds(self):
        for n in 3, -4:
            with self.subTest(n):
                with self.assertRaises(InputException):
                    arrays.normdim(3, n)

    def test_not_an_integer(self):
        with self.assertRaisesRegex(InputException, 'axis must be an integer'):
            arrays.normdim(3, 1.5, 'axis')


class move_dim(TestCase):

    def setUp(self):
        super().setUp()
        self.A = arrays.seq_mat(4, 3, 2)

    def test_to_front(self):
        B = arrays.move_dim(self.A, 1)
        self.assertEqual(B.shape, (3, 4, 2))
        self.assertEqual(B[2, 3, 1], self.A[3, 2, 1])

    def test_to_back(self):
        B = arrays.move_dim(self.A, 0, 2)
        self.assertEqual(B.shape, (3, 2, 4))
        self.assertEqual(B[2, 1, 3], self.A[3, 2, 1])

    def test_negative(self):
        self.assertEqual(arrays.move_dim(self.A, -1, -2).shape, (4, 2, 3))

    def test_noop(self):
        self.assertAllEqual(arrays.move_dim(self.A, 1, 1), self.A)

    def test_view(self):
        B = arrays.move_dim(self.A, 2)
        B[0, 0, 0] = -1.
        self.assertEqual(self.A[0, 0, 0], -1.)

    def test_copy(self):
        B = arrays.move_dim(self.A, 2, isview=False)
        B[0, 0, 0] = -1.
        self.assertEqual(self.A[0, 0, 0], 1.)

    def test_out_of_bounds(self):
        with self.assertRaises(InputException):
            arrays.move_dim(self.A, 3)
        with self.assertRaises(InputException):
            arrays.move_dim(self.A, 0, 3)


class seq_mat(TestCase):

    def test_matrix(self):
        self.assertAllEqual(arrays.seq_mat(2, 3), [[1., 2., 3.], [4., 5., 6.]])

    def test_vector(self):
        self.assertAllEqual(arrays.seq_mat(4), [1., 2., 3., 4.])

    def test_tuple(self):
        self.assertEqual(arrays.seq_mat((2, 1, 3)).shape, (2, 1, 3))

    def test_dtype(self):
        A = arrays.seq_mat(2, 2, dtype=int)
        self.assertEqual(A.dtype, numpy.dtype(int))
        self.assertAllEqual(A, [[1, 2], [3, 4]])

    def test_empty(self):
        self.assertEqual(arrays.seq_mat(0, 3).shape, (0, 3))

# vim:sw=4:sts=4:et
