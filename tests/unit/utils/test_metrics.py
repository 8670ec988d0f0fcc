"""Unit tests for metrics utility functions."""

import numpy as np
import pytest

from manifold_ekf.utils.metrics import mahalanobis_distance, max_abs_difference


class TestMahalanobisDistance:
    """Tests for the squared Mahalanobis distance."""

    def test_known_value(self):
        """Distance should match hand-computed value."""
        # 1^2 / 1 + 2^2 / 4 = 2
        assert mahalanobis_distance([1.0, 2.0], np.diag([1.0, 4.0])) == pytest.approx(2.0)

    def test_identity_covariance(self, rng):
        """With identity covariance the distance is the squared norm."""
        v = rng.standard_normal(4)
        assert mahalanobis_distance(v, np.eye(4)) == pytest.approx(v @ v)

    def test_full_covariance(self, rng):
        """Should equal v' P^{-1} v for a dense SPD matrix."""
        M = rng.standard_normal((3, 3))
        P = M @ M.T + 3 * np.eye(3)
        v = rng.standard_normal(3)
        assert mahalanobis_distance(v, P) == pytest.approx(v @ np.linalg.inv(P) @ v)

    def test_empty(self):
        """An empty innovation should have zero distance."""
        assert mahalanobis_distance(np.zeros(0), np.zeros((0, 0))) == 0.0

    def test_singular_not_guarded(self):
        """A singular covariance should propagate LinAlgError."""
        with pytest.raises(np.linalg.LinAlgError):
            mahalanobis_distance([1.0, 1.0], np.zeros((2, 2)))


class TestMaxAbsDifference:
    """Tests for the elementwise max absolute difference."""

    def test_known_value(self):
        """Should pick the largest absolute deviation, ignoring sign."""
        a = np.array([[1.0, 2.0], [3.0, 4.0]])
        b = np.array([[1.5, 2.0], [3.0, 1.0]])
        assert max_abs_difference(a, b) == pytest.approx(3.0)

    def test_negative_difference_counts(self):
        """A large negative difference should not be hidden."""
        assert max_abs_difference([0.0, 0.0], [5.0, -0.1]) == pytest.approx(5.0)

    def test_empty(self):
        """Empty arrays should give zero."""
        assert max_abs_difference(np.zeros((2, 0)), np.zeros((2, 0))) == 0.0
