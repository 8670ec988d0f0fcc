"""
Chi-square outlier gating over blocks of a joint innovation.

A chain is built from ``ODEntry(start, dim, count)`` descriptors. Each
descriptor expands into ``count`` gates of width ``dim`` at consecutive
offsets. Every gate owns one contiguous block ``[start, start + dim)`` of
the innovation vector ``v``, the innovation covariance ``Py`` and the rows of
the observation Jacobian ``H``. The buffers are shared by the whole chain and
are modified in place.
"""
import logging
from collections import namedtuple

import numpy as np

from ..utils.metrics import mahalanobis_distance
from .thresholds import quadratic_threshold

LOGGER = logging.getLogger(__name__)


class ODEntry(namedtuple('ODEntry', ['start', 'dim', 'count'])):
    """Descriptor of ``count`` consecutive gates of width ``dim`` from ``start``."""
    __slots__ = ()

    def __new__(cls, start, dim, count=1):
        if start < 0 or dim < 0 or count < 0:
            raise ValueError(f"ODEntry fields must be non-negative, got ({start}, {dim}, {count})")
        return super().__new__(cls, int(start), int(dim), int(count))

    def expand(self):
        """Yield the (start, dim) range of every gate this entry produces."""
        for k in range(self.count):
            yield self.start + k * self.dim, self.dim


class OutlierGate:
    """
    Gate over one contiguous innovation block.

    Attributes
    ----------
    start, dim : int
        Block range [start, start + dim)
    outlier : bool
        Decision of the last ``check``
    enabled : bool
        Whether an outlier block is neutralized in Py and H
    mahalanobis_th : float
        Gate threshold on the squared Mahalanobis distance
    outlier_count : int
        Number of consecutive outlier decisions
    distance : float
        Squared Mahalanobis distance from the last ``check``
    """

    def __init__(self, start, dim, mahalanobis_th=None, enabled=False):
        self.start = start
        self.dim = dim
        self.mahalanobis_th = quadratic_threshold(dim) if mahalanobis_th is None else mahalanobis_th
        self.enabled = enabled
        self.outlier = False
        self.outlier_count = 0
        self.distance = 0.0

    @property
    def block(self):
        return slice(self.start, self.start + self.dim)

    def check(self, innovation, Py):
        """Gate the block of ``innovation`` against its covariance block of ``Py``."""
        sl = self.block
        self.distance = mahalanobis_distance(innovation[sl], Py[sl, sl])
        self.outlier = self.distance > self.mahalanobis_th
        if self.outlier:
            self.outlier_count += 1
        else:
            self.outlier_count = 0
        return self.outlier

    def neutralize(self, Py, H):
        """Remove the block's influence on the update, keeping matrix shapes."""
        sl = self.block
        Py[:, sl] = 0.0
        Py[sl, :] = 0.0
        Py[sl, sl] = np.eye(self.dim)
        H[sl, :] = 0.0

    def reset(self):
        self.outlier = False
        self.outlier_count = 0

    def __repr__(self):
        return (f"OutlierGate(start={self.start}, dim={self.dim}, th={self.mahalanobis_th:.4g}, "
                f"enabled={self.enabled}, outlier={self.outlier}, count={self.outlier_count})")


class OutlierDetection:
    """
    Ordered chain of outlier gates.

    Gates are addressed by a flat zero-based index in descriptor order.
    Ranges must not overlap; they need not cover the whole innovation.

    Parameters
    ----------
    *entries : ODEntry or tuple
        Descriptors (start, dim[, count])

    Examples
    --------
    >>> chain = OutlierDetection(ODEntry(0, 2), ODEntry(2, 3))
    >>> chain.set_enabled_all(True)
    >>> chain.do_outlier_detection(v, Py, H)
    """

    def __init__(self, *entries):
        self.entries = tuple(e if isinstance(e, ODEntry) else ODEntry(*e) for e in entries)
        self.gates = [OutlierGate(start, dim) for entry in self.entries
                      for start, dim in entry.expand()]
        self._check_disjoint()

    def _check_disjoint(self):
        spans = sorted((gate.start, gate.start + gate.dim) for gate in self.gates if gate.dim > 0)
        for (_, end), (start, _) in zip(spans, spans[1:]):
            if start < end:
                raise ValueError(f"outlier gate ranges overlap at index {start}")

    @property
    def dim(self):
        """Innovation length required by the chain."""
        return max((gate.start + gate.dim for gate in self.gates), default=0)

    def __len__(self):
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)

    def gate(self, i):
        """Gate ``i``; its attributes are live and may be modified."""
        if not 0 <= i < len(self.gates):
            raise IndexError(f"outlier gate index {i} out of range for chain of {len(self.gates)}")
        return self.gates[i]

    def _check_buffers(self, innovation, Py, H):
        if innovation.ndim != 1:
            raise ValueError(f"innovation must be 1-D, got shape {innovation.shape}")
        n = innovation.shape[0]
        if n < self.dim:
            raise ValueError(f"innovation of length {n} is shorter than the chain span {self.dim}")
        if Py.shape != (n, n):
            raise ValueError(f"Py shape {Py.shape} does not match innovation length {n}")
        if H.ndim != 2 or H.shape[0] != n:
            raise ValueError(f"H shape {H.shape} does not match innovation length {n}")

    def do_outlier_detection(self, innovation, Py, H):
        """
        Gate every block and neutralize enabled outliers in place.

        Parameters
        ----------
        innovation : ndarray [n]
            Joint innovation vector
        Py : ndarray [n, n]
            Innovation covariance, modified in place
        H : ndarray [n, n_x]
            Observation Jacobian, modified in place

        Returns
        -------
        ndarray [len(self)] of bool
            Outlier decision per gate
        """
        innovation = np.asarray(innovation)
        self._check_buffers(innovation, Py, H)
        # Every gate reads only its own diagonal block, which no other gate
        # writes, so all checks can precede all neutralizations.
        decisions = np.array([gate.check(innovation, Py) for gate in self.gates], dtype=bool)
        for i, gate in enumerate(self.gates):
            if gate.outlier:
                LOGGER.debug(f"Gate {i} [{gate.start}, {gate.start + gate.dim}) outlier: "
                             f"d={gate.distance:.4g} > {gate.mahalanobis_th:.4g} (streak {gate.outlier_count})")
                if gate.enabled:
                    gate.neutralize(Py, H)
        return decisions

    def reset(self):
        """Clear decision and streak of every gate."""
        for gate in self.gates:
            gate.reset()

    def is_outlier(self, i):
        return self.gate(i).outlier

    def set_enabled(self, i, enabled):
        self.gate(i).enabled = enabled

    def set_enabled_all(self, enabled):
        for gate in self.gates:
            gate.enabled = enabled

    def get_count(self, i):
        return self.gate(i).outlier_count

    def get_mahal_th(self, i):
        return self.gate(i).mahalanobis_th

    def set_mahal_th(self, i, mahalanobis_th):
        self.gate(i).mahalanobis_th = float(mahalanobis_th)

    def register_to_property_handler(self, handler, prefix, i=0, enabled_prefix=None):
        """
        Expose every gate threshold as a tunable scalar.

        Gate k is registered under ``prefix + str(i + k)`` in the handler's
        ``double_register``. With ``enabled_prefix``, its ``enabled`` flag is
        also registered under ``enabled_prefix + str(i + k)`` in the
        ``bool_register``.

        Parameters
        ----------
        handler : PropertyHandler
        prefix : str
            Key prefix for thresholds
        i : int
            Index appended for the first gate
        enabled_prefix : str, optional
            Key prefix for the enabled flags
        """
        for k, gate in enumerate(self.gates):
            handler.double_register.register_scalar(prefix + str(i + k), gate, 'mahalanobis_th')
            if enabled_prefix is not None:
                handler.bool_register.register_scalar(enabled_prefix + str(i + k), gate, 'enabled')
