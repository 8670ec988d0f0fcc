"""Base class for measurement and process models on manifolds."""
import logging
import numbers
from dataclasses import dataclass

import numpy as np

from ..manifolds import vector_manifold
from ..manifolds.base import resolve_rng
from ..utils.metrics import max_abs_difference

LOGGER = logging.getLogger(__name__)


@dataclass
class JacobianCheck:
    """Outcome of one analytic vs finite-difference Jacobian comparison."""
    name: str
    residual: float
    tolerance: float

    @property
    def passed(self):
        return self.residual <= self.tolerance


class ModelBase:
    """
    Model ``output = f(input, meas, noise, dt)`` over manifold types.

    Concrete models set the four type attributes and override
    ``evaluate``, ``jac_input`` and ``jac_noise``. The base class supplies
    manifold-aware finite-difference Jacobians and self-tests that compare
    them against the analytic ones.

    Attributes
    ----------
    input_type, output_type, meas_type, noise_type : type
        Manifold subclasses. Their ``dim`` fixes the Jacobian shapes:
        jac_input is [output_type.dim, input_type.dim] and
        jac_noise is [output_type.dim, noise_type.dim].
    """

    input_type = vector_manifold(0)
    output_type = vector_manifold(0)
    meas_type = vector_manifold(0)
    noise_type = vector_manifold(0)

    def eval(self, input_, meas, noise=None, dt=0.0):
        """
        Evaluate the model.

        Both ``eval(input_, meas, noise, dt)`` and ``eval(input_, meas, dt)``
        are accepted: a real number in the noise position is the time step.

        Parameters
        ----------
        input_ : input_type
            Linearization point
        meas : meas_type
            Measurement (or control input for process models)
        noise : noise_type or float, optional
            Noise realization. Fixed at its identity element if None.
        dt : float
            Time step

        Returns
        -------
        output_type
        """
        if isinstance(noise, numbers.Real):
            if dt != 0.0:
                raise TypeError("eval() got a time step both in the noise position and as dt")
            noise, dt = None, float(noise)
        if noise is None:
            noise = self.noise_type.identity()
        return self.evaluate(input_, meas, noise, dt)

    def evaluate(self, input_, meas, noise, dt):
        """Canonical evaluation. Must be pure; the default is the output identity."""
        return self.output_type.identity()

    def jac_input(self, input_, meas, dt=0.0):
        """Analytic Jacobian with respect to the input tangent space."""
        return np.zeros((self.output_type.dim, self.input_type.dim))

    def jac_noise(self, input_, meas, dt=0.0):
        """Analytic Jacobian with respect to the noise tangent space."""
        return np.zeros((self.output_type.dim, self.noise_type.dim))

    def jac_input_fd(self, input_, meas, dt, step):
        """
        Finite-difference Jacobian with respect to the input.

        Column i is (f(input ⊞ step*e_i) ⊟ f(input)) / step, with noise
        at identity. Only box-minus gives a valid tangent difference when
        the output is not a flat vector space.

        Parameters
        ----------
        input_ : input_type
        meas : meas_type
        dt : float
        step : float
            Perturbation size along each tangent basis direction

        Returns
        -------
        ndarray [output_type.dim, input_type.dim]
        """
        reference = self.eval(input_, meas, dt=dt)
        basis = np.eye(self.input_type.dim)
        F = np.zeros((self.output_type.dim, self.input_type.dim))
        for i in range(self.input_type.dim):
            disturbed = input_.box_plus(step * basis[:, i])
            F[:, i] = self.eval(disturbed, meas, dt=dt).box_minus(reference) / step
        return F

    def jac_noise_fd(self, input_, meas, dt, step):
        """
        Finite-difference Jacobian with respect to the noise.

        Same scheme as ``jac_input_fd``, perturbing the identity noise.

        Returns
        -------
        ndarray [output_type.dim, noise_type.dim]
        """
        noise = self.noise_type.identity()
        reference = self.eval(input_, meas, noise, dt=dt)
        basis = np.eye(self.noise_type.dim)
        H = np.zeros((self.output_type.dim, self.noise_type.dim))
        for i in range(self.noise_type.dim):
            disturbed = noise.box_plus(step * basis[:, i])
            H[:, i] = self.eval(input_, meas, disturbed, dt=dt).box_minus(reference) / step
        return H

    def _random_point(self, rng, scale):
        rng = resolve_rng(rng)
        input_ = self.input_type.identity()
        meas = self.meas_type.identity()
        input_.set_random(rng, scale)
        meas.set_random(rng, scale)
        return input_, meas

    def _report(self, name, residual, tolerance):
        check = JacobianCheck(name, residual, tolerance)
        if check.passed:
            LOGGER.info(f"{type(self).__name__} {name} test successful ({residual:.3e})")
        else:
            LOGGER.warning(
                f"{type(self).__name__} {name} test failed: {residual:.3e} is larger than {tolerance:.3e}"
            )
        return check

    def test_jac_input(self, step=1e-6, tolerance=1e-6, scale=1.0, dt=0.1, rng=None):
        """
        Compare ``jac_input`` with ``jac_input_fd`` at a random point.

        A mismatch is logged, never raised; act on the returned record.

        Parameters
        ----------
        step : float
            Finite-difference step
        tolerance : float
            Largest accepted elementwise absolute difference
        scale : float
            Spread of the random input and measurement
        dt : float
            Time step
        rng : numpy.random.Generator, optional

        Returns
        -------
        JacobianCheck
        """
        input_, meas = self._random_point(rng, scale)
        residual = max_abs_difference(self.jac_input(input_, meas, dt),
                                      self.jac_input_fd(input_, meas, dt, step))
        return self._report('jac_input', residual, tolerance)

    def test_jac_noise(self, step=1e-6, tolerance=1e-6, scale=1.0, dt=0.1, rng=None):
        """Compare ``jac_noise`` with ``jac_noise_fd``; see ``test_jac_input``."""
        input_, meas = self._random_point(rng, scale)
        residual = max_abs_difference(self.jac_noise(input_, meas, dt),
                                      self.jac_noise_fd(input_, meas, dt, step))
        return self._report('jac_noise', residual, tolerance)

    def test_jacs(self, step=1e-6, tolerance=1e-6, scale=1.0, dt=0.1, rng=None):
        """Run both Jacobian self-tests; returns (input_check, noise_check)."""
        rng = resolve_rng(rng)
        return (self.test_jac_input(step, tolerance, scale, dt, rng),
                self.test_jac_noise(step, tolerance, scale, dt, rng))
