"""Configuration dataclasses for model self-tests and outlier gating."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class JacobianTestConfig:
    step: float = 1e-6
    tolerance: float = 1e-6
    scale: float = 1.0
    dt: float = 0.1

    def run(self, model, rng=None):
        """Run ``model.test_jacs`` with these settings."""
        return model.test_jacs(self.step, self.tolerance, self.scale, self.dt, rng)


@dataclass
class OutlierConfig:
    enabled: Optional[bool] = None
    thresholds: Dict[int, float] = field(default_factory=dict)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "OutlierConfig":
        thresholds = {int(k): float(v) for k, v in (raw.get("thresholds") or {}).items()}
        return OutlierConfig(enabled=raw.get("enabled"), thresholds=thresholds)

    def apply(self, chain) -> None:
        """Push the enabled flag and per-gate thresholds onto ``chain``."""
        if self.enabled is not None:
            chain.set_enabled_all(bool(self.enabled))
        for index, threshold in self.thresholds.items():
            chain.set_mahal_th(index, threshold)


@dataclass
class EstimatorConfig:
    jacobian_test: JacobianTestConfig = field(default_factory=JacobianTestConfig)
    outliers: OutlierConfig = field(default_factory=OutlierConfig)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "EstimatorConfig":
        return EstimatorConfig(
            jacobian_test=JacobianTestConfig(**raw.get("jacobian_test", {})),
            outliers=OutlierConfig.from_dict(raw.get("outliers", {})),
        )


def load_config(path: str | Path) -> EstimatorConfig:
    """Load an EstimatorConfig from a YAML file."""
    with Path(path).open("r") as handle:
        raw = yaml.safe_load(handle) or {}
    if "estimator" in raw:
        raw = raw["estimator"]
    return EstimatorConfig.from_dict(raw)


__all__ = [
    "JacobianTestConfig",
    "OutlierConfig",
    "EstimatorConfig",
    "load_config",
]
