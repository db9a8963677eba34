"""
Benchmark configuration loaded from YAML.
"""

from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Dict, List, Union

import yaml

from .fft import is_power_of_two

SUPPORTED_DTYPES = ('float32', 'float64')


@dataclass
class BenchmarkConfig:
    """Settings for scripts/benchmark_fft.py."""
    sizes: List[int] = field(default_factory=lambda: [64, 256, 1024, 4096])
    n_iter: int = 100
    warmup: int = 3
    seed: int = 42
    dtype: str = 'float32'
    # Max relative error against scipy.fft before a size is flagged FAIL
    tolerance: float = 1e-4
    output_dir: str = 'results/benchmark'
    log_dir: str = 'logs'

    def __post_init__(self):
        self.sizes = [int(n) for n in self.sizes]
        if not self.sizes:
            raise ValueError("sizes must not be empty")
        bad = [n for n in self.sizes if not is_power_of_two(n)]
        if bad:
            raise ValueError(f"sizes must be powers of 2. Given: {bad}")
        if self.n_iter < 1:
            raise ValueError(f"n_iter must be >= 1. Given: {self.n_iter}")
        if self.warmup < 0:
            raise ValueError(f"warmup must be >= 0. Given: {self.warmup}")
        if self.dtype not in SUPPORTED_DTYPES:
            raise ValueError(f"dtype must be one of {SUPPORTED_DTYPES}. Given: {self.dtype}")
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive. Given: {self.tolerance}")

    @classmethod
    def from_dict(cls, config: Dict) -> 'BenchmarkConfig':
        """Build a config from a dict, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (config or {}).items() if k in known})

    def to_dict(self) -> Dict:
        return asdict(self)


def load_config(config_path: Union[str, Path]) -> BenchmarkConfig:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return BenchmarkConfig.from_dict(yaml.safe_load(f))
