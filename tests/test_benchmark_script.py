"""
Smoke test for scripts/benchmark_fft.py on tiny sizes.
"""

import json

from scripts.benchmark_fft import main, reference_transform

import numpy as np


def test_reference_transform_is_positive_exponent():
    z = np.array([0, 1, 0, 0], dtype=complex)
    # x[n] = delta[n-1] -> X[k] = exp(+2j*pi*k/4)
    np.testing.assert_allclose(reference_transform(z), [1, 1j, -1, -1j], atol=1e-12)


def test_benchmark_writes_results(tmp_path):
    config_path = tmp_path / 'bench.yaml'
    config_path.write_text(
        "sizes: [4, 16]\n"
        "n_iter: 2\n"
        "warmup: 1\n"
        f"log_dir: {tmp_path / 'logs'}\n"
    )
    output_dir = tmp_path / 'out'

    status = main(['--config', str(config_path), '--output', str(output_dir), '--sizes', '8', '32'])

    assert status == 0
    results = json.loads((output_dir / 'benchmark.json').read_text())
    assert [r['n'] for r in results['sizes']] == [8, 32]
    assert all(r['passed'] for r in results['sizes'])
    assert list((tmp_path / 'logs').glob('benchmark_fft_*.log'))
