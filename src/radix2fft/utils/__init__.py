"""
Utility modules.
"""

from .logging import setup_logging, get_logger, RunLogger
from .seed import set_seed

__all__ = ['setup_logging', 'get_logger', 'RunLogger', 'set_seed']
