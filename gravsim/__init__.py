"""
Gravitational N-body simulation: vector algebra, bodies and the Euler-Cromer
system driver.
"""

import logging

logger = logging.getLogger("gravsim")
logger.addHandler(logging.NullHandler())

__version__ = "0.1.0"
