"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

# urllib3 logs every retried connection at WARNING. Rate-limit tests retry on
# purpose, so only show its errors.
logging.getLogger("urllib3").setLevel(logging.ERROR)
