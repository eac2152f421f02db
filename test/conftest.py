"""
Test Configuration and Fixtures

- Points the loguru file sink at test/test_log before any src module is imported
- Keeps the ticket store base URL fixed so adapter assertions are stable
"""

# =============================================================================
# Environment setup MUST happen before any other imports: settings and the
# logger read the environment at import time.
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('SCANNER_API_BASE_URL', 'http://ticket-store.test')
    os.environ.setdefault('SCANNER_KEY', '')


_early_setup_test_environment()

import pytest  # noqa: E402

from src.service.scanner.domain.value_object.scan_context import ScanContext  # noqa: E402


@pytest.fixture
def scan_context() -> ScanContext:
    return ScanContext.of(event_id='evt-1', season_id='season-1')
