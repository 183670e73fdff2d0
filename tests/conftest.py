from collections.abc import Iterator
from pathlib import Path

import pytest

from sqlsparrow.observability import reset_stats_collector

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture(autouse=True)
def _reset_stats() -> Iterator[None]:
    yield
    reset_stats_collector()
