import os
from typing import Any

import pytest

# Start coverage in subprocesses (CLI tests) and skip the collector teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


SAMPLE_SOURCE = """\
let x ==> 5
let result ==> x + 10 * 2
init.ger("Calcul: " + result)
fi add(a, b) {
    return a + b
}
"""


@pytest.fixture  # type: ignore[misc]
def sample_source() -> str:
    return SAMPLE_SOURCE
