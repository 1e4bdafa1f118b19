"""Verification Test: snapshot of the live /proc filesystem.

Spawns child processes with a marker in their environment and checks the
collector finds them while leaving itself and PID 1 out. Children are
terminated part-way through a second run to check that processes exiting
mid-walk never abort the snapshot.
"""

import os
import subprocess
import sys
import time
import uuid

import pytest

from procenv.collector import ProcessCollector

pytestmark = pytest.mark.skipif(
    not os.path.isdir("/proc/self") or not sys.platform.startswith("linux"),
    reason="requires a Linux procfs",
)


def _spawn(marker: str, count: int) -> list[subprocess.Popen]:
    env = dict(os.environ, PROCENV_MARKER=marker)
    return [
        subprocess.Popen([sys.executable, "-c", "import time; time.sleep(60)", marker], env=env)
        for _ in range(count)
    ]


def _reap(children: list[subprocess.Popen]) -> None:
    for child in children:
        if child.poll() is None:
            child.terminate()
    for child in children:
        child.wait(timeout=5.0)


@pytest.fixture
def marked_children():
    """Children carrying a unique marker in environment and argv."""
    marker = uuid.uuid4().hex
    children = _spawn(marker, 5)
    # Give the interpreters time to exec so their cmdline is final
    time.sleep(0.5)
    try:
        yield marker, children
    finally:
        _reap(children)


class TestLiveProcfs:
    """Verification against the real process table."""

    def test_children_are_collected(self, marked_children):
        """Test spawned children appear with their environment and argv."""
        marker, children = marked_children

        snapshot = ProcessCollector().collect()

        for child in children:
            record = snapshot[child.pid]
            assert f"PROCENV_MARKER={marker}" in record.environment
            assert record.command_line[-1] == marker

    def test_self_and_init_excluded(self, marked_children):
        """Test the collector and PID 1 never appear."""
        snapshot = ProcessCollector().collect()

        assert os.getpid() not in snapshot
        assert 1 not in snapshot
        assert all(pid > 1 for pid in snapshot)

    def test_exiting_processes_do_not_abort(self, marked_children):
        """Test a walk racing with exiting processes still completes."""
        marker, children = marked_children
        collector = ProcessCollector()

        for child in children[:3]:
            child.terminate()
        snapshot = collector.collect()

        for child in children[3:]:
            assert child.pid in snapshot
