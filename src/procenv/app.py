"""procenv - Textual viewer for a process environment snapshot."""

from enum import Enum

import psutil
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import DataTable, Footer, Static

from procenv.collector import ProcessCollector
from procenv.models import ProcessRecord, Snapshot


class SortKey(Enum):
    """Sort keys for the process table."""

    PID = "pid"
    NAME = "name"


def describe_process(pid: int) -> tuple[str, str]:
    """
    Look up the live name and owner of ``pid``.

    Returns empty strings for processes that exited, are zombies, or
    cannot be inspected.
    """
    try:
        proc = psutil.Process(pid)
        with proc.oneshot():
            return proc.name() or "", proc.username() or ""
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
        return "", ""


def summarize(snapshot: Snapshot, root: str) -> str:
    """Describe a snapshot by its process and variable counts."""
    env_total = sum(len(r.environment or []) for r in snapshot.values())
    return f"{len(snapshot)} processes from {root}, {env_total} environment variables"


class SummaryBar(Static):
    """Header widget showing snapshot totals."""

    DEFAULT_CSS = """
    SummaryBar {
        height: auto;
        padding: 0 1;
        background: $surface;
    }
    """

    def show_summary(self, snapshot: Snapshot, root: str) -> None:
        """Display process and variable counts for a snapshot."""
        self.update(Text(summarize(snapshot, root)))


class EnvironmentPanel(Static):
    """Detail pane listing the environment of one process."""

    DEFAULT_CSS = """
    EnvironmentPanel {
        width: 1fr;
        padding: 0 1;
        border: solid $secondary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize EnvironmentPanel."""
        super().__init__(*args, **kwargs)
        self._pid: int | None = None

    @property
    def pid(self) -> int | None:
        """Get the PID currently shown, if any."""
        return self._pid

    def show_record(self, record: ProcessRecord | None) -> None:
        """Display the environment of ``record``."""
        self._pid = record.pid if record is not None else None
        if record is None:
            self.update("No process selected")
            return
        if not record.environment:
            self.update(f"PID {record.pid}: no environment")
            return
        self.update(Text("\n".join([f"PID {record.pid}", *record.environment])))


class ProcessTable(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessTable {
        width: 2fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._names: dict[int, tuple[str, str]] = {}
        self._sort_key: SortKey = SortKey.PID

    @property
    def sort_key(self) -> SortKey:
        """Get current sort key."""
        return self._sort_key

    def cycle_sort(self) -> SortKey:
        """Cycle to the next sort key and return it."""
        keys = list(SortKey)
        self._sort_key = keys[(keys.index(self._sort_key) + 1) % len(keys)]
        return self._sort_key

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"
        table.add_column("PID", key="pid", width=8)
        table.add_column("USER", key="user", width=10)
        table.add_column("NAME", key="name", width=16)
        table.add_column("ARGS", key="args")

    def show_snapshot(self, snapshot: Snapshot) -> None:
        """Replace the table rows with the records of ``snapshot``."""
        table = self.query_one("#process-table", DataTable)
        table.clear()
        for pid in snapshot:
            if pid not in self._names:
                self._names[pid] = describe_process(pid)

        for record in self._sort_records(snapshot):
            name, user = self._names[record.pid]
            table.add_row(
                str(record.pid),
                Text(user[:10]),
                Text(name[:16]),
                Text(" ".join(record.command_line or [])),
                key=str(record.pid),
            )

    def _sort_records(self, snapshot: Snapshot) -> list[ProcessRecord]:
        """Sort records based on the current sort key."""
        if self._sort_key is SortKey.NAME:
            return sorted(snapshot.values(), key=lambda r: (self._names[r.pid][0].lower(), r.pid))
        return sorted(snapshot.values(), key=lambda r: r.pid)


class ProcenvApp(App):
    """Interactive browser for one snapshot."""

    TITLE = "procenv"
    SUB_TITLE = "Process Environment Snapshot"

    CSS = """
    Screen {
        layout: vertical;
    }

    #body {
        height: 1fr;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("f6", "sort", "Sort"),
    ]

    def __init__(self, snapshot: Snapshot | None = None, collector: ProcessCollector | None = None) -> None:
        """
        Initialize the ProcenvApp.

        Args:
            snapshot: Snapshot to display. Collected on mount when omitted.
            collector: Collector used for that, and whose root is shown.
        """
        super().__init__()
        self._collector = collector or ProcessCollector()
        self._snapshot = snapshot

    @property
    def snapshot(self) -> Snapshot:
        """Get the displayed snapshot."""
        return self._snapshot or {}

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield SummaryBar(id="summary")
        yield Horizontal(ProcessTable(), EnvironmentPanel(id="environment"), id="body")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the widgets once the layout is mounted."""
        self.call_after_refresh(self._populate)

    def _populate(self) -> None:
        """Collect a snapshot if needed and fill the widgets."""
        if self._snapshot is None:
            self._snapshot = self._collector.collect()
        self.query_one(SummaryBar).show_summary(self.snapshot, self._collector.root)
        self.query_one(ProcessTable).show_snapshot(self.snapshot)
        self.query_one(EnvironmentPanel).show_record(None)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Show the environment of the highlighted process."""
        if event.row_key is None or event.row_key.value is None:
            return
        pid = int(event.row_key.value)
        panel = self.query_one(EnvironmentPanel)
        if panel.pid == pid:
            return
        panel.show_record(self.snapshot.get(pid))

    def action_sort(self) -> None:
        """Handle sort action - cycle through sort keys."""
        process_table = self.query_one(ProcessTable)
        new_sort_key = process_table.cycle_sort()
        process_table.show_snapshot(self.snapshot)
        self.notify(f"Sort: {new_sort_key.value.upper()}")

