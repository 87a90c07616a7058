import sys
from pathlib import Path

# Ensure the src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


import pytest

from tap_stats.datasource import CaptureSource
from tap_stats.host import HostContext


PACKETS = [
    {"frame_number": 1, "timestamp": 1.0, "source_ip": "10.0.0.1", "destination_ip": "10.0.0.2",
     "source_port": 40000, "destination_port": 443, "protocol": "TCP", "protocol_l3": "IPv4",
     "packet_length": 60},
    {"frame_number": 2, "timestamp": 1.5, "source_ip": "10.0.0.2", "destination_ip": "10.0.0.1",
     "source_port": 443, "destination_port": 40000, "protocol": "TCP", "protocol_l3": "IPv4",
     "packet_length": 1500},
    {"frame_number": 3, "timestamp": 2.0, "source_ip": "10.0.0.1", "destination_ip": "8.8.8.8",
     "source_port": 5353, "destination_port": 53, "protocol": "UDP", "protocol_l3": "IPv4",
     "packet_length": 80},
    {"frame_number": 4, "timestamp": 4.0, "source_ip": "10.0.0.1", "destination_ip": "10.0.0.2",
     "source_port": 40000, "destination_port": 443, "protocol": "TCP", "protocol_l3": "IPv4",
     "packet_length": 60},
]


class RecordingHost(HostContext):
    """Host that records every callback for assertions."""

    def __init__(self) -> None:
        self.filters = []
        self.clipboard = []
        self.warnings = []
        self.actions = []
        self.draws = []
        super().__init__(
            update_filter=lambda text, force: self.filters.append((text, force)),
            set_clipboard=self.clipboard.append,
            show_warning=lambda title, msg: self.warnings.append((title, msg)),
            filter_action=lambda expr, action, kind: self.actions.append((expr, action, kind)),
            draw_rows=lambda count, expand: self.draws.append((count, expand)),
        )


@pytest.fixture
def capture() -> CaptureSource:
    return CaptureSource.from_records(PACKETS, file_name="cap.pcap")


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()
