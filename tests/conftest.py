from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from culture_pulse.core.config_loader import ConfigLoader  # noqa: E402
from culture_pulse.db.feedback_store import FeedbackStore  # noqa: E402
from culture_pulse.db.sqlite_client import SQLiteClient  # noqa: E402


@pytest.fixture()
def sqlite_client(tmp_path: Path):
    client = SQLiteClient(tmp_path / "culture_pulse.db")
    client.initialize_schema()
    yield client
    client.close()


@pytest.fixture()
def store(sqlite_client: SQLiteClient) -> FeedbackStore:
    return FeedbackStore(sqlite_client=sqlite_client, slot="culture_pulse_data")


@pytest.fixture(autouse=True)
def _clear_config_cache():
    ConfigLoader.load.cache_clear()
    yield
    ConfigLoader.load.cache_clear()
