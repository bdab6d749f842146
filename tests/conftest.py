import sys
from pathlib import Path

import pytest


# Ensure tests can import project packages regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


@pytest.fixture
def soundcloud_json():
    """Bytes of a SoundCloud playlist response with two tracks."""
    return (
        b'{"kind":"playlist","title":"Mix","duration":500000,"user":{"username":"dj"},'
        b'"tracks":['
        b'{"id":1,"duration":180000,"title":"First","user":{"id":9,"username":"u"},'
        b'"stream_url":"http://api.example/tracks/1/stream","waveform":{"w":1}},'
        b'{"id":2,"duration":241999,"title":"Second",'
        b'"stream_url":"http://api.example/tracks/2/stream"}'
        b"]}"
    )
