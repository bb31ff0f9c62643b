"""State – persisted registration record and acknowledgement log."""
from starflight.state.codec import (
    DELIMITER,
    canonical_tags,
    decode_id_log,
    decode_tags,
    encode_id_log,
    encode_tags,
)
from starflight.state.kv import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from starflight.state.models import RegistrationState
from starflight.state.store import SCHEMA_VERSION, RegistrationStateStore

__all__ = [
    "DELIMITER",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "RegistrationState",
    "RegistrationStateStore",
    "SCHEMA_VERSION",
    "canonical_tags",
    "decode_id_log",
    "decode_tags",
    "encode_id_log",
    "encode_tags",
]
