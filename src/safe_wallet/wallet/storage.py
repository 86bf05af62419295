# Wallet - Persistence
#
# Wallet tree <-> JSON document <-> encrypted blob on disk.
# The whole file is rewritten on every save (temp file + os.replace, mode 600).

import json
import logging
import os
from pathlib import Path
from typing import Any, Union

from . import encryption
from .errors import MalformedData
from .models import Entry, EntryField, FieldType, Group, Wallet

logger = logging.getLogger(__name__)

WALLET_VERSION = 1

PathLike = Union[str, Path]


def create_new_wallet() -> Wallet:
    """Empty wallet at the current schema version."""
    return Wallet(version=WALLET_VERSION, groups=[])


def wallet_exists(path: PathLike) -> bool:
    """Existence probe only; the file contents are not checked."""
    return Path(path).exists()


def serialize_wallet(wallet: Wallet) -> bytes:
    """Deterministic JSON form of the wallet (fixed key order, UTF-8)."""
    return json.dumps(
        wallet.to_dict(), ensure_ascii=False, separators=(",", ":")
    ).encode("utf-8")


def parse_wallet(data: bytes) -> Wallet:
    """Parse a decrypted payload.

    Raises:
        MalformedData: not JSON, or not shaped like a wallet
    """
    try:
        doc = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedData(f"wallet payload is not valid JSON: {e}") from e

    if not isinstance(doc, dict):
        raise MalformedData("wallet payload must be an object")

    version = doc.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise MalformedData("wallet version must be an integer")

    return Wallet(
        version=version,
        groups=[_parse_group(g) for g in _list_of(doc, "groups")],
    )


def _list_of(doc: dict, key: str) -> list:
    # Missing or null lists load as empty
    value = doc.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedData(f"'{key}' must be a list")
    return value


def _str_of(doc: dict, key: str) -> str:
    value = doc.get(key, "")
    if not isinstance(value, str):
        raise MalformedData(f"'{key}' must be a string")
    return value


def _object(doc: Any, what: str) -> dict:
    if not isinstance(doc, dict):
        raise MalformedData(f"{what} must be an object")
    return doc


def _parse_group(doc: Any) -> Group:
    doc = _object(doc, "group")
    return Group(
        id=_str_of(doc, "id"),
        name=_str_of(doc, "name"),
        groups=[_parse_group(g) for g in _list_of(doc, "groups")],
        entries=[_parse_entry(e) for e in _list_of(doc, "entries")],
    )


def _parse_entry(doc: Any) -> Entry:
    doc = _object(doc, "entry")
    return Entry(
        id=_str_of(doc, "id"),
        title=_str_of(doc, "title"),
        fields=[_parse_field(f) for f in _list_of(doc, "fields")],
    )


def _parse_field(doc: Any) -> EntryField:
    doc = _object(doc, "field")
    raw_type = doc.get("type") or FieldType.GENERAL.value
    try:
        field_type = FieldType(raw_type)
    except ValueError:
        raise MalformedData(f"unknown field type: {raw_type!r}") from None
    return EntryField(
        name=_str_of(doc, "name"),
        value=_str_of(doc, "value"),
        type=field_type,
    )


def save_wallet(wallet: Wallet, path: PathLike, password: str) -> None:
    """Serialize, encrypt and write the wallet with owner-only permissions."""
    path = Path(path)
    blob = encryption.encrypt(serialize_wallet(wallet), password)

    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to a temp file first, then rename for atomicity
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(blob)
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        if tmp_path.exists():
            tmp_path.unlink()
        raise

    # os.open mode is masked by umask; enforce 600 explicitly
    os.chmod(path, 0o600)
    logger.debug("Wallet written to %s (%d bytes)", path, len(blob))


def load_wallet(path: PathLike, password: str) -> Wallet:
    """Read, decrypt and parse a wallet file.

    Raises:
        FileNotFoundError: no file at path
        MalformedData: truncated blob or unparseable payload
        DecryptionFailed: wrong password or tampered file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Wallet file does not exist: {path}")

    blob = path.read_bytes()
    return parse_wallet(encryption.decrypt(blob, password))
