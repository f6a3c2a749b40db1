"""Keyfile loading.

The keyfile is a JSON object mapping a target name to its credentials::

    {
        "localhost": {"key": "", "secret": "", "server": "http://localhost:6543"},
        "prod": {"key": "ABCD", "secret": "xyz", "server": "https://www.encodeproject.org"}
    }
"""

import json

from pydantic import ValidationError

from portal.models.keypair import Keypair


def load_keyfile(path: str) -> dict[str, Keypair]:
    """Read and validate every entry of a keyfile.

    Args:
        path (str): Path of the JSON keyfile.

    Returns:
        dict[str, Keypair]: Keyfile entries indexed by target name.

    Raises:
        ValueError: If the file cannot be read, is not valid JSON, is not a JSON object,
            or contains an invalid entry.
    """
    try:
        with open(path, encoding="utf-8") as keyfile:
            raw = json.load(keyfile)
    except OSError as e:
        raise ValueError(f"Cannot read keyfile '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Keyfile '{path}' is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Keyfile '{path}' must contain a JSON object, got {type(raw).__name__}.")

    keypairs: dict[str, Keypair] = {}
    for name, entry in raw.items():
        try:
            keypairs[name] = Keypair.model_validate(entry)
        except ValidationError as e:
            raise ValueError(f"Keyfile '{path}' has an invalid entry '{name}': {e}") from e
    return keypairs


def get_keypair(path: str, name: str) -> Keypair:
    """Return the keyfile entry for one target.

    Raises:
        ValueError: If the keyfile is invalid or has no entry called `name`.
    """
    keypairs = load_keyfile(path)
    if name not in keypairs:
        raise ValueError(f"Key '{name}' not found in keyfile '{path}'. Available keys: {', '.join(sorted(keypairs)) or 'none'}")
    return keypairs[name]
