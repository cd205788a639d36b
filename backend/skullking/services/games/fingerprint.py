import hashlib
import json


def fingerprint(state) -> str:
    """Digest of a JSON-serializable game state.

    Keys are sorted and separators fixed so the same state always produces
    the same digest, in any process. Lists keep their order, so reordering
    players changes the result.
    """
    canonical = json.dumps(state, sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()
