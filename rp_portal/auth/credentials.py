"""
Admin credential hashing.

Two schemes are supported. `sha256` is a single unsalted SHA-256 hex digest,
the format already stored in `admin_users.password`. `werkzeug` is werkzeug's
salted password hash. New credentials are hashed with the configured scheme;
verification picks the scheme from the stored value, so rows written under
either scheme keep working after the configuration changes.
"""

import hashlib
import hmac
import re

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

_SHA256_HEX = re.compile(r'^[0-9a-f]{64}$')


class Sha256Hasher:
    name = 'sha256'

    def hash(self, plaintext: str) -> str:
        return hashlib.sha256(plaintext.encode('utf-8')).hexdigest()

    def verify(self, stored: str, plaintext: str) -> bool:
        return hmac.compare_digest(stored, self.hash(plaintext))

    def recognizes(self, stored: str) -> bool:
        return bool(_SHA256_HEX.match(stored))


class WerkzeugHasher:
    name = 'werkzeug'

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext)

    def verify(self, stored: str, plaintext: str) -> bool:
        return check_password_hash(stored, plaintext)

    def recognizes(self, stored: str) -> bool:
        # method$salt$hash
        return stored.count('$') == 2


HASHERS = {
    Sha256Hasher.name: Sha256Hasher(),
    WerkzeugHasher.name: WerkzeugHasher(),
}


def get_hasher(scheme=None):
    """Return the hasher for `scheme`, defaulting to PASSWORD_HASH_SCHEME."""
    if scheme is None:
        scheme = current_app.config.get('PASSWORD_HASH_SCHEME', Sha256Hasher.name)
    try:
        return HASHERS[scheme]
    except KeyError:
        raise ValueError(f'Unknown password hash scheme: {scheme}') from None


def hash_password(plaintext: str, scheme=None) -> str:
    return get_hasher(scheme).hash(plaintext)


def verify_password(stored, plaintext: str) -> bool:
    """Check `plaintext` against a stored digest of any supported scheme."""
    if not stored or plaintext is None:
        return False
    for hasher in HASHERS.values():
        if hasher.recognizes(stored):
            return hasher.verify(stored, plaintext)
    return False
