from __future__ import annotations

import hashlib

from jose import jws
from jose.exceptions import JWSError


class JWSSigner:
    """Signs ownership attestations as compact JWS tokens."""

    def __init__(self, *, secret_key: str, algorithm: str = "HS256") -> None:
        self._secret_key = secret_key
        self.algorithm = algorithm

    def hash(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()

    def sign(self, data: bytes) -> str:
        return jws.sign(data, self._secret_key, algorithm=self.algorithm)

    def verify(self, signature: str, data: bytes) -> bool:
        try:
            payload = jws.verify(signature, self._secret_key, algorithms=[self.algorithm])
        except JWSError:
            return False
        return payload == data
