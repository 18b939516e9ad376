from __future__ import annotations

from enum import Enum


class ProfileField(str, Enum):
    AVATAR = "avatar"
    DESCRIPTION = "description"
    IMAGE = "image"
    DID = "did"

    @property
    def max_length(self) -> int | None:
        """Longest value the field stores; None means unbounded text."""
        return _MAX_LENGTHS.get(self)


_MAX_LENGTHS = {
    ProfileField.AVATAR: 1024,
    ProfileField.IMAGE: 1024,
    ProfileField.DID: 255,
}
