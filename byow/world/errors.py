"""World generation error kinds.

Every failure is a regular, catchable exception carrying a stable ``kind``
string; the HTTP layer maps kinds onto status codes.
"""


class WorldError(Exception):
    kind = "world_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class InvalidDimension(WorldError):
    kind = "invalid_dimension"


class AllocationFailure(WorldError):
    kind = "allocation_failure"


class NoPath(WorldError):
    kind = "no_path"


class InvalidRoomId(WorldError):
    kind = "invalid_room_id"


class EncodingOverflow(WorldError):
    kind = "encoding_overflow"


__all__ = [
    "WorldError",
    "InvalidDimension",
    "AllocationFailure",
    "NoPath",
    "InvalidRoomId",
    "EncodingOverflow",
]
