"""Connection failure classification for readiness probes."""

from enum import StrEnum


class ProbeErrorKind(StrEnum):
    """Why a probe connection could not be opened."""

    STARTING_UP = "STARTING_UP"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    HOST_UNRESOLVED = "HOST_UNRESOLVED"
    OTHER = "OTHER"


TRANSIENT_PROBE_ERROR_KINDS = frozenset(
    {
        ProbeErrorKind.STARTING_UP,
        ProbeErrorKind.HOST_UNRESOLVED,
    }
)


__all__ = ["ProbeErrorKind", "TRANSIENT_PROBE_ERROR_KINDS"]
