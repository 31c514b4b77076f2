from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from mockprep.errors import MockPrepError


class DeviceErrorKind(str, Enum):
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    BUSY = "busy"
    NOT_SUPPORTED = "not_supported"
    UNKNOWN = "unknown"


DEVICE_ERROR_MESSAGES: dict[DeviceErrorKind, str] = {
    DeviceErrorKind.PERMISSION: "Camera/microphone access denied. Please allow access to continue.",
    DeviceErrorKind.NOT_FOUND: "No camera/microphone found. Please connect devices to use this feature.",
    DeviceErrorKind.BUSY: "Camera/microphone is already in use by another application.",
    DeviceErrorKind.NOT_SUPPORTED: (
        "Your browser does not support camera access. Please use a modern browser like Chrome, "
        "Firefox, Safari, or Edge to use this feature."
    ),
    DeviceErrorKind.UNKNOWN: "Failed to access camera/microphone. Please check your browser settings.",
}

_ERROR_NAMES: dict[str, DeviceErrorKind] = {
    "NotAllowedError": DeviceErrorKind.PERMISSION,
    "PermissionDeniedError": DeviceErrorKind.PERMISSION,
    "NotFoundError": DeviceErrorKind.NOT_FOUND,
    "DevicesNotFoundError": DeviceErrorKind.NOT_FOUND,
    "NotReadableError": DeviceErrorKind.BUSY,
    "TrackStartError": DeviceErrorKind.BUSY,
    "NotSupportedError": DeviceErrorKind.NOT_SUPPORTED,
}


class DeviceError(MockPrepError):
    def __init__(self, kind: DeviceErrorKind, message: str = ""):
        self.kind = kind
        super().__init__(message or DEVICE_ERROR_MESSAGES[kind])


def classify_device_error(name: str) -> DeviceErrorKind:
    return _ERROR_NAMES.get(name, DeviceErrorKind.UNKNOWN)


def device_error_message(kind: DeviceErrorKind) -> str:
    return DEVICE_ERROR_MESSAGES[kind]


class MediaCapture(Protocol):
    is_supported: bool

    async def start(self) -> bool:
        ...

    async def stop(self) -> None:
        ...

    async def retry(self) -> bool:
        ...

    async def capture_frame(self) -> bytes | None:
        ...


@dataclass(slots=True, frozen=True)
class TranscriptSegment:
    text: str
    is_final: bool = True


class SpeechRecognizer(Protocol):
    """Continuous recognition; results come back through the session's handlers."""

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...


TRANSIENT_RECOGNITION_ERRORS = frozenset({"no-speech", "aborted"})
PERMISSION_RECOGNITION_ERRORS = frozenset({"not-allowed", "service-not-allowed"})
