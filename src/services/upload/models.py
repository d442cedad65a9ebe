"""
Per-request data carried through the upload pipeline.
Nothing here outlives a single request.
"""
from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class UploadedFile:
    original_name: str
    buffer: bytes
    size_bytes: int = 0

    def __post_init__(self):
        if not self.size_bytes:
            self.size_bytes = len(self.buffer)


@dataclass(frozen=True)
class TempFileHandle:
    path: str


@dataclass(frozen=True)
class HostedAsset:
    url: str
    secure_url: str
    public_id: str


@dataclass(frozen=True)
class UploadSuccess:
    original_name: str
    hosted_url: str
    secure_url: str
    public_id: str

    ok = True

    def to_dict(self):
        return {
            "originalname": self.original_name,
            "cloudinaryUrl": self.hosted_url,
            "publicId": self.public_id,
            "secureUrl": self.secure_url,
        }


@dataclass(frozen=True)
class UploadFailure:
    original_name: str
    error_message: str

    ok = False

    def to_dict(self):
        return {
            "originalname": self.original_name,
            "error": self.error_message,
        }


UploadResult = Union[UploadSuccess, UploadFailure]


@dataclass(frozen=True)
class BatchResponse:
    successful: tuple = field(default_factory=tuple)
    failed: tuple = field(default_factory=tuple)

    @classmethod
    def from_results(cls, results: List[UploadResult]) -> "BatchResponse":
        return cls(
            successful=tuple(r for r in results if r.ok),
            failed=tuple(r for r in results if not r.ok),
        )

    @property
    def total_processed(self) -> int:
        return len(self.successful) + len(self.failed)

    @property
    def successful_count(self) -> int:
        return len(self.successful)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def to_dict(self):
        return {
            "successful": [r.to_dict() for r in self.successful],
            "failed": [r.to_dict() for r in self.failed],
            "totalProcessed": self.total_processed,
            "successfulUploads": self.successful_count,
            "failedUploads": self.failed_count,
        }
