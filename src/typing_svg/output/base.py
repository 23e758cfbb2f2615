"""Base class for output format providers."""

from abc import ABC, abstractmethod

from ..timeline.models import TypingTimeline


class OutputProvider(ABC):
    """Abstract base class for output format providers."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, timeline: TypingTimeline) -> bytes:
        """
        Encode a synthesized timeline into the output format.

        Args:
            timeline: Complete timeline for one generation request

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to a file.

        Args:
            data: Encoded data to write
        """
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)
