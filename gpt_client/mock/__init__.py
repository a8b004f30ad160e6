"""Offline mock transport for the CLI and tests."""

from .transport import MOCK_API_KEY, MOCK_API_URL, build_mock_transport, mock_reply, sse_frame, stream_frames

__all__ = ["MOCK_API_KEY", "MOCK_API_URL", "build_mock_transport", "mock_reply", "sse_frame", "stream_frames"]
