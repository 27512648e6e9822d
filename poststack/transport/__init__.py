"""poststack transports: direct database execution, remote HTTP and its server-side handler."""
from poststack.transport.base import Transport
from poststack.transport.db import DbTransport
from poststack.transport.handler import handle
from poststack.transport.web import WebTransport

__all__ = ["Transport", "DbTransport", "WebTransport", "handle"]
