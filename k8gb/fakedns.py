"""A small UDP DNS server answering from a fixed table, for tests against an edge DNS."""

from __future__ import annotations

import logging
import re
import socketserver
import threading
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone

import dns.exception
import dns.message
import dns.name
import dns.opcode
import dns.rcode
import dns.rdata
import dns.rdataclass
import dns.rdatatype

logger = logging.getLogger(__name__)

ZONE = dns.name.from_text("example.com.")
DEFAULT_PORT = 7753
RECORD_TTL = 3600

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _parse_duration(text: str) -> timedelta:
    """Parse durations such as ``10m`` or ``1h30m``; raise ValueError otherwise."""
    sign = 1
    rest = text
    if rest[:1] in ("-", "+"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")
    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(rest):
        if match.start() != pos:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(rest):
        raise ValueError(f"invalid duration {text!r}")
    return timedelta(seconds=sign * total)


def old_edge_timestamp(threshold: str) -> str:
    """Return the UTC time ``threshold`` ago; an unparsable threshold counts as zero."""
    try:
        duration = _parse_duration(threshold)
    except ValueError:
        duration = timedelta(0)
    before = datetime.now(timezone.utc) - duration
    return before.strftime("%Y-%m-%dT%H:%M:%S")


def default_records() -> dict[str, list[str]]:
    """Return the record table served by default."""
    return {
        "localtargets-roundrobin.cloud.example.com.": ["10.1.0.3", "10.1.0.2", "10.1.0.1"],
        "test-gslb-heartbeat-eu.example.com.": [old_edge_timestamp("10m")],
        "test-gslb-heartbeat-za.example.com.": [old_edge_timestamp("3m")],
    }


def parse_query(message: dns.message.Message, records: Mapping[str, Sequence[str]]) -> None:
    """Add answers for the A and TXT questions of ``message`` from ``records``."""
    for question in message.question:
        if question.rdtype not in (dns.rdatatype.A, dns.rdatatype.TXT):
            continue
        name = question.name.to_text()
        values = records.get(name, [])
        logger.info("Query for %s %s, found: %s", dns.rdatatype.to_text(question.rdtype), name, values)
        for value in values:
            try:
                rdata = dns.rdata.from_text(dns.rdataclass.IN, question.rdtype, value)
            except dns.exception.DNSException:
                continue
            rrset = message.find_rrset(
                message.answer, question.name, dns.rdataclass.IN, question.rdtype, create=True
            )
            rrset.add(rdata, RECORD_TTL)


def handle_dns_request(data: bytes, records: Mapping[str, Sequence[str]]) -> bytes:
    """Answer one DNS request in wire format; queries outside the zone are refused."""
    query = dns.message.from_wire(data)
    response = dns.message.make_response(query)
    if not query.question or not query.question[0].name.is_subdomain(ZONE):
        response.set_rcode(dns.rcode.REFUSED)
        return response.to_wire()
    if query.opcode() == dns.opcode.QUERY:
        parse_query(response, records)
    return response.to_wire()


class _Handler(socketserver.BaseRequestHandler):
    server: _UDPServer

    def handle(self) -> None:
        data, sock = self.request
        try:
            reply = handle_dns_request(data, self.server.records)
        except dns.exception.DNSException:
            logger.exception("Failed to parse message")
            return
        try:
            sock.sendto(reply, self.client_address)
        except OSError:
            logger.exception("Failed to write message")


class _UDPServer(socketserver.UDPServer):
    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], records: Mapping[str, Sequence[str]]) -> None:
        self.records = records
        super().__init__(address, _Handler)


class FakeDNSServer:
    """UDP DNS server answering from a record table in a background thread."""

    def __init__(
        self,
        host: str = "",
        port: int = DEFAULT_PORT,
        records: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.records = default_records() if records is None else records
        self._server: _UDPServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def address(self) -> tuple[str, int]:
        """The bound address; valid while the server runs."""
        if self._server is None:
            raise RuntimeError("server is not running")
        host, port = self._server.server_address[:2]
        return str(host), int(port)

    def start(self) -> None:
        """Bind the socket and serve requests in a daemon thread."""
        if self._server is not None:
            raise RuntimeError("server is already running")
        self._server = _UDPServer((self.host, self.port), self.records)
        logger.info("Starting at %d", self.address[1])
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        self._server = None
        self._thread = None

    def __enter__(self) -> FakeDNSServer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()