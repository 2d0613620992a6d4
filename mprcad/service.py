"""
HTTP front end: ``POST /api/process-mpr`` takes a multipart upload (field
``mprFile``) and answers with the DXF, ``GET /`` serves a bare upload form.
"""

from __future__ import annotations

import argparse
import json
import os
from email import policy
from email.parser import BytesParser
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, Sequence, Tuple

from .convert import convert_bytes
from .errors import MissingInputError, MprConversionError

PROCESS_PATH = "/api/process-mpr"
UPLOAD_FIELD = "mprFile"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

UPLOAD_FORM = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>MPR to DXF Converter</title></head>
<body>
<h1>MPR to DXF Converter</h1>
<form method="post" action="/api/process-mpr" enctype="multipart/form-data">
<input type="file" name="mprFile" accept=".mpr" required>
<button type="submit">Convert to DXF</button>
</form>
</body>
</html>
"""


def parse_multipart(content_type: str, body: bytes) -> Dict[str, Tuple[str | None, bytes]]:
    """Map form field name -> (filename, payload) for a multipart/form-data body."""

    if not content_type.lower().startswith("multipart/form-data"):
        return {}
    head = f"Content-Type: {content_type}\r\nMIME-Version: 1.0\r\n\r\n".encode("latin-1")
    message = BytesParser(policy=policy.HTTP).parsebytes(head + body)
    if not message.is_multipart():
        return {}
    fields: Dict[str, Tuple[str | None, bytes]] = {}
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name:
            continue
        payload = part.get_payload(decode=True) or b""
        fields[str(name)] = (part.get_filename(), payload)
    return fields


class MprRequestHandler(BaseHTTPRequestHandler):
    server_version = "MprToDxf/0.1"

    def log_message(self, format, *args):
        host = self.headers.get("Host", "-") if hasattr(self, "headers") and self.headers else "-"
        print(f"{self.address_string()} host={host} :: {format % args}")

    def _send_json(self, status: int, payload: dict) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        path = self.path.split("?", 1)[0]
        if path not in ("/", "/index.html"):
            self._send_json(404, {"error": "Not found"})
            return
        body = UPLOAD_FORM.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self):
        path = self.path.split("?", 1)[0]
        if path != PROCESS_PATH:
            self._send_json(404, {"error": "Not found"})
            return
        try:
            length = int(self.headers.get("Content-Length", "0"))
        except ValueError:
            length = 0
        raw = self.rfile.read(length) if length > 0 else b""

        fields = parse_multipart(self.headers.get("Content-Type", ""), raw)
        _, payload = fields.get(UPLOAD_FIELD, (None, b""))
        try:
            document = convert_bytes(payload)
        except MissingInputError as exc:
            self._send_json(exc.status, {"error": str(exc)})
            return
        except MprConversionError as exc:
            print(f"[error] {exc}")
            self._send_json(exc.status, {"error": str(exc) or "Error processing the MPR file."})
            return

        for warning in document.warnings:
            print(f"[!] {warning.format()}")
        body = document.encode()
        self.send_response(200)
        self.send_header("Content-Type", document.mime_type)
        self.send_header("Content-Disposition", f'attachment; filename="{document.filename}"')
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def make_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), MprRequestHandler)


def run(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    httpd = make_server(host, port)
    print(f"[+] Serving MPR conversion on http://{host}:{httpd.server_address[1]}{PROCESS_PATH}", flush=True)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    default_host = os.environ.get("HOST", DEFAULT_HOST)
    try:
        default_port = int(os.environ.get("PORT") or DEFAULT_PORT)
    except ValueError:
        default_port = DEFAULT_PORT
    parser = argparse.ArgumentParser(description="Serve the MPR to DXF converter over HTTP.")
    parser.add_argument("--host", default=default_host, help=f"Host interface to bind (default: {default_host})")
    parser.add_argument("--port", type=int, default=default_port, help=f"Port to listen on (default: {default_port})")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
