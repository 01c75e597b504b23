"""Parking lot state with a tiny HTTP endpoint to reserve and query spots."""

from __future__ import annotations

import argparse
import logging
import re
import socketserver

from parkingsim.ledmatrix import LED_COUNT, LedMatrix
from parkingsim.ssd1306 import Display

logger = logging.getLogger(__name__)

_JSON_HEADER = (
    "HTTP/1.1 200 OK\r\n"
    "Content-Type: application/json\r\n"
    "Access-Control-Allow-Origin: *\r\n\r\n"
)
_NOT_FOUND = (
    "HTTP/1.1 404 Not Found\r\n"
    "Content-Type: text/plain\r\n"
    "Access-Control-Allow-Origin: *\r\n\r\n"
    "Requisição não reconhecida."
)
_SPOT_PREFIX = "GET /vaga"
_SPOT_PATTERN = re.compile(r"GET /vaga\s*([+-]?\d+)")
_RECV_SIZE = 4096


class ParkingLot:
    """Occupancy of each spot, mirrored on an optional display and LED matrix."""

    def __init__(self, total: int = LED_COUNT, display: Display | None = None,
                 matrix: LedMatrix | None = None) -> None:
        if not 1 <= total <= LED_COUNT:
            raise ValueError(f"total must be between 1 and {LED_COUNT}, got {total}")
        self.total = total
        self.display = display
        self.matrix = matrix
        self.spots = [False] * total

    def toggle(self, spot: int) -> bool:
        """Reserve a free spot or release an occupied one; return the new state."""
        if not 1 <= spot <= self.total:
            raise ValueError(f"spot must be between 1 and {self.total}, got {spot}")
        occupied = not self.spots[spot - 1]
        self.spots[spot - 1] = occupied
        if self.matrix is not None:
            self.matrix.set_spot(spot, occupied)
        self.show_on_display()
        return occupied

    def occupied_count(self) -> int:
        """How many spots are taken."""
        return sum(self.spots)

    def show_on_display(self) -> None:
        """Draw the spot total and the number taken, then refresh the display."""
        if self.display is None:
            return
        self.display.fill(False)
        self.display.draw_string(f"Nº Vagas: {self.total}", 0, 5)
        self.display.draw_string(f"Ocupadas: {self.occupied_count()}", 0, 20)
        self.display.send_data()

    def handle_request(self, request: str) -> str:
        """Answer one raw HTTP request with a complete HTTP response."""
        start = request.find(_SPOT_PREFIX)
        if start >= 0:
            match = _SPOT_PATTERN.match(request, start)
            if match:
                spot = int(match.group(1))
                if 1 <= spot <= self.total:
                    occupied = self.toggle(spot)
                    logger.info("Vaga %d %s", spot, "ocupada" if occupied else "liberada")
                    state = "true" if occupied else "false"
                    return f'{_JSON_HEADER}{{"vaga": {spot}, "ocupada": {state}}}'

        if "GET /status" in request:
            states = ",".join(str(int(taken)) for taken in self.spots)
            return f'{_JSON_HEADER}{{"vagas":[{states}]}}'

        return _NOT_FOUND


class _Handler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        data = self.request.recv(_RECV_SIZE)
        if not data:
            return
        request = data.decode("utf-8", errors="replace")
        logger.debug("Requisição: %s", request)
        response = self.server.lot.handle_request(request)
        self.request.sendall(response.encode("utf-8"))


class _Server(socketserver.TCPServer):
    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], lot: ParkingLot) -> None:
        self.lot = lot
        super().__init__(address, _Handler)


def serve(lot: ParkingLot, host: str = "0.0.0.0", port: int = 80) -> None:
    """Answer requests for ``lot`` on ``host``:``port`` until interrupted."""
    with _Server((host, port), lot) as server:
        bound_host, bound_port = server.server_address[:2]
        logger.info("Listening on %s:%d", bound_host, bound_port)
        server.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the parking lot server."""
    parser = argparse.ArgumentParser(description="Smart parking lot simulator.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=80, help="TCP port to listen on")
    parser.add_argument("--spots", type=int, default=LED_COUNT,
                        help=f"number of parking spots (1-{LED_COUNT})")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    display = Display()
    display.config()
    matrix = LedMatrix()
    try:
        lot = ParkingLot(args.spots, display, matrix)
    except ValueError as exc:
        parser.error(str(exc))
    lot.show_on_display()
    matrix.clear_all()
    try:
        serve(lot, args.host, args.port)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())