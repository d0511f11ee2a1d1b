"""HTTP + WebSocket preview server for the browser map viewer."""

import asyncio
import itertools
import json
import logging
import os
from http.server import HTTPServer, SimpleHTTPRequestHandler
from threading import Thread

import websockets

from ..core.animation import WaveScheduler
from ..core.graph import Wave

logger = logging.getLogger(__name__)

_ws_clients: set = set()
_http_server: HTTPServer | None = None
_ws_server = None

VIEWER_HTML = os.path.join(os.path.dirname(__file__), "viewer.html")


class PreviewHandler(SimpleHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/" or self.path == "/index.html":
            self.send_response(200)
            self.send_header("Content-Type", "text/html")
            self.end_headers()
            with open(VIEWER_HTML, "rb") as f:
                self.wfile.write(f.read())
        else:
            self.send_response(404)
            self.end_headers()

    def log_message(self, format, *args):
        pass  # Suppress HTTP logs


def _tracks_to_json(state) -> str:
    """Convert the session's track shapes to JSON for the viewer."""
    viewport = state.viewport()
    data = {
        "type": "tracks",
        "width": viewport.width_px,
        "height": viewport.height_px,
        "shapes": [],
    }
    for track, shape in zip(state.presenter.tracks, state.presenter.shapes):
        points = [viewport.coordinate_to_screen(c) for c in shape.coordinates]
        data["shapes"].append({
            "id": shape.shape_id,
            "name": track.name,
            "stroke": track.color.hex,
            "points": [[p.x, p.y] for p in points],
        })
    return json.dumps(data)


def _wave_to_json(viewport, index: int, wave: Wave) -> str:
    edges = []
    for source, target in wave:
        a = viewport.coordinate_to_screen(source)
        b = viewport.coordinate_to_screen(target)
        edges.append([a.x, a.y, b.x, b.y])
    return json.dumps({"type": "wave", "index": index, "edges": edges})


async def broadcast(message: str):
    """Send a message to all connected WebSocket clients."""
    if not _ws_clients:
        return
    await asyncio.gather(
        *[client.send(message) for client in list(_ws_clients)],
        return_exceptions=True,
    )


async def _ws_handler(websocket):
    _ws_clients.add(websocket)
    try:
        async for _ in websocket:
            pass  # We only send to clients, not receive
    finally:
        _ws_clients.discard(websocket)


async def start_preview_server(state, http_port: int = 3333, ws_port: int = 3334):
    """Start the HTTP and WebSocket servers."""
    global _http_server, _ws_server

    # Start HTTP server in a thread
    _http_server = HTTPServer(("localhost", http_port), PreviewHandler)
    http_thread = Thread(target=_http_server.serve_forever, daemon=True)
    http_thread.start()

    # Start WebSocket server
    _ws_server = await websockets.serve(_ws_handler, "localhost", ws_port)
    logger.info("Preview serving on http://localhost:%d (ws %d)", http_port, ws_port)

    # Send initial data after a brief delay for client connection
    asyncio.get_running_loop().call_later(1.0, lambda: asyncio.ensure_future(update_preview(state)))


def animate_graph(state, start) -> WaveScheduler:
    """Stream the graph's waves from ``start`` to the viewer, one per tick."""
    if state.animation is not None:
        state.animation.cancel()

    viewport = state.viewport()
    counter = itertools.count()

    def send_wave(wave: Wave):
        return broadcast(_wave_to_json(viewport, next(counter), wave))

    scheduler = WaveScheduler(
        state.graph.iter_waves(start),
        on_wave=send_wave,
        interval_s=state.params.wave_interval_s,
    )
    state.animation = scheduler.start()
    return scheduler


async def update_preview(state):
    """Send the track polygons, then replay the graph animation if one is built."""
    if not _ws_clients:
        return

    await broadcast(_tracks_to_json(state))
    if state.graph is not None and state.graph.vertices:
        animate_graph(state, state.graph.random_vertex())
