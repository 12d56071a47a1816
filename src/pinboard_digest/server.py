"""Pinboard Digest MCP Server.

FastMCP server with two tools and the plain HTTP routes used by the web UI.
Run: pinboard-digest-mcp
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP, Image
from mcp.types import ToolAnnotations
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from . import __version__
from .config import configure_logging, get_transport
from .core.clients.assets import relay_asset
from .core.errors import EmptyResultError, InvalidInputError, PinboardError, UpstreamError
from .core.pipeline import DEFAULT_LIMIT, aggregate_board

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)

mcp = FastMCP(
    "Pinboard Digest",
    instructions="Top pins of any public Pinterest board, ranked by likes, saves, or a combined score. Pass a board URL or username/board.",
)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


# ─── Tool 1: Board Pins ──────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def pinterest_board_pins(board: str, limit: int = DEFAULT_LIMIT, sort: str = "combined") -> dict:
    """Top pins of a public Pinterest board with images, links, likes and saves.

    Args:
        board: Board URL (https://www.pinterest.com/alice/travel/) or 'alice/travel'.
        limit: Number of pins to return, 1-48. Default 12.
        sort: 'likes', 'saves', or 'combined' (2 x likes + saves). Default 'combined'.
    """
    result = await aggregate_board(board, limit, sort)
    payload = result.to_payload()
    payload["summary"] = f"{len(result.pins)} pins from '{result.board.name}' by {result.board.owner}"
    return payload


# ─── Tool 2: Pin Image ───────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def pinterest_pin_image(url: str) -> Image:
    """Fetch one pin image from the Pinterest CDN (i.pinimg.com only).

    Args:
        url: An imageUrl returned by pinterest_board_pins.
    """
    asset = await relay_asset(url)
    mime = asset.content_type.split(";", 1)[0].strip().lower()
    subtype = mime[len("image/"):] if mime.startswith("image/") else ""
    return Image(data=asset.content, format=subtype or "jpeg")


# ─── HTTP routes ─────────────────────────────────────────────────────────────


@mcp.custom_route("/api/pinterest", methods=["GET"])
async def board_pins_route(request: Request) -> Response:
    """Aggregation endpoint: ?board=&limit=&sort=."""
    params = request.query_params
    try:
        result = await aggregate_board(
            params.get("board"),
            params.get("limit", DEFAULT_LIMIT),
            params.get("sort") or "combined",
        )
    except EmptyResultError as exc:
        return _error_response(exc.message, 404)
    except PinboardError as exc:
        # Parse and upstream failures alike are reported as bad requests here.
        return _error_response(exc.message, 400)

    return JSONResponse(result.to_payload(), headers={"Cache-Control": "no-store"})


@mcp.custom_route("/api/proxy", methods=["GET"])
async def asset_proxy_route(request: Request) -> Response:
    """Image relay endpoint: ?url= on i.pinimg.com."""
    try:
        asset = await relay_asset(request.query_params.get("url"))
    except InvalidInputError as exc:
        return _error_response(exc.message, 400)
    except UpstreamError as exc:
        return _error_response(exc.message, 502)

    return Response(
        content=asset.content,
        media_type=asset.content_type,
        headers={"Cache-Control": asset.cache_control},
    )


@mcp.custom_route("/health", methods=["GET"])
async def health_route(request: Request) -> Response:
    return JSONResponse({"status": "ok", "version": __version__})


def main():
    """Entry point for the CLI command."""
    configure_logging()
    transport = get_transport()
    logger.info("Starting Pinboard Digest (transport=%s)", transport)
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
