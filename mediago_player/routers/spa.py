"""Catch-all router — bundled SPAs, then a JSON 404."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from mediago_player.services.assets import Handled

router = APIRouter(include_in_schema=False)


@router.api_route("/{full_path:path}", methods=["GET", "HEAD"])
async def serve_spa(full_path: str, request: Request):
    """Serve the SPA for every path no other route claimed."""
    outcome = request.app.state.spa_chain.resolve(request.url.path)
    if not isinstance(outcome, Handled):
        return JSONResponse(status_code=404, content={"error": "not found"})

    asset = outcome.asset
    if request.method == "HEAD":
        return Response(
            media_type=asset.content_type,
            headers={"Content-Length": str(len(asset.data))},
        )
    return Response(content=asset.data, media_type=asset.content_type)
