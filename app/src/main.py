"""FastAPI web app for typing SVG generation."""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response

from typing_svg.animation_pipeline import encode_typing_svg
from typing_svg.output import media_type_for_output_format
from typing_svg.params import DEFAULT_PARAMS, build_params, parse_query_params

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="Typing SVG")


def generate_output(query: dict[str, str]) -> bytes:
    """Generate a typing SVG from raw query-string values."""
    overrides = parse_query_params(query)
    params = build_params(overrides)
    return encode_typing_svg(overrides.get("lines", []), params)


@app.get("/api/svg")
def svg(
    request: Request,
    lines: str = Query("", description="Lines to type, separated by ';'"),
):
    """Generate and return an animated typing SVG."""
    query = dict(request.query_params)
    query["lines"] = lines
    try:
        encoded = generate_output(query)
        return Response(
            content=encoded,
            media_type=media_type_for_output_format("svg"),
            headers={"Cache-Control": "public, max-age=0, must-revalidate"},
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to generate SVG")
        raise HTTPException(status_code=500, detail=f"Failed to generate SVG: {e}")


@app.get("/api/defaults")
def defaults():
    """Return the documented parameter defaults."""
    return JSONResponse(DEFAULT_PARAMS)
