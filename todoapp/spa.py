# todoapp/spa.py
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

logger = logging.getLogger(__name__)


def mount_spa(app: FastAPI, directory: str, index_file: str = "index.html") -> bool:
    """
    Serve a built front-end from ``directory``.

    Existing files are returned as-is; any other non-API GET falls back to
    the index document so client-side routes resolve. Must be registered
    after the API routers.
    """
    root = Path(directory).resolve()
    index = root / index_file
    if not index.is_file():
        logger.info("No front-end found at %s; static hosting disabled", root)
        return False

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_spa(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail=f"No API route for /{full_path}")

        if full_path:
            candidate = (root / full_path).resolve()
            if candidate.is_file() and candidate.is_relative_to(root):
                return FileResponse(candidate)
        return FileResponse(index)

    logger.info("Serving front-end from %s", root)
    return True
