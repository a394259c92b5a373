"""
Draw Topology Web Application.

A FastAPI server around the topology engine: recompute a page posted as JSON,
import a DXF drawing as a page, or export a page as DXF.
"""

import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from . import __version__, config
from .converter import import_objects_from_dxf, page_to_dxf
from .serialize import objects_from_dicts, objects_to_dicts
from .topology import recompute_topology, topology_stats

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Draw Topology",
    description="Merge connected lines and compute junctions and wire nets for grid drawings",
    version=__version__,
)


class PageRequest(BaseModel):
    objects: List[Dict[str, Any]] = []
    include_derived: bool = True


@app.post("/recompute")
async def recompute(page: PageRequest):
    """Recompute a page's topology and return its new object collection."""
    try:
        objects = objects_from_dicts(page.objects)
        result = recompute_topology(objects)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Recompute failed")
        raise HTTPException(
            status_code=500,
            detail=f"Error processing page: {str(e)}"
        )

    return {
        "objects": objects_to_dicts(result, include_derived=page.include_derived),
        "stats": topology_stats(objects, result),
    }


@app.post("/import/dxf")
async def import_dxf(file: UploadFile = File(...)):
    """
    Import an uploaded DXF drawing as a page.

    Connected line segments come back merged, with junctions computed.
    """
    filename = file.filename or "unknown"
    if Path(filename).suffix.lower() != ".dxf":
        raise HTTPException(
            status_code=400,
            detail="Unsupported file format. Please upload a .dxf file."
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    try:
        objects = import_objects_from_dxf(content)
        result = recompute_topology(objects)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("DXF import of %s failed", filename)
        raise HTTPException(
            status_code=500,
            detail=f"Error processing file: {str(e)}"
        )

    return {"objects": objects_to_dicts(result), "stats": topology_stats(objects, result)}


@app.post("/export/dxf")
async def export_dxf(page: PageRequest):
    """Recompute a page and return it as a DXF attachment."""
    try:
        objects = objects_from_dicts(page.objects)
        result = recompute_topology(objects)
        content = page_to_dxf(result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("DXF export failed")
        raise HTTPException(
            status_code=500,
            detail=f"Error processing page: {str(e)}"
        )

    headers = {
        "Content-Disposition": 'attachment; filename="page.dxf"',
        "X-Stats": json.dumps(topology_stats(objects, result)),
    }
    return StreamingResponse(io.BytesIO(content), media_type="application/dxf", headers=headers)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": config.SERVICE_NAME}


def main():
    """Run the application with uvicorn."""
    import uvicorn
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
