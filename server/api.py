"""FastAPI server exposing the outfit analysis endpoints."""

from fastapi import FastAPI, HTTPException

from logic.validation import NeedsRequest, OutfitAnalysisRequest
from outfit_app.app import OutfitAnalysisApp
from outfit_app.logging_config import configure_logging

configure_logging()

analysis_app = OutfitAnalysisApp()
app = FastAPI(title="Wardrobe Outfit Engine", version="0.1.0")


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "wardrobe-outfit-engine",
        "environment": analysis_app.config.environment or "local",
    }


@app.post("/analysis/outfits")
async def analyze_outfits(request: OutfitAnalysisRequest) -> dict:
    """Generate, allocate and score outfits for the analyzed item."""

    response = analysis_app.analyze_outfits(request.model_dump(by_alias=False))
    if response.get("status") != "ok":
        raise HTTPException(status_code=400, detail=response.get("message", "outfit analysis failed"))
    return response


@app.post("/analysis/needs")
async def calculate_needs(request: NeedsRequest) -> dict:
    """Return frequency-based category needs for each scenario in a season."""

    response = analysis_app.calculate_needs(request.model_dump(by_alias=False))
    if response.get("status") != "ok":
        raise HTTPException(status_code=400, detail=response.get("message", "needs calculation failed"))
    return response


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
