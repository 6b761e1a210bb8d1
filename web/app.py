"""
PD Checker - FastAPI Web Application

HTTP surface over the planning rights facade and the property fact store.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pd_checker import __version__
from pd_checker.api import check_planning_rights
from pd_checker.facts import PropertyFactStore, create_sample_properties
from pd_checker.rules import (
    PlanningConstraints,
    PlanningRulesEngine,
    PropertyFacts,
    PropertyType,
)


def get_log_level() -> int:
    """Log level from PD_CHECKER_LOG_LEVEL, INFO if unset or unrecognised."""
    name = os.environ.get("PD_CHECKER_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="PD Checker",
    description="Permitted Development rights checks for UK properties",
    version=__version__,
)

# Global storage instance
_store: Optional[PropertyFactStore] = None


def get_store() -> PropertyFactStore:
    """Get or create the global property fact store."""
    global _store
    if _store is None:
        storage_path = os.environ.get(
            "PROPERTY_FACTS_PATH",
            str(Path(__file__).parent.parent / "data" / "properties.json")
        )
        _store = PropertyFactStore(storage_path)

        # Seed reference properties if storage is empty
        if _store.count() == 0:
            create_sample_properties(_store)

    return _store


# Pydantic models for request/response
class ConstraintsInput(BaseModel):
    article_4_direction: bool = False
    conservation_area: bool = False
    listed_building: bool = False
    national_park: bool = False
    aonb: bool = False
    world_heritage: bool = False
    tpo: bool = False
    flood_zone: bool = False


class PropertyCreate(BaseModel):
    address: str
    postcode: str = ""
    local_authority: str = ""
    property_type: str = "house"
    constraints: ConstraintsInput = ConstraintsInput()
    notes: Optional[str] = None


class PlanningCheckRequest(BaseModel):
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


# Routes

@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "properties": get_store().count()}


@app.get("/api/rules")
async def list_rules():
    """List the registered planning rules in evaluation order."""
    engine = PlanningRulesEngine()
    return {
        "rules": [rule.to_dict() for rule in engine.rules],
        "count": len(engine.rules),
    }


@app.get("/api/properties")
async def list_properties(local_authority: Optional[str] = None, property_type: Optional[str] = None):
    """List stored properties with optional filtering."""
    try:
        prop_type = PropertyType(property_type) if property_type else None
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid property type: {property_type}")

    properties = get_store().search(local_authority=local_authority, property_type=prop_type)

    return {
        "properties": [p.to_dict() for p in properties],
        "count": len(properties),
    }


def _to_facts(data: PropertyCreate, address: str) -> PropertyFacts:
    """Build facts from a request body, raising ValueError on bad input."""
    return PropertyFacts(
        address=address.strip(),
        postcode=data.postcode,
        local_authority=data.local_authority,
        property_type=PropertyType(data.property_type),
        constraints=PlanningConstraints(**data.constraints.model_dump()),
        notes=data.notes,
    )


@app.get("/api/properties/{address}")
async def get_property(address: str):
    """Get stored facts for a single property."""
    facts = get_store().get(address)

    if not facts:
        raise HTTPException(status_code=404, detail=f"Property '{address}' not found")

    return facts.to_dict()


@app.post("/api/properties")
async def create_property(data: PropertyCreate):
    """Store researched facts for a property."""
    try:
        facts = _to_facts(data, data.address)
        get_store().create(facts)

        return JSONResponse(content=facts.to_dict(), status_code=201)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.put("/api/properties/{address}")
async def update_property(address: str, data: PropertyCreate):
    """Replace stored facts for an existing property."""
    try:
        facts = _to_facts(data, address)
        get_store().update(facts)

        return facts.to_dict()

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.delete("/api/properties/{address}")
async def delete_property(address: str):
    """Delete stored facts for a property."""
    if not get_store().delete(address):
        raise HTTPException(status_code=404, detail=f"Property '{address}' not found")

    return {"deleted": address}


@app.post("/api/check-planning-rights")
async def check_rights(data: PlanningCheckRequest):
    """Check whether an address retains Permitted Development rights."""
    try:
        result = check_planning_rights(
            get_store(),
            data.address,
            latitude=data.latitude,
            longitude=data.longitude,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()


# Run with: uvicorn web.app:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
