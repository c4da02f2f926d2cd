import logging
import os
import secrets
from typing import Dict, Any

from fastapi import FastAPI, HTTPException, Request, Depends, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from spots_api import router as spots_router
from spot_config import (
    load_config,
    save_config,
    validate_settings,
    get_aggregation_settings,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

security = HTTPBasic()


def verify_admin(credentials: HTTPBasicCredentials = Depends(security)):
    # Username doesn't matter, only the password is checked
    correct_password = os.getenv("ADMIN_PASS", "")

    is_correct_password = bool(correct_password) and secrets.compare_digest(
        credentials.password, correct_password
    )

    if not is_correct_password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
            headers={"WWW-Authenticate": "Basic"},
        )

    return "admin"


app = FastAPI(title="Catch Map")

# Register spot endpoints
app.include_router(spots_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


# ------------------- Admin config API (JSON) -------------------


@app.get("/api/admin/spot-config")
async def get_spot_config(user: str = Depends(verify_admin)):
    """
    Return the stored config plus the values actually in effect.
    """
    try:
        cfg = load_config()
    except (OSError, ValueError) as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load config: {e}",
        )
    return {"stored": cfg, "effective": get_aggregation_settings()}


@app.post("/api/admin/spot-config")
async def update_spot_config(request: Request, user: str = Depends(verify_admin)):
    """
    Replace spot_admin.json with the posted JSON body (validated first).
    """
    try:
        new_cfg = await request.json()
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Invalid JSON payload — could not parse",
        )

    if not isinstance(new_cfg, dict):
        raise HTTPException(
            status_code=400,
            detail="Config must be a JSON object",
        )

    try:
        cleaned: Dict[str, Any] = validate_settings(new_cfg)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        save_config(cleaned)
    except OSError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to save config: {e}",
        )

    logger.info("Spot config updated: %s", cleaned)
    return {"status": "ok", "saved": True, "config": cleaned}
